import math
import unittest

from proxyobserver.utils import UNDEFINED, is_container, is_same_value


class Record:
    def __init__(self):
        self.name = 'record'

    def rename(self, name):
        self.name = name


class TestIsContainer(unittest.TestCase):

    def test_containers(self):
        for value in ({}, [], bytearray(b'ab'), Record()):
            self.assertTrue(is_container(value), value)

    def test_plain_values(self):
        for value in ('s', b'b', 1, 1.5, None, True, (1,), frozenset(), UNDEFINED,
                      Record, Record().rename, len, math, lambda: None):
            self.assertFalse(is_container(value), value)


class TestIsSameValue(unittest.TestCase):

    def test_identity(self):
        items = [1, 2]
        self.assertTrue(is_same_value(items, items))
        self.assertFalse(is_same_value(items, [1, 2]))

    def test_scalars_compare_by_value(self):
        self.assertTrue(is_same_value(10 ** 20, int('1' + '0' * 20)))
        self.assertTrue(is_same_value('ab', ''.join(['a', 'b'])))
        self.assertFalse(is_same_value(1, 1.0))
        self.assertFalse(is_same_value(1, True))
        self.assertFalse(is_same_value(float('nan'), float('nan')))

    def test_undefined(self):
        self.assertTrue(is_same_value(UNDEFINED, UNDEFINED))
        self.assertFalse(is_same_value(UNDEFINED, None))


if __name__ == '__main__':
    unittest.main()
