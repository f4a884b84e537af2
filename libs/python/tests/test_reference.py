import unittest

from proxyobserver import (
    UNDEFINED,
    AccessStep,
    ChangeRecorder,
    is_observed,
    make_reference,
    proxy_observer,
    resolve_path_reference,
    unwrap,
)


class Node:
    def __init__(self, **kwargs):
        self.__dict__.update(kwargs)


class TestResolvePathReference(unittest.TestCase):

    def setUp(self):
        self.data = {'a': {'b': {'c': [1, 2]}}}
        self.recorder = ChangeRecorder()
        self.proxy = proxy_observer(self.data, self.recorder)

    @property
    def last(self):
        return self.recorder.changes[-1]

    def test_resolves_existing_path(self):
        self.proxy['a']['b']['c'][0] = 10
        self.assertIs(resolve_path_reference(self.last, self.data), self.data['a']['b']['c'])

    def test_single_step_chain_returns_reference(self):
        self.proxy['x'] = 1
        other = {}
        self.assertIs(resolve_path_reference(self.last, other), other)
        self.assertEqual(other, {})

    def test_accepts_plain_step_sequences(self):
        self.proxy['a']['b']['c'][1] = 20
        self.assertIs(resolve_path_reference(list(self.last.chain), self.data), self.data['a']['b']['c'])
        self.assertIs(make_reference(self.last, self.data), self.data['a']['b']['c'])

    def test_materializes_missing_levels(self):
        self.proxy['a']['b']['c'][0] = 10
        other = {}
        inner = resolve_path_reference(self.last, other)
        self.assertEqual(other, {'a': {'b': {'c': []}}})
        self.assertIs(inner, other['a']['b']['c'])

    def test_uses_recorded_old_value(self):
        chain = (
            AccessStep({}, 'settings', value=UNDEFINED, old_value={'theme': 'dark'}),
            AccessStep({}, 'theme', value='light', old_value='dark'),
        )
        other = {}
        inner = resolve_path_reference(chain, other)
        self.assertEqual(inner, {'theme': 'dark'})
        self.assertEqual(other, {'settings': {'theme': 'dark'}})

    def test_undo_after_delete(self):
        del self.proxy['a']['b']
        deleted = self.last
        container = resolve_path_reference(deleted, self.data)
        container[deleted.leaf.prop] = deleted.old_value
        self.assertEqual(self.data, {'a': {'b': {'c': [1, 2]}}})

    def test_pads_sequences(self):
        data = {'rows': [[0], [1], [2]]}
        recorder = ChangeRecorder()
        proxy = proxy_observer(data, recorder)
        proxy['rows'][2][0] = 5
        other = {'rows': []}
        inner = resolve_path_reference(recorder.changes[-1], other)
        self.assertEqual(other, {'rows': [None, None, []]})
        self.assertIs(inner, other['rows'][2])

    def test_object_attributes(self):
        tree = Node(child=Node(value=1))
        recorder = ChangeRecorder()
        proxy = proxy_observer(tree, recorder)
        proxy.child.value = 2
        replica = Node()
        inner = resolve_path_reference(recorder.changes[-1], replica)
        self.assertEqual(inner, {})
        self.assertEqual(replica.child, {})
        self.assertIs(resolve_path_reference(recorder.changes[-1], tree), tree.child)

    def test_observed_reference_materializes_silently(self):
        self.proxy['a']['b']['c'][0] = 10
        live = {}
        live_recorder = ChangeRecorder()
        live_proxy = proxy_observer(live, live_recorder)
        inner = resolve_path_reference(self.last, live_proxy)
        self.assertEqual(len(live_recorder), 0)
        self.assertTrue(is_observed(inner))
        self.assertIs(unwrap(inner), live['a']['b']['c'])
        inner.append(1)
        self.assertEqual(live_recorder.paths, [('a', 'b', 'c', 0)])


if __name__ == '__main__':
    unittest.main()
