import unittest

from proxyobserver import AccessStep, InvalidArgumentError, NotificationSink, proxy_observer


class TestNotificationSink(unittest.TestCase):
    """Unit tests for sink composition."""

    def setUp(self):
        self.calls = []
        self.sink = NotificationSink(self.record)
        self.step_a = AccessStep({}, 'a')
        self.step_b = AccessStep({}, 'b')
        self.leaf = AccessStep({}, 'c', value=1)

    def record(self, *steps):
        self.calls.append(steps)
        return 'ignored'

    def test_rejects_non_callable(self):
        with self.assertRaises(InvalidArgumentError):
            NotificationSink(object())

    def test_call_without_steps(self):
        self.assertIsNone(self.sink(self.leaf))
        self.assertEqual(self.calls, [(self.leaf,)])

    def test_extend_accumulates_in_order(self):
        deeper = self.sink.extend(self.step_a).extend(self.step_b)
        deeper(self.leaf)
        self.assertEqual(len(self.calls), 1)
        self.assertEqual([step.prop for step in self.calls[0]], ['a', 'b', 'c'])
        self.assertEqual(deeper.steps, (self.step_a, self.step_b))
        self.assertEqual(len(deeper), 2)

    def test_extend_leaves_original_untouched(self):
        first = self.sink.extend(self.step_a)
        second = self.sink.extend(self.step_b)
        self.assertEqual(self.sink.steps, ())
        first(self.leaf)
        second(self.leaf)
        self.assertEqual([step.prop for step in self.calls[0]], ['a', 'c'])
        self.assertEqual([step.prop for step in self.calls[1]], ['b', 'c'])

    def test_composition_is_associative(self):
        left = self.sink.extend(self.step_a).extend(self.step_b)
        right = NotificationSink(self.sink.extend(self.step_a)).extend(self.step_b)
        left(self.leaf)
        right(self.leaf)
        self.assertEqual(self.calls[0], self.calls[1])

    def test_variadic_leaf(self):
        self.sink.extend(self.step_a)(self.step_b, self.leaf)
        self.assertEqual([step.prop for step in self.calls[0]], ['a', 'b', 'c'])

    def test_callback_exceptions_propagate(self):
        def failing(*steps):
            raise ValueError('boom')

        with self.assertRaises(ValueError):
            NotificationSink(failing)(self.leaf)

    def test_sink_as_observer(self):
        proxy = proxy_observer({'x': {'y': 1}}, self.sink.extend(self.step_a))
        proxy['x']['y'] = 2
        self.assertEqual([step.prop for step in self.calls[0]], ['a', 'x', 'y'])

    def test_repr_lists_path(self):
        self.assertIn("path=['a', 'b']", repr(self.sink.extend(self.step_a).extend(self.step_b)))


if __name__ == '__main__':
    unittest.main()
