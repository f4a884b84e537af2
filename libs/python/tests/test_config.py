import unittest

from proxyobserver import ReentrancyLimitError, config, proxy_observer


class TestReentrancyLimit(unittest.TestCase):

    def tearDown(self):
        config.set_reentrancy_limit(None)

    def test_default_is_unbounded(self):
        self.assertIsNone(config.get_reentrancy_limit())

    def test_set_and_clear(self):
        config.set_reentrancy_limit(3)
        self.assertEqual(config.get_reentrancy_limit(), 3)
        config.set_reentrancy_limit(None)
        self.assertIsNone(config.get_reentrancy_limit())

    def test_invalid_limits(self):
        for limit in (0, -1, 1.5, True, '3'):
            with self.assertRaises(ValueError):
                config.set_reentrancy_limit(limit)

    def test_context_manager_restores_previous(self):
        config.set_reentrancy_limit(5)
        with config.reentrancy_limit(2):
            self.assertEqual(config.get_reentrancy_limit(), 2)
        self.assertEqual(config.get_reentrancy_limit(), 5)

    def test_reentrant_write_is_observed(self):
        data = {'value': 0}
        calls = []

        def clamp(*steps):
            calls.append(steps[-1].value)
            if steps[-1].value > 10:
                proxy['value'] = 10

        proxy = proxy_observer(data, clamp)
        proxy['value'] = 15
        # The clamping write lands first; the outer write is applied after its
        # notification returns.
        self.assertEqual(calls, [15, 10])
        self.assertEqual(data['value'], 15)

    def test_runaway_observer_is_stopped(self):
        data = {'count': 0}
        calls = []

        def runaway(*steps):
            calls.append(steps[-1].value)
            proxy['count'] = steps[-1].value + 1

        proxy = proxy_observer(data, runaway)
        with config.reentrancy_limit(3):
            with self.assertRaises(ReentrancyLimitError) as ctx:
                proxy['count'] = 1
        self.assertEqual(ctx.exception.limit, 3)
        self.assertIsInstance(ctx.exception, RecursionError)
        self.assertEqual(calls, [1, 2, 3])
        self.assertEqual(data['count'], 0)

    def test_limit_of_one_forbids_write_back(self):
        data = {'a': 1, 'b': 1}

        def mirror(*steps):
            proxy['b'] = steps[-1].value

        proxy = proxy_observer(data, mirror)
        with config.reentrancy_limit(1):
            with self.assertRaises(ReentrancyLimitError):
                proxy['a'] = 2
        self.assertEqual(data, {'a': 1, 'b': 1})

    def test_counter_recovers_after_errors(self):
        def failing(*steps):
            raise KeyError('nope')

        proxy = proxy_observer({}, failing)
        with config.reentrancy_limit(1):
            for _ in range(3):
                with self.assertRaises(KeyError):
                    proxy['x'] = 1


if __name__ == '__main__':
    unittest.main()
