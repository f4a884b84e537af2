"""Provides `NotificationSink`, the composable callback behind every proxy.

A sink is an observer callback together with the `AccessStep` records that
were captured while descending to the proxy that owns it. Reading a nested
container through a proxy does not notify anyone; it *extends* the sink with
one more step and hands the extended sink to the nested proxy. When a write
or delete finally happens, the nested proxy calls its sink with the leaf step
and the observer receives the whole chain, root first.

Sinks are immutable. Extending one returns a new sink and leaves the original
untouched, so two reads of the same nested value never interfere and no
parent pointers are kept anywhere:

    >>> sink = NotificationSink(print)
    >>> deeper = sink.extend(step_a).extend(step_b)
    >>> deeper(leaf)     # same as print(step_a, step_b, leaf)
    >>> sink(leaf)       # still just print(leaf)
"""

from typing import Any, Callable, Tuple

from . import logger
from . import config
from .events import AccessStep
from .exceptions import InvalidArgumentError, ReentrancyLimitError

# Type Alias for clarity: the function supplied by the user. It receives one or
# more AccessStep records, root first. Its return value is ignored.
ObserverCallback = Callable[..., Any]

# How many notifications are currently being delivered, across all sinks.
# Only consulted when a reentrancy limit is configured.
_active_notifications = 0


class NotificationSink:
    """An observer callback plus the chain of steps leading to one container.

    Args:
        callback: Any callable accepting ``*steps``.
        steps: Steps already captured between the root and the container
            this sink belongs to.

    Raises:
        InvalidArgumentError: If `callback` is not callable.
    """
    __slots__ = ('_callback', '_steps')

    def __init__(self, callback: ObserverCallback, steps: Tuple[AccessStep, ...] = ()):
        if not callable(callback):
            raise InvalidArgumentError(
                f"Expecting observer to be a callable function, got {type(callback).__name__}."
            )
        self._callback = callback
        self._steps = tuple(steps)

    @property
    def callback(self) -> ObserverCallback:
        return self._callback

    @property
    def steps(self) -> Tuple[AccessStep, ...]:
        return self._steps

    def __len__(self) -> int:
        return len(self._steps)

    def extend(self, step: AccessStep) -> 'NotificationSink':
        """Returns a new sink that records `step` after the steps of this one."""
        return NotificationSink(self._callback, self._steps + (step,))

    def __call__(self, *leaf_steps: AccessStep) -> None:
        """Delivers the accumulated chain followed by `leaf_steps` to the observer.

        The observer is called exactly once and synchronously. Whatever it
        raises propagates to the code performing the mutation, and the
        mutation is then not applied.

        Raises:
            ReentrancyLimitError: If a reentrancy limit is configured and this
                notification would nest deeper than it.
        """
        global _active_notifications
        chain = self._steps + leaf_steps
        limit = config.get_reentrancy_limit()
        if limit is not None and _active_notifications >= limit:
            raise ReentrancyLimitError(limit)

        if chain:
            logger.debug(f"Notifying observer {self._callback!r} of a change at depth "
                         f"{len(chain) - 1} (leaf prop {chain[-1].prop!r})")

        _active_notifications += 1
        try:
            self._callback(*chain)
        finally:
            _active_notifications -= 1

    def __repr__(self) -> str:
        path = ", ".join(repr(step.prop) for step in self._steps)
        return f"NotificationSink({self._callback!r}, path=[{path}])"
