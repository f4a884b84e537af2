"""Defines the records delivered to observers when observed data changes.

Every write or delete performed through an observed proxy calls the observer
once, with one `AccessStep` per container level crossed on the way from the
root to the changed property, root first. The last step (the *leaf*)
describes the actual change; the steps before it record how the leaf was
reached.

`ObservedChange` bundles one such call into a single object with convenience
accessors, and `ChangeRecorder` is a ready-made observer that collects them.
"""

from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple

from .utils import UNDEFINED


@dataclass(frozen=True)
class AccessStep:
    """
    One level crossed on the path from the observed root to a change.

    For a *traversal* step (a read that descended into a nested container),
    `value` is that nested container and `old_value` is `UNDEFINED`. For the
    *leaf* step of a write, `value` is the new value and `old_value` the
    previous one (`UNDEFINED` if the key, index or attribute did not exist).
    For the leaf step of a delete, `value` and `receiver` are `UNDEFINED` and
    `old_value` is the removed value.

    Attributes:
        target (Any): The container the operation happened on. This is the
                      real container, not a copy and not a proxy.
        prop (Any): The mapping key, sequence index (always non-negative) or
                    attribute name that was touched.
        value (Any): The value after the operation.
        old_value (Any): The value before the operation.
        receiver (Any): The proxy the operation was invoked on.
    """
    target: Any
    prop: Any
    value: Any = UNDEFINED
    old_value: Any = UNDEFINED
    receiver: Any = field(default=UNDEFINED, compare=False)

    @property
    def is_delete(self) -> bool:
        """True if this step records the removal of `prop` from `target`."""
        return self.value is UNDEFINED and self.old_value is not UNDEFINED


@dataclass(frozen=True)
class ObservedChange:
    """
    A complete chain of `AccessStep` records from a single notification.

    Attributes:
        chain (Tuple[AccessStep, ...]): The steps, root first, leaf last.
            Never empty.
    """
    chain: Tuple[AccessStep, ...]

    def __post_init__(self):
        if not self.chain:
            raise ValueError("An ObservedChange needs at least one AccessStep.")

    @classmethod
    def from_steps(cls, *steps: AccessStep) -> 'ObservedChange':
        """Builds an ObservedChange from the positional arguments an observer receives."""
        return cls(chain=tuple(steps))

    @property
    def root(self) -> AccessStep:
        return self.chain[0]

    @property
    def leaf(self) -> AccessStep:
        return self.chain[-1]

    @property
    def path(self) -> Tuple[Any, ...]:
        """The `prop` of every step, e.g. ``("three", "bar", "list", 1)``."""
        return tuple(step.prop for step in self.chain)

    @property
    def value(self) -> Any:
        return self.leaf.value

    @property
    def old_value(self) -> Any:
        return self.leaf.old_value

    @property
    def depth(self) -> int:
        """Number of container boundaries crossed before the changed property."""
        return len(self.chain) - 1


class ChangeRecorder:
    """An observer that keeps every notification it receives.

    Pass an instance as the observer of `proxy_observer()`; each write or
    delete appends one `ObservedChange` to `changes`.

    Example:
        >>> recorder = ChangeRecorder()
        >>> data = {"a": {"b": [1, 2]}}
        >>> proxy = proxy_observer(data, recorder)
        >>> proxy["a"]["b"].append(3)
        >>> recorder.changes[-1].path
        ('a', 'b', 2)
    """

    def __init__(self):
        self.changes: List[ObservedChange] = []

    def __call__(self, *steps: AccessStep) -> None:
        self.changes.append(ObservedChange.from_steps(*steps))

    def __len__(self) -> int:
        return len(self.changes)

    @property
    def paths(self) -> List[Tuple[Any, ...]]:
        return [change.path for change in self.changes]

    def clear(self) -> None:
        self.changes.clear()

    def __repr__(self) -> str:
        return f"ChangeRecorder({len(self.changes)} changes)"


def steps_of(observed: Any) -> Sequence[AccessStep]:
    """Returns the step chain of an `ObservedChange`, or `observed` itself if
    it already is a sequence of steps."""
    if isinstance(observed, ObservedChange):
        return observed.chain
    chain = getattr(observed, "chain", None)
    if chain is not None:
        return chain
    return observed
