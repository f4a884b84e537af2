"""Replays a recorded change path against another copy of the data.

Observers receive chains of `AccessStep` records. A consumer that keeps those
chains around (to implement undo, to mirror changes to another process, ...)
eventually needs to find the container a recorded change applies to in a
data structure that may have moved on since: keys may have been deleted,
lists shortened. `resolve_path_reference()` walks the recorded path and
recreates whatever is missing on the way.

    >>> recorder = ChangeRecorder()
    >>> proxy = proxy_observer({"a": {"b": 1}}, recorder)
    >>> proxy["a"]["b"] = 2
    >>> other = {}
    >>> resolve_path_reference(recorder.changes[-1], other)
    {}
    >>> other
    {'a': {}}
"""

import collections.abc
from typing import Any

from .events import AccessStep, steps_of
from .observed import unwrap
from .utils import UNDEFINED


def _is_item_addressed(container: Any) -> bool:
    return isinstance(container, (collections.abc.Mapping, collections.abc.Sequence))


def _has_prop(container: Any, prop: Any) -> bool:
    if isinstance(container, collections.abc.Mapping):
        return prop in container
    if isinstance(container, collections.abc.Sequence):
        return isinstance(prop, int) and 0 <= prop < len(container)
    return hasattr(container, prop)


def _replacement_for(step: AccessStep) -> Any:
    """The value used to recreate a level that has gone missing."""
    if step.old_value is not UNDEFINED:
        return step.old_value
    if isinstance(step.value, collections.abc.MutableSequence):
        return []
    return {}


def _materialize(container: Any, step: AccessStep) -> None:
    value = _replacement_for(step)
    if isinstance(container, collections.abc.MutableMapping):
        container[step.prop] = value
    elif isinstance(container, collections.abc.MutableSequence):
        container.extend([None] * (step.prop - len(container)))
        container.append(value)
    else:
        setattr(container, step.prop, value)


def resolve_path_reference(observed: Any, reference: Any) -> Any:
    """Returns the container in `reference` that the leaf of `observed` belongs to.

    Every step of the chain except the leaf is followed from `reference`, in
    order. A key, index or attribute that no longer exists is recreated with
    the step's recorded `old_value`, or with an empty list or dict when no old
    value was recorded (the case for plain traversal steps). Lists are padded
    with None up to a missing index.

    If `reference` is an observed proxy, missing levels are recreated on the
    underlying data without notifying anyone, and the result is itself a
    proxy, so changes made to it are observed.

    Args:
        observed: An `ObservedChange`, or the sequence of `AccessStep`
            records an observer received (leaf included).
        reference: The root of the data to resolve the path in.

    Returns:
        The innermost container, ready for the leaf's `prop` to be set or
        deleted on it. With a single-step chain this is `reference` itself.
    """
    chain = list(steps_of(observed))[:-1]
    for step in chain:
        container = unwrap(reference)
        if not _has_prop(container, step.prop):
            _materialize(container, step)
        if _is_item_addressed(container):
            reference = reference[step.prop]
        else:
            reference = getattr(reference, step.prop)
    return reference


# Alias.
make_reference = resolve_path_reference
