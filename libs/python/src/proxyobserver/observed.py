"""Provides `proxy_observer()`, which makes nested Python data observable.

Wrap a dictionary, a list, or an ordinary object once, hand over a single
callback, and keep using the returned proxy exactly like the original data:

    >>> from proxyobserver import proxy_observer
    >>> data = {"three": {"bar": {"list": [1, 2, 3]}}}
    >>> def observer(*chain):
    ...     print([step.prop for step in chain], chain[-1].old_value, chain[-1].value)
    >>> proxy = proxy_observer(data, observer)
    >>> proxy["three"]["bar"]["list"][1] = 9
    ['three', 'bar', 'list', 1] 2 9
    >>> data["three"]["bar"]["list"]
    [1, 9, 3]

How it works:

1.  Reading a plain value (a number, a string, None, ...) through a proxy
    returns that value unchanged.
2.  Reading a nested container returns a *new* proxy around it. The new proxy
    gets the parent's `NotificationSink` extended by one `AccessStep`
    recording where it came from. Nothing is notified yet, and nothing is
    cached: every read builds a fresh proxy.
3.  Writing or deleting through any proxy calls its sink once with a final
    step describing the change, so the observer receives the whole path from
    the root, root first. Only then is the real container modified.

Notes:

*   Writing a value that is already stored (the same object, or an equal
    plain scalar of the same type) notifies nobody. Deleting something that
    does not exist notifies nobody and is not an error.
*   The observer is called *before* the container is modified. If the
    modification itself then fails (a read-only attribute, a list index out
    of range), the observer has already been told about a change that did
    not happen. The container's exception is propagated unchanged.
*   Observers may modify observed data themselves. Such writes are
    intercepted like any other and notify again, from inside the first
    notification. See `proxyobserver.config` for an optional depth limit.
*   Changes made directly to the original data, bypassing the proxy, are not
    observed.
*   Proxies never end up inside your data: assigning a proxy stores the
    container it wraps.
"""

import collections
import collections.abc
import inspect
import operator
import types
from typing import Any, Iterator

from .events import AccessStep
from .exceptions import InvalidArgumentError
from .sink import NotificationSink, ObserverCallback
from .utils import UNDEFINED, is_container, is_same_value

# Marker for "no default given" in pop().
_NO_DEFAULT = object()


class ObservedProxy:
    """Base class of all proxies returned by `proxy_observer()`.

    Holds the wrapped container and the sink to notify, and forwards the
    read-only protocols (`len`, `iter`, `in`, `bool`, `str`, `==`) to the
    wrapped container. Proxies are not hashable, like the containers they
    usually wrap.
    """
    # Names stored on the proxy itself. Everything else belongs to the target.
    _observed_internal_attrs = ('_observed_target', '_observed_sink')
    __slots__ = _observed_internal_attrs

    def __init__(self, target: Any, sink: NotificationSink):
        object.__setattr__(self, '_observed_target', target)
        object.__setattr__(self, '_observed_sink', sink)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._observed_target!r})"

    def __str__(self) -> str:
        return str(self._observed_target)

    def __eq__(self, other: Any) -> bool:
        """Compares the wrapped containers, unwrapping `other` if it is a proxy too."""
        return self._observed_target == unwrap(other)

    __hash__ = None  # type: ignore[assignment]

    def __bool__(self) -> bool:
        return bool(self._observed_target)

    def __len__(self) -> int:
        return len(self._observed_target)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._observed_target)

    def __contains__(self, item: Any) -> bool:
        return unwrap(item) in self._observed_target


def _descend(proxy: ObservedProxy, prop: Any, value: Any) -> Any:
    """Returns `value` as read through `proxy` at `prop`.

    Plain values come back as they are. Containers come back wrapped in a new
    proxy whose sink records this read as an extra traversal step.
    """
    if not is_container(value):
        return value
    step = AccessStep(proxy._observed_target, prop, value, UNDEFINED, proxy)
    return _make_proxy(value, proxy._observed_sink.extend(step))


def _announce(proxy: ObservedProxy, prop: Any, value: Any, old_value: Any) -> bool:
    """Notifies the observer that `prop` is about to change from `old_value` to `value`.

    Returns False, without notifying, if the write would not change anything.
    The caller must perform the mutation only when True is returned.
    """
    if is_same_value(old_value, value):
        return False
    proxy._observed_sink(AccessStep(proxy._observed_target, prop, value, old_value, proxy))
    return True


def _announce_delete(proxy: ObservedProxy, prop: Any, old_value: Any) -> None:
    proxy._observed_sink(AccessStep(proxy._observed_target, prop, UNDEFINED, old_value, UNDEFINED))


class ObservedMapping(ObservedProxy, collections.abc.MutableMapping):
    """Proxy for dictionaries and other mutable mappings.

    Every `MutableMapping` method is available. The bulk ones (`update`,
    `setdefault`, `pop`, `popitem`, `clear`) are built on the intercepted
    `proxy[key] = value` and `del proxy[key]`, so each key they touch is
    reported separately.

    Reading a missing key of a `collections.defaultdict` stores the factory's
    value through the proxy, so the insertion is reported like any other
    write. `setdefault` always stores the given default, as it does on the
    defaultdict itself.
    """
    __slots__ = ()

    def __getitem__(self, key: Any) -> Any:
        target = self._observed_target
        if (key not in target and isinstance(target, collections.defaultdict)
                and target.default_factory is not None):
            self[key] = target.default_factory()
        return _descend(self, key, target[key])

    def setdefault(self, key: Any, default: Any = None) -> Any:
        if key not in self._observed_target:
            self[key] = default
        return self[key]

    def get(self, key: Any, default: Any = None) -> Any:
        target = self._observed_target
        if key not in target:
            return default
        return _descend(self, key, target[key])

    def __setitem__(self, key: Any, value: Any) -> None:
        target = self._observed_target
        value = unwrap(value)
        # `in` first, so that mappings like defaultdict do not create the key.
        old_value = target[key] if key in target else UNDEFINED
        if _announce(self, key, value, old_value):
            target[key] = value

    def __delitem__(self, key: Any) -> None:
        target = self._observed_target
        if key not in target:
            return
        _announce_delete(self, key, target[key])
        del target[key]

    def pop(self, key: Any, default: Any = _NO_DEFAULT) -> Any:
        """Removes `key` and returns its (unwrapped) value.

        Raises:
            KeyError: If `key` is missing and no `default` was given.
        """
        target = self._observed_target
        if key not in target:
            if default is _NO_DEFAULT:
                raise KeyError(key)
            return default
        value = target[key]
        del self[key]
        return value

    def popitem(self) -> Any:
        """Removes and returns a ``(key, value)`` pair, last inserted first for dicts.

        Raises:
            KeyError: If the mapping is empty.
        """
        target = self._observed_target
        if not target:
            raise KeyError('popitem(): dictionary is empty')
        if isinstance(target, dict):
            key = next(reversed(target))
        else:
            key = next(iter(target))
        return key, self.pop(key)


def _position(target: Any, index: Any) -> Any:
    """Converts a possibly negative index into the non-negative position it refers to.

    Indices that are out of range are returned as given, so that the list
    itself gets to raise its usual IndexError.
    """
    index = operator.index(index)
    if index < 0 and index + len(target) >= 0:
        return index + len(target)
    return index


def _in_range(target: Any, position: int) -> bool:
    return 0 <= position < len(target)


def _reject_slice(index: Any, action: str) -> None:
    if isinstance(index, slice):
        raise TypeError(
            f"Slice {action} is not supported on an observed sequence; "
            f"modify the items one at a time instead."
        )


class ObservedSequence(ObservedProxy, collections.abc.MutableSequence):
    """Proxy for lists and other mutable sequences.

    Indices reported to observers are always non-negative, so ``proxy[-1] = x``
    on a three item list is reported with ``prop == 2``.

    Structural changes are reported as single steps: `insert` and `append`
    report the new position with an `UNDEFINED` old value, `pop` and
    ``del proxy[i]`` report the removed item with an `UNDEFINED` new value.
    `extend`, `remove`, `reverse`, `clear` and ``+=`` are made of those
    primitives and notify once per primitive. Slice assignment, slice
    deletion and `sort` have no step-by-step representation and are not
    supported; reading a slice returns a plain, unobserved list.
    """
    __slots__ = ()

    def __getitem__(self, index: Any) -> Any:
        target = self._observed_target
        if isinstance(index, slice):
            return target[index]
        position = _position(target, index)
        return _descend(self, position, target[position])

    def __iter__(self) -> Iterator[Any]:
        for index, value in enumerate(self._observed_target):
            yield _descend(self, index, value)

    def __setitem__(self, index: Any, value: Any) -> None:
        _reject_slice(index, "assignment")
        target = self._observed_target
        value = unwrap(value)
        position = _position(target, index)
        old_value = target[position] if _in_range(target, position) else UNDEFINED
        if _announce(self, position, value, old_value):
            target[position] = value

    def __delitem__(self, index: Any) -> None:
        _reject_slice(index, "deletion")
        target = self._observed_target
        position = _position(target, index)
        if not _in_range(target, position):
            return
        _announce_delete(self, position, target[position])
        del target[position]

    def insert(self, index: Any, value: Any) -> None:
        """Inserts `value` before `index`, clamping the index like `list.insert`."""
        target = self._observed_target
        value = unwrap(value)
        position = min(max(_position(target, index), 0), len(target))
        # Always a change, even if `value` happens to be UNDEFINED.
        self._observed_sink(AccessStep(target, position, value, UNDEFINED, self))
        target.insert(position, value)

    def pop(self, index: Any = -1) -> Any:
        """Removes the item at `index` (default last) and returns it unwrapped.

        Raises:
            IndexError: If the sequence is empty or `index` is out of range.
        """
        target = self._observed_target
        if not target:
            raise IndexError("pop from empty list")
        position = _position(target, index)
        if not _in_range(target, position):
            raise IndexError("pop index out of range")
        value = target[position]
        del self[position]
        return value

    def reverse(self) -> None:
        target = self._observed_target
        n = len(target)
        for i in range(n // 2):
            j = n - i - 1
            self[i], self[j] = target[j], target[i]

    def index(self, value: Any, *args: Any) -> int:
        return self._observed_target.index(unwrap(value), *args)

    def count(self, value: Any) -> int:
        return self._observed_target.count(unwrap(value))


def _has_own_attribute(obj: Any, name: str) -> bool:
    """True if ``del obj.name`` would remove something.

    That is an entry in the instance `__dict__`, an assigned slot, or a class
    descriptor that handles deletion itself (a property with a deleter).
    Plain class attributes do not count.
    """
    if name in getattr(obj, '__dict__', ()):
        return True
    descriptor = inspect.getattr_static(type(obj), name, None)
    if isinstance(descriptor, types.MemberDescriptorType):
        # A __slots__ entry; it only counts once it has been assigned.
        return hasattr(obj, name)
    if isinstance(descriptor, property):
        return descriptor.fdel is not None
    return hasattr(type(descriptor), '__delete__')


class ObservedObject(ObservedProxy):
    """Proxy for ordinary objects, observed through attribute access.

    Attribute lookups fall back to the class as usual: reading ``proxy.name``
    for a name only defined on the class returns the class value, and
    assigning it reports that class value as `old_value` before creating the
    instance attribute.

    Methods defined on the object's class are returned bound to the proxy
    rather than to the object. Inside such a method, ``self`` is the proxy,
    so assignments like ``self.total = 0`` are observed too, with the proxy
    as the step's `receiver`. The proxy reports the object's class as its
    `__class__`, so ``super()`` and `isinstance` checks inside those methods
    work as they would on the object.

    Deleting an attribute the instance does not hold (a plain class
    attribute, or a name that does not exist) does nothing. Properties with
    a deleter are notified and then deleted as usual.
    """
    __slots__ = ()

    @property
    def __class__(self):
        return type(object.__getattribute__(self, '_observed_target'))

    def __getattr__(self, name: str) -> Any:
        if name in ObservedProxy._observed_internal_attrs:
            # Only reached before __init__ has run (e.g. while copying).
            raise AttributeError(name)
        target = self._observed_target
        value = getattr(target, name)
        if inspect.ismethod(value) and value.__self__ is target:
            return types.MethodType(value.__func__, self)
        return _descend(self, name, value)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ObservedProxy._observed_internal_attrs:
            object.__setattr__(self, name, value)
            return
        target = self._observed_target
        value = unwrap(value)
        old_value = getattr(target, name, UNDEFINED)
        if _announce(self, name, value, old_value):
            setattr(target, name, value)

    def __delattr__(self, name: str) -> None:
        if name in ObservedProxy._observed_internal_attrs:
            raise AttributeError(f"Cannot delete internal attribute '{name}' of {type(self).__name__}")
        target = self._observed_target
        if not _has_own_attribute(target, name):
            return
        _announce_delete(self, name, getattr(target, name, UNDEFINED))
        delattr(target, name)


def _make_proxy(target: Any, sink: NotificationSink) -> ObservedProxy:
    if isinstance(target, collections.abc.MutableMapping):
        return ObservedMapping(target, sink)
    if isinstance(target, collections.abc.MutableSequence):
        return ObservedSequence(target, sink)
    return ObservedObject(target, sink)


def proxy_observer(target: Any, observer: ObserverCallback) -> ObservedProxy:
    """Wraps `target` so that every change made through the result is reported to `observer`.

    Args:
        target: The data to observe: a dict (or other mutable mapping), a
            list (or other mutable sequence), or an object with attributes.
            It is not copied; changes made through the proxy modify it.
        observer: Called as ``observer(*steps)`` once per write or delete,
            with one `AccessStep` per level from the root to the change.
            A `NotificationSink` may be passed instead of a plain callable.

    Returns:
        ObservedProxy: An `ObservedMapping`, `ObservedSequence` or
        `ObservedObject` over `target`.

    Raises:
        InvalidArgumentError: If `observer` is not callable, or if `target`
            is a plain value such as a string or a number.
    """
    if isinstance(observer, NotificationSink):
        sink = observer
    else:
        sink = NotificationSink(observer)
    if not is_container(target):
        raise InvalidArgumentError(
            f"Expecting a mapping, a sequence or an object with attributes to observe, "
            f"got {type(target).__name__}."
        )
    return _make_proxy(target, sink)


# Short alias.
wrap = proxy_observer


def unwrap(value: Any) -> Any:
    """Returns the container behind an observed proxy, or `value` itself if it is not one."""
    if isinstance(value, ObservedProxy):
        return object.__getattribute__(value, '_observed_target')
    return value


def is_observed(value: Any) -> bool:
    return isinstance(value, ObservedProxy)
