"""Internal helper values and functions shared by the proxyobserver modules.

Warning:
    Apart from `UNDEFINED`, which is re-exported by the package, everything in
    this module is an internal implementation detail.
"""

import collections.abc
import enum
import types
from typing import Any


class _Undefined:
    """Type of the `UNDEFINED` sentinel. There is only ever one instance."""
    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Undefined, ())


# Marks a missing value in an AccessStep: the old value of a key that did not
# exist yet, the new value of a deletion, the receiver of a deletion.
# `None` cannot play this role because it is a perfectly valid stored value.
UNDEFINED: Any = _Undefined()

# Values of these exact types are compared by equality rather than identity
# when deciding whether a write is a no-op.
_PLAIN_SCALAR_TYPES = (str, bytes, int, float, complex, bool, type(None))

# Never treated as observable containers even though they carry a __dict__.
_OPAQUE_TYPES = (type, enum.Enum, types.ModuleType, types.FunctionType, types.MethodType,
                 types.BuiltinFunctionType)


def is_container(value: Any) -> bool:
    """Returns True if `value` should be wrapped when it is read.

    Mutable mappings and mutable sequences are containers. So are ordinary
    objects that keep their state in instance attributes. Strings, numbers,
    enum members, tuples, functions, classes and modules are not.
    """
    if isinstance(value, (collections.abc.MutableMapping, collections.abc.MutableSequence)):
        return True
    if isinstance(value, _OPAQUE_TYPES) or callable(value):
        return False
    return hasattr(value, "__dict__")


def is_same_value(old_value: Any, new_value: Any) -> bool:
    """Decides whether writing `new_value` over `old_value` changes anything.

    Objects are compared by identity. Plain scalars of the same type are
    compared by value, because two equal strings or large integers are not
    guaranteed to be the same object in Python.
    """
    if old_value is new_value:
        return True
    if type(old_value) is type(new_value) and isinstance(old_value, _PLAIN_SCALAR_TYPES):
        return old_value == new_value
    return False
