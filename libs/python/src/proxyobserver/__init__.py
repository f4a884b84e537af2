"""proxyobserver: path-aware change observation for nested Python data.

Wrap a nested structure of dictionaries, lists and plain objects with
`proxy_observer()` and keep working with the returned proxy as if it were the
original data. Every change made through it, at any depth, calls your
observer once with the complete path from the root to the changed value,
plus the old and new value.

Getting Started:

    1.  **Install:** `pip install proxyobserver`.
    2.  **Wrap your data:**

            >>> import proxyobserver
            >>> def observer(*chain):
            ...     leaf = chain[-1]
            ...     print([step.prop for step in chain], leaf.old_value, "->", leaf.value)
            >>> data = {"a": {"b": [1, 2]}}
            >>> proxy = proxyobserver.proxy_observer(data, observer)

    3.  **Change it through the proxy:**

            >>> proxy["a"]["b"].append(3)
            ['a', 'b', 2] UNDEFINED -> 3
            >>> del proxy["a"]["b"]
            ['a', 'b'] [1, 2, 3] -> UNDEFINED
            >>> data
            {'a': {}}

    4.  **Replay recorded paths** elsewhere with `resolve_path_reference()`,
        for example to build undo on top of the notifications.

The observer is called synchronously, before the change is applied. Nothing
is cached between accesses and nothing is added to your data.
"""

import logging

# --- Version ---
from ._version import __version__

# --- Logging Setup ---
# Configure a logger for the 'proxyobserver' package.
# By default, it uses a NullHandler, so applications using this library
# must configure their own logging if they wish to see its debug output.
# Example application setup:
# import logging
# logging.basicConfig(level=logging.DEBUG)
# logging.getLogger("proxyobserver").setLevel(logging.DEBUG)
logger = logging.getLogger("proxyobserver")
if not logger.hasHandlers():
    logger.addHandler(logging.NullHandler())

# --- Sentinel for absent values in AccessStep records ---
from .utils import UNDEFINED

# --- Exceptions ---
from .exceptions import (
    ProxyObserverError,     # Base class for errors raised by proxyobserver itself.
    InvalidArgumentError,   # Observer not callable, or nothing to observe.
    ReentrancyLimitError,   # Observers nested deeper than the configured limit.
)

# --- Records delivered to observers ---
from .events import AccessStep, ObservedChange, ChangeRecorder

# --- Sink composition ---
from .sink import NotificationSink

# --- Proxies ---
from .observed import (
    proxy_observer,     # Main entry point: wrap data, get a proxy.
    wrap,               # Alias of proxy_observer.
    unwrap,             # Get the real container back from a proxy.
    is_observed,
    ObservedProxy,
    ObservedMapping,
    ObservedSequence,
    ObservedObject,
)

# --- Path replay for consumers ---
from .reference import resolve_path_reference, make_reference

# --- Settings ---
from . import config


__all__ = [
    # Version
    '__version__',

    # Logger
    'logger',

    # Sentinel
    'UNDEFINED',

    # Errors
    'ProxyObserverError',
    'InvalidArgumentError',
    'ReentrancyLimitError',

    # Records
    'AccessStep',
    'ObservedChange',
    'ChangeRecorder',

    # Sinks
    'NotificationSink',

    # Proxies
    'proxy_observer',
    'wrap',
    'unwrap',
    'is_observed',
    'ObservedProxy',
    'ObservedMapping',
    'ObservedSequence',
    'ObservedObject',

    # Path replay
    'resolve_path_reference',
    'make_reference',

    # Settings module
    'config',
]
