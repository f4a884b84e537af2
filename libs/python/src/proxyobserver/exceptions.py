"""Custom exceptions for the proxyobserver library.

Only problems detected by proxyobserver itself get their own exception types.
Failures of the wrapped containers (assigning to a read-only attribute,
indexing past the end of a list, and so on) are never caught or translated:
they reach the caller exactly as the container raised them.
"""


class ProxyObserverError(Exception):
    """Base class for all errors explicitly raised by proxyobserver.

    Catching this exception handles anything the library itself rejects,
    while letting the wrapped container's own errors through.
    """
    pass


class InvalidArgumentError(ProxyObserverError, TypeError):
    """Raised when `proxy_observer()` (or a `NotificationSink`) is given an
    argument it cannot work with.

    The usual cause is an observer that is not callable. It is also raised
    when the value to observe is not a container (a mapping, a sequence or
    an object with attributes), since there would be nothing to intercept.

    It derives from `TypeError`, so existing ``except TypeError`` handlers
    keep working.

    Example:
        >>> from proxyobserver import proxy_observer
        >>> try:
        ...     proxy_observer({"a": 1}, "not a function")
        ... except InvalidArgumentError as e:
        ...     print(e)
        Expecting observer to be a callable function, got str.
    """
    pass


class ReentrancyLimitError(ProxyObserverError, RecursionError):
    """Raised when notifications nest deeper than the configured limit.

    An observer may itself mutate observed data, which triggers another
    notification from inside the first one. This is allowed and unbounded by
    default. When a limit has been set with
    `proxyobserver.config.set_reentrancy_limit()`, the notification that
    would exceed it raises this error instead of calling the observer, and
    the pending mutation is not applied.

    Attributes:
        limit (int): The nesting limit that was exceeded.
    """
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(
            f"Observer notifications nested deeper than the configured limit of {limit}. "
            f"An observer is probably mutating the data it observes on every change."
        )
