"""Library-wide settings for proxyobserver.

There is currently a single setting, the *reentrancy limit*. Observers are
called synchronously from inside the write or delete that triggered them, so
an observer that mutates observed data triggers a nested notification. This
is useful (an observer may normalise values it is told about) but an observer
that unconditionally writes back what it observes will recurse forever.

By default no limit is applied, matching plain Python recursion: the
interpreter's own `RecursionError` eventually stops a runaway observer. When a
limit is set, `proxyobserver.ReentrancyLimitError` is raised as soon as
notifications nest deeper than the limit, before the offending observer call
and before the mutation it announces.
"""
import contextlib
from typing import Iterator, Optional

# This global variable stores the limit set through set_reentrancy_limit().
# None means notifications may nest without bound.
_reentrancy_limit: Optional[int] = None


def get_reentrancy_limit() -> Optional[int]:
    """Retrieves the maximum nesting depth for observer notifications.

    Returns:
        Optional[int]: The configured limit, or `None` if unbounded.
    """
    return _reentrancy_limit


def set_reentrancy_limit(limit: Optional[int]) -> None:
    """Sets or clears the maximum nesting depth for observer notifications.

    A limit of 1 forbids observers from mutating observed data at all; a
    limit of 2 allows one level of write-back, and so on.

    Args:
        limit (Optional[int]): The new limit, or `None` to remove it.

    Raises:
        ValueError: If `limit` is not `None` and not a positive integer.
    """
    global _reentrancy_limit
    if limit is not None:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValueError(
                "Invalid reentrancy limit. "
                "The limit must be a positive integer, or None to disable it."
            )
    _reentrancy_limit = limit


@contextlib.contextmanager
def reentrancy_limit(limit: Optional[int]) -> Iterator[None]:
    """Temporarily applies a reentrancy limit, restoring the previous one on exit.

    Example:
        >>> from proxyobserver import config
        >>> with config.reentrancy_limit(3):
        ...     proxy["count"] += 1
    """
    previous = get_reentrancy_limit()
    set_reentrancy_limit(limit)
    try:
        yield
    finally:
        set_reentrancy_limit(previous)
