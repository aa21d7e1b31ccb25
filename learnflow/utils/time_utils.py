"""
Time helpers.

Scheduling code never reads the wall clock directly; it receives a ``Clock``
(any zero-argument callable returning an aware UTC datetime).
"""
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Optional

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock: the current time in UTC."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes (SQLite drops the offset on round trips)."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def local_ids(now: datetime, taken: Iterable[Any], count: int = 1) -> List[int]:
    """
    Identities for records that only exist locally.

    Ids start at the epoch milliseconds of ``now`` and are consecutive. When
    the collection already holds an integer id at or above that value, they
    start right after the largest one instead, so they never collide with
    ids already in use.

    Args:
        now: Creation time
        taken: Ids already present in the collection
        count: Number of ids to allocate

    Returns:
        ``count`` distinct integer ids, none of them in ``taken``
    """
    start = int(now.timestamp() * 1000)
    used = [i for i in taken if isinstance(i, int) and not isinstance(i, bool)]
    if used:
        start = max(start, max(used) + 1)
    return list(range(start, start + count))
