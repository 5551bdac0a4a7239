"""
Rush Hour Evaluator — decides whether a wall-clock time falls inside
any configured daily rush-hour window.
"""

from datetime import datetime, time, tzinfo
from typing import Iterable, Optional

from app.config import RushHourWindow


def to_local(moment: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Express `moment` on the service's wall clock.

    Timestamps carrying an offset are converted to `tz` (the host's local
    zone when None); naive timestamps are already local and pass through.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(tz)


def time_of_day(moment: datetime, tz: Optional[tzinfo] = None) -> time:
    """Project a timestamp onto its local hour and minute; date and seconds are dropped."""
    local = to_local(moment, tz)
    return time(local.hour, local.minute)


def matching_window(
    moment: datetime,
    windows: Iterable[RushHourWindow],
    tz: Optional[tzinfo] = None,
) -> Optional[RushHourWindow]:
    """Return the first window containing `moment`, or None."""
    t = time_of_day(moment, tz)
    for window in windows:
        if window.start <= t <= window.end:
            return window
    return None


def is_rush_hour(
    moment: datetime,
    windows: Iterable[RushHourWindow],
    tz: Optional[tzinfo] = None,
) -> bool:
    """True iff `moment` lies inside any window, endpoints included."""
    return matching_window(moment, windows, tz) is not None
