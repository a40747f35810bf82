"""Calendar dates typed on the command line, as UTC instants.

A window given as ``--starts-at 2026-03-01 --ends-at 2026-03-31`` covers
both days in full: it opens at the first instant of its start date and
closes at the last instant of its end date.
"""

from __future__ import annotations

from datetime import datetime, time, timezone


def utc_start_of_day(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    return datetime.combine(value.date(), time.min, tzinfo=timezone.utc)


def utc_end_of_day(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    return datetime.combine(value.date(), time.max, tzinfo=timezone.utc)
