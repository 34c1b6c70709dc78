from __future__ import annotations

import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Protocol

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
NANOS_PER_MILLI = 1_000_000


class Clock(Protocol):
    def time_ns(self) -> int:
        """Current wall-clock time as integer nanoseconds since the Unix epoch."""
        ...


class SystemClock(Clock):
    def time_ns(self) -> int:
        return time.time_ns()


def current_date(clock: Clock) -> datetime:
    """
    Convert the clock's nanosecond reading into a UTC datetime with millisecond
    resolution (nanoseconds / 1_000_000 -> epoch millis, truncated like a JS Date).
    """
    millis = int(clock.time_ns()) // NANOS_PER_MILLI
    return EPOCH + timedelta(milliseconds=millis)


def new_document_id() -> str:
    return str(uuid.uuid4())
