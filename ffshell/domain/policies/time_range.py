# ffshell/domain/policies/time_range.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ffshell.common.timecodes import format_seconds, parse_optional_timecode, parse_timecode
from ffshell.domain.errors import RequestValidationError

TimeValue = str | int | float


@dataclass(frozen=True)
class TimeRange:
    """Start + duration; ffmpeg only takes a duration (-t) directly. duration=None means 'to the end'."""
    start: float = 0.0
    duration: Optional[float] = None

    @property
    def end(self) -> Optional[float]:
        return None if self.duration is None else self.start + self.duration

    def start_token(self) -> str:
        return format_seconds(self.start)

    def duration_token(self) -> Optional[str]:
        return None if self.duration is None else format_seconds(self.duration)


def normalize_time_range(
    start: Optional[TimeValue] = None,
    end: Optional[TimeValue] = None,
    duration: Optional[TimeValue] = None,
) -> TimeRange:
    """
    Fold start/end/duration into one start+duration range.
    end - start must be positive; end and duration are mutually exclusive.
    """
    s = parse_timecode(start if start is not None else 0, field="start")
    if end is not None and duration is not None:
        raise RequestValidationError("give either end or duration, not both")

    if end is not None:
        e = parse_timecode(end, field="end")
        d = e - s
        if d <= 0:
            raise RequestValidationError(
                f"end ({format_seconds(e)}s) must be after start ({format_seconds(s)}s); "
                f"computed duration {format_seconds(d)}s is not positive"
            )
        return TimeRange(start=s, duration=d)

    d = parse_optional_timecode(duration, field="duration")
    if d is not None and d <= 0:
        raise RequestValidationError(f"duration must be positive, got {duration!r}")
    return TimeRange(start=s, duration=d)
