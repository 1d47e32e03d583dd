# ffshell/common/timecodes.py
from __future__ import annotations

import math
from typing import Optional

from ffshell.domain.errors import RequestValidationError


def parse_timecode(value: str | int | float, *, field: str = "time") -> float:
    """
    Parse a time expression into seconds.

    Accepted forms: plain seconds ("90", "12.5", 90), "MM:SS(.fff)" and
    "HH:MM:SS(.fff)". Minutes and seconds after the leading part must be < 60.
    Negative values and garbage raise RequestValidationError.
    """
    if isinstance(value, bool):
        raise RequestValidationError(f"{field}: expected a time, got {value!r}")
    if isinstance(value, (int, float)):
        seconds = float(value)
    else:
        text = str(value).strip()
        if not text:
            raise RequestValidationError(f"{field}: empty time expression")
        parts = text.split(":")
        if len(parts) > 3:
            raise RequestValidationError(f"{field}: malformed time expression {value!r}")
        try:
            nums = [float(p) for p in parts]
        except ValueError:
            raise RequestValidationError(f"{field}: malformed time expression {value!r}") from None
        if any(p.strip() == "" or p.strip().startswith(("+", "-")) for p in parts[1:]):
            raise RequestValidationError(f"{field}: malformed time expression {value!r}")
        if any(n >= 60 for n in nums[1:]):
            raise RequestValidationError(f"{field}: minutes/seconds must be below 60 in {value!r}")
        if len(parts) > 1 and any(n != int(n) for n in nums[:-1]):
            raise RequestValidationError(f"{field}: only the seconds part may be fractional in {value!r}")
        seconds = 0.0
        for n in nums:
            seconds = seconds * 60 + n

    if math.isnan(seconds) or math.isinf(seconds):
        raise RequestValidationError(f"{field}: not a finite time: {value!r}")
    if seconds < 0:
        raise RequestValidationError(f"{field}: time cannot be negative: {value!r}")
    return seconds


def parse_optional_timecode(value: Optional[str | int | float], *, field: str = "time") -> Optional[float]:
    if value is None:
        return None
    return parse_timecode(value, field=field)


def format_seconds(seconds: float) -> str:
    """Render seconds the way we pass them to ffmpeg: '10', '10.5', '0.042'."""
    text = f"{float(seconds):.3f}".rstrip("0").rstrip(".")
    return text or "0"
