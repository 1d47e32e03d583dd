# ffshell/domain/enums/quality.py
from __future__ import annotations

from enum import StrEnum


class QualityPreset(StrEnum):
    low = "low"
    medium = "medium"
    high = "high"
    ultra = "ultra"


class EncoderSpeed(StrEnum):
    """x264/x265 `-preset` names, fastest first."""
    ultrafast = "ultrafast"
    superfast = "superfast"
    veryfast = "veryfast"
    faster = "faster"
    fast = "fast"
    medium = "medium"
    slow = "slow"
    slower = "slower"
    veryslow = "veryslow"
