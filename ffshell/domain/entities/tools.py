# ffshell/domain/entities/tools.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class ToolReport:
    """What the capability query found on this machine."""
    ffmpeg_available: bool
    ffprobe_available: bool
    ffmpeg_version: Optional[str] = None
    ffprobe_version: Optional[str] = None
    hwaccels: Tuple[str, ...] = field(default_factory=tuple)
    encoders: Tuple[str, ...] = field(default_factory=tuple)

    def has_encoder(self, name: str) -> bool:
        return name in self.encoders
