# ffshell/domain/enums/modes.py
from __future__ import annotations

from enum import StrEnum


class SubtitleMode(StrEnum):
    burn = "burn"     # rendered into the picture, needs a re-encode
    embed = "embed"   # added as a selectable subtitle stream


class OptimizeProfile(StrEnum):
    web = "web"
    mobile = "mobile"
    archive = "archive"


class Tool(StrEnum):
    ffmpeg = "ffmpeg"
    ffprobe = "ffprobe"
