# ffshell/domain/enums/file_format.py
from __future__ import annotations

from enum import StrEnum
from pathlib import Path


class VideoFormats(StrEnum):
    MP4 = "mp4"
    MKV = "mkv"
    MOV = "mov"
    AVI = "avi"
    WEBM = "webm"
    M4V = "m4v"
    MPEG = "mpeg"
    MPG = "mpg"
    TS = "ts"
    M2TS = "m2ts"
    FLV = "flv"


class AudioFormats(StrEnum):
    MP3 = "mp3"
    AAC = "aac"
    M4A = "m4a"
    WAV = "wav"
    FLAC = "flac"
    OPUS = "opus"
    OGG = "ogg"


class ImageFormats(StrEnum):
    JPG = "jpg"
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"
    BMP = "bmp"


# containers whose moov atom can be moved up front with -movflags +faststart
FASTSTART_FORMATS = frozenset({VideoFormats.MP4, VideoFormats.MOV, VideoFormats.M4V, AudioFormats.M4A})


def suffix_of(path: str | Path) -> str:
    """Lowercased extension without the dot ('' when there is none)."""
    return Path(path).suffix.lstrip(".").lower()
