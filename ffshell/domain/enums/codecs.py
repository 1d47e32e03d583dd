# ffshell/domain/enums/codecs.py
from __future__ import annotations

from enum import StrEnum


class VideoCodec(StrEnum):
    H264 = "h264"
    H265 = "h265"
    VP9 = "vp9"
    AV1 = "av1"
    COPY = "copy"


class AudioCodec(StrEnum):
    AAC = "aac"
    MP3 = "mp3"
    OPUS = "opus"
    VORBIS = "vorbis"
    FLAC = "flac"
    PCM = "pcm"
    AC3 = "ac3"
    COPY = "copy"


class HardwareAccel(StrEnum):
    none = "none"
    nvenc = "nvenc"
    qsv = "qsv"
    vaapi = "vaapi"
    videotoolbox = "videotoolbox"
    amf = "amf"
