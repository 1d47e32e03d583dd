# ffshell/domain/policies/quality.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional

from ffshell.domain.enums.codecs import VideoCodec
from ffshell.domain.enums.quality import EncoderSpeed, QualityPreset
from ffshell.domain.errors import RequestValidationError
from ffshell.domain.policies.encoders import check_crf

BITRATE_PATTERN = r"^\d+(\.\d+)?[kKM]?$"
_BITRATE_RE = re.compile(BITRATE_PATTERN)


@dataclass(frozen=True)
class PresetValues:
    crf: Dict[VideoCodec, int]
    speed: EncoderSpeed
    audio_bitrate: str


PRESETS: Dict[QualityPreset, PresetValues] = {
    QualityPreset.low: PresetValues(
        crf={VideoCodec.H264: 28, VideoCodec.H265: 32, VideoCodec.VP9: 40, VideoCodec.AV1: 40},
        speed=EncoderSpeed.veryfast,
        audio_bitrate="96k",
    ),
    QualityPreset.medium: PresetValues(
        crf={VideoCodec.H264: 23, VideoCodec.H265: 28, VideoCodec.VP9: 33, VideoCodec.AV1: 34},
        speed=EncoderSpeed.medium,
        audio_bitrate="128k",
    ),
    QualityPreset.high: PresetValues(
        crf={VideoCodec.H264: 20, VideoCodec.H265: 24, VideoCodec.VP9: 28, VideoCodec.AV1: 28},
        speed=EncoderSpeed.slow,
        audio_bitrate="192k",
    ),
    QualityPreset.ultra: PresetValues(
        crf={VideoCodec.H264: 17, VideoCodec.H265: 20, VideoCodec.VP9: 23, VideoCodec.AV1: 22},
        speed=EncoderSpeed.slower,
        audio_bitrate="320k",
    ),
}


@dataclass(frozen=True)
class ResolvedQuality:
    crf: Optional[int] = None
    video_bitrate: Optional[str] = None
    audio_bitrate: Optional[str] = None
    speed: Optional[EncoderSpeed] = None


def bitrate_kbps(bitrate: str) -> float:
    """'2500k' -> 2500.0, '4M' -> 4000.0, '128000' -> 128.0"""
    if not _BITRATE_RE.match(str(bitrate)):
        raise RequestValidationError(f"malformed bitrate {bitrate!r}")
    unit = bitrate[-1].lower()
    if unit == "k":
        return float(bitrate[:-1])
    if unit == "m":
        return float(bitrate[:-1]) * 1000
    return float(bitrate) / 1000


def resolve_quality(
    codec: VideoCodec,
    *,
    preset: Optional[QualityPreset] = None,
    crf: Optional[int] = None,
    video_bitrate: Optional[str] = None,
    audio_bitrate: Optional[str] = None,
    speed: Optional[EncoderSpeed] = None,
) -> ResolvedQuality:
    """
    Explicit values win; the preset only fills what the caller left out.
    Rate control is one value: an explicit crf or video_bitrate means the
    preset's crf is not used.
    """
    for label, br in (("video_bitrate", video_bitrate), ("audio_bitrate", audio_bitrate)):
        if br is not None and not _BITRATE_RE.match(str(br)):
            raise RequestValidationError(f"{label}: malformed bitrate {br!r}")

    if codec is VideoCodec.COPY:
        # stream copy: no video rate control at all
        values = PRESETS.get(preset) if preset else None
        return ResolvedQuality(audio_bitrate=audio_bitrate or (values.audio_bitrate if values else None))

    if crf is not None:
        check_crf(codec, crf)

    values = PRESETS.get(preset) if preset else None
    if values is not None:
        if crf is None and video_bitrate is None:
            crf = values.crf[codec]
        audio_bitrate = audio_bitrate or values.audio_bitrate
        speed = speed or values.speed

    return ResolvedQuality(crf=crf, video_bitrate=video_bitrate, audio_bitrate=audio_bitrate, speed=speed)
