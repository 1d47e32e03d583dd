# ffshell/domain/policies/profiles.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ffshell.domain.enums.codecs import AudioCodec, VideoCodec
from ffshell.domain.enums.modes import OptimizeProfile
from ffshell.domain.enums.quality import EncoderSpeed


@dataclass(frozen=True)
class OptimizeSettings:
    video_codec: VideoCodec
    crf: int
    speed: EncoderSpeed
    max_height: Optional[int]
    audio_codec: AudioCodec
    audio_bitrate: str
    faststart: bool = True
    pixel_format: str = "yuv420p"
    extra_video_args: Tuple[str, ...] = ()


OPTIMIZE_PROFILES: Dict[OptimizeProfile, OptimizeSettings] = {
    OptimizeProfile.web: OptimizeSettings(
        video_codec=VideoCodec.H264,
        crf=23,
        speed=EncoderSpeed.medium,
        max_height=1080,
        audio_codec=AudioCodec.AAC,
        audio_bitrate="128k",
        extra_video_args=("-profile:v", "high"),
    ),
    OptimizeProfile.mobile: OptimizeSettings(
        video_codec=VideoCodec.H264,
        crf=26,
        speed=EncoderSpeed.fast,
        max_height=720,
        audio_codec=AudioCodec.AAC,
        audio_bitrate="96k",
        extra_video_args=("-profile:v", "main", "-level", "4.0"),
    ),
    OptimizeProfile.archive: OptimizeSettings(
        video_codec=VideoCodec.H265,
        crf=20,
        speed=EncoderSpeed.slow,
        max_height=None,
        audio_codec=AudioCodec.AAC,
        audio_bitrate="192k",
        faststart=True,
        pixel_format="yuv420p10le",
        extra_video_args=("-tag:v", "hvc1"),
    ),
}
