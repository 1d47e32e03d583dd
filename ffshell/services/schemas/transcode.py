# ffshell/services/schemas/transcode.py
from __future__ import annotations

from typing import Optional

from pydantic import Field, model_validator

from ffshell.domain.enums.codecs import AudioCodec, VideoCodec
from ffshell.domain.enums.filters import ScaleAlgorithm
from ffshell.domain.enums.modes import OptimizeProfile
from ffshell.domain.enums.upscale_policy import UpscalePolicy
from ffshell.services.schemas.common import EncodeOptions, SingleInputRequest


class ConvertRequest(SingleInputRequest, EncodeOptions):
    # None lets the output container decide (webm -> vp9/opus, audio files -> their codec, else h264/aac)
    video_codec: Optional[VideoCodec] = None  # type: ignore[assignment]
    audio_codec: Optional[AudioCodec] = None
    frame_rate: Optional[float] = Field(None, gt=0, le=240)
    pixel_format: Optional[str] = Field(None, pattern=r"^[a-z0-9_]+$", examples=["yuv420p"])
    audio_sample_rate: Optional[int] = Field(None, ge=8000, le=192000)
    audio_channels: Optional[int] = Field(None, ge=1, le=8)
    no_audio: bool = False
    no_video: bool = False
    faststart: bool = True

    @model_validator(mode="after")
    def _some_stream_left(self):
        if self.no_audio and self.no_video:
            raise ValueError("no_audio and no_video together leave nothing to write")
        return self


class ResizeRequest(SingleInputRequest, EncodeOptions):
    width: Optional[int] = Field(None, ge=2, le=16384)
    height: Optional[int] = Field(None, ge=2, le=16384)
    algorithm: ScaleAlgorithm = ScaleAlgorithm.lanczos
    upscale: UpscalePolicy = UpscalePolicy.always
    pad: bool = Field(False, description="Letterbox into exactly width x height (needs both)")
    pad_color: str = Field("black", pattern=r"^(#?[0-9A-Fa-f]{6}|[a-z]+)$")

    @model_validator(mode="after")
    def _dimensions(self):
        if self.width is None and self.height is None:
            raise ValueError("give width, height, or both")
        if self.pad and (self.width is None or self.height is None):
            raise ValueError("pad needs both width and height")
        return self


class OptimizeRequest(SingleInputRequest):
    profile: OptimizeProfile = OptimizeProfile.web
    max_height: Optional[int] = Field(None, ge=144, le=4320, description="Overrides the profile's height cap")
    target_size_mb: Optional[float] = Field(None, gt=0, description="Aim for roughly this file size")
    strip_metadata: bool = False
