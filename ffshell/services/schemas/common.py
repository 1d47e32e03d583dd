# ffshell/services/schemas/common.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ffshell.domain.enums.codecs import HardwareAccel, VideoCodec
from ffshell.domain.enums.quality import EncoderSpeed, QualityPreset
from ffshell.domain.errors import RequestValidationError
from ffshell.domain.policies.quality import BITRATE_PATTERN

# "90", "1:30", "00:01:30.5" or a number of seconds; parsed when arguments are built
TimeValue = Union[str, float]

R = TypeVar("R", bound=BaseModel)


class CommandRequest(BaseModel):
    """Fields every command shares. Requests are immutable once built."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    output_path: Path = Field(..., description="Where the result is written")
    overwrite: bool = Field(False, description="Replace an existing output instead of skipping")


class SingleInputRequest(CommandRequest):
    input_path: Path = Field(..., description="Source media file")


class EncodeOptions(BaseModel):
    """Video/audio encoder choice and quality knobs shared by re-encoding commands."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    video_codec: VideoCodec = VideoCodec.H264
    hw_accel: HardwareAccel = HardwareAccel.none
    quality: Optional[QualityPreset] = Field(None, description="Named preset; fills only what is not set explicitly")
    crf: Optional[int] = Field(None, ge=0, le=63)
    video_bitrate: Optional[str] = Field(None, pattern=BITRATE_PATTERN, examples=["2500k", "4M"])
    audio_bitrate: Optional[str] = Field(None, pattern=BITRATE_PATTERN, examples=["128k"])
    encoder_speed: Optional[EncoderSpeed] = None


def parse_request(model: Type[R], data: Mapping[str, Any] | R) -> R:
    """
    Build a request from loose data (CLI args, JSON), turning pydantic's
    ValidationError into our RequestValidationError.
    """
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(dict(data))
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or model.__name__}: {err['msg']}" for err in e.errors()
        )
        raise RequestValidationError(f"invalid {model.__name__}: {problems}") from e
