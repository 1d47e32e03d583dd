# ffshell/services/schemas/audio.py
from __future__ import annotations

from typing import Optional

from pydantic import Field

from ffshell.domain.enums.file_format import AudioFormats
from ffshell.domain.policies.quality import BITRATE_PATTERN
from ffshell.services.schemas.common import SingleInputRequest


class ExtractAudioRequest(SingleInputRequest):
    format: Optional[AudioFormats] = Field(None, description="Taken from the output suffix when unset")
    stream_index: int = Field(0, ge=0, le=63, description="Which audio stream of the input")
    bitrate: Optional[str] = Field(None, pattern=BITRATE_PATTERN)
    sample_rate: Optional[int] = Field(None, ge=8000, le=192000)
    channels: Optional[int] = Field(None, ge=1, le=8)
