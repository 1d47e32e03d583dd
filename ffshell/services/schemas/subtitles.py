# ffshell/services/schemas/subtitles.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, model_validator

from ffshell.domain.enums.modes import SubtitleMode
from ffshell.services.schemas.common import EncodeOptions, SingleInputRequest


class SubtitleRequest(SingleInputRequest, EncodeOptions):
    subtitle_path: Path
    mode: SubtitleMode = SubtitleMode.burn
    # burn only
    font_name: Optional[str] = Field(None, min_length=1, max_length=64)
    font_size: Optional[int] = Field(None, ge=6, le=200)
    charset: Optional[str] = Field(None, pattern=r"^[A-Za-z0-9_.:-]+$", examples=["UTF-8", "CP1252"])
    # embed only
    language: Optional[str] = Field(None, pattern=r"^[a-z]{3}$", examples=["eng"])
    title: Optional[str] = Field(None, max_length=128)
    default: bool = False

    @model_validator(mode="after")
    def _mode_fields(self):
        if self.mode is SubtitleMode.embed and (self.font_name or self.font_size or self.charset):
            raise ValueError("font_name/font_size/charset only apply to burned-in subtitles")
        return self
