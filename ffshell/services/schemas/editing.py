# ffshell/services/schemas/editing.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ffshell.services.schemas.common import CommandRequest, EncodeOptions, SingleInputRequest, TimeValue


class TrimRequest(SingleInputRequest, EncodeOptions):
    start: TimeValue = "0"
    end: Optional[TimeValue] = None
    duration: Optional[TimeValue] = None
    fast_seek: bool = Field(True, description="Seek before the input (fast, keyframe-approximate)")
    copy_streams: bool = Field(False, description="Stream copy instead of re-encoding")


class MergeRequest(CommandRequest, EncodeOptions):
    # the two-input minimum is checked when the command runs, not here
    inputs: List[Path] = Field(default_factory=list)
    reencode: bool = Field(False, description="Concat filter (re-encode) instead of the concat demuxer")
    include_audio: bool = True


class SplitRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    input_path: Path
    output_dir: Path
    prefix: Optional[str] = Field(None, pattern=r"^[^/\\%]+$", description="Segment name prefix; input stem if unset")
    extension: Optional[str] = Field(None, pattern=r"^[A-Za-z0-9]+$", description="Segment extension; input's if unset")
    segment_duration: Optional[TimeValue] = None
    segment_count: Optional[int] = Field(None, ge=1, le=10000)
    copy_streams: bool = True
    overwrite: bool = False
