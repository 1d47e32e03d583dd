# ffshell/services/commands/split.py
from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

from ffshell.common.timecodes import format_seconds, parse_optional_timecode
from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.errors import PreconditionError, RequestValidationError
from ffshell.services.commands.base import BuildContext, audio_encode_args, default_audio_codec, video_encode_args
from ffshell.domain.enums.codecs import VideoCodec
from ffshell.services.schemas.editing import SplitRequest

SEGMENT_DIGITS = 3


def segment_naming(req: SplitRequest) -> tuple[str, str]:
    """(prefix, extension) for the segment files."""
    prefix = req.prefix or req.input_path.stem
    ext = (req.extension or req.input_path.suffix.lstrip(".")).lower()
    if not ext:
        raise RequestValidationError("input has no extension; set extension for the segments")
    return prefix, ext


def segment_pattern(req: SplitRequest) -> Path:
    prefix, ext = segment_naming(req)
    return Path(req.output_dir) / f"{prefix}_%0{SEGMENT_DIGITS}d.{ext}"


def segment_regex(req: SplitRequest) -> re.Pattern[str]:
    """
    Names the segment muxer writes: the counter is zero-padded to three
    digits and simply grows past 999 (talk_999, talk_1000, ...).
    """
    prefix, ext = segment_naming(req)
    counter = rf"(\d{{{SEGMENT_DIGITS}}}|[1-9]\d{{{SEGMENT_DIGITS},}})"
    return re.compile(rf"{re.escape(prefix)}_{counter}\.{re.escape(ext)}")


def existing_segments(req: SplitRequest) -> List[Path]:
    """Segment files already in output_dir, in counter order."""
    d = Path(req.output_dir)
    if not d.is_dir():
        return []
    pattern = segment_regex(req)
    found = []
    for p in d.iterdir():
        m = pattern.fullmatch(p.name)
        if m and p.is_file():
            found.append((int(m.group(1)), p))
    return [p for _, p in sorted(found)]


def segment_seconds(req: SplitRequest, duration: Optional[float] = None) -> float:
    """segment_duration as given, or the probed duration divided by segment_count."""
    if (req.segment_duration is None) == (req.segment_count is None):
        raise RequestValidationError("give exactly one of segment_duration or segment_count")
    if req.segment_duration is not None:
        seconds = parse_optional_timecode(req.segment_duration, field="segment_duration")
        if not seconds or seconds <= 0:
            raise RequestValidationError("segment_duration must be positive")
        return seconds
    if not duration or duration <= 0:
        raise PreconditionError(f"cannot split {req.input_path} by count: duration unknown")
    return duration / int(req.segment_count or 1)


def build_split_args(req: SplitRequest, ctx: BuildContext, *, seconds: float) -> ArgumentList:
    prefix, ext = segment_naming(req)
    seg = format_seconds(seconds)
    b = ctx.builder(overwrite=req.overwrite).input(req.input_path)
    b.map("0")
    if req.copy_streams:
        # cuts land on the next keyframe after each boundary
        b.output_option("-c", "copy")
    else:
        vargs, q = video_encode_args(VideoCodec.H264, preset=ctx.default_quality)
        b.output_option(*vargs)
        b.output_option(*audio_encode_args(default_audio_codec(ext), bitrate=q.audio_bitrate))
        b.output_option("-force_key_frames", f"expr:gte(t,n_forced*{seg})")
    b.output_option("-f", "segment", "-segment_time", seg, "-reset_timestamps", "1")
    return b.build(segment_pattern(req))
