# ffshell/services/commands/trim.py
from __future__ import annotations

from pathlib import Path

from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.enums.file_format import suffix_of
from ffshell.domain.policies.time_range import TimeRange, normalize_time_range
from ffshell.services.commands.base import (
    BuildContext,
    audio_encode_args,
    default_audio_codec,
    encode_options_args,
)
from ffshell.services.schemas.editing import TrimRequest


def seek_args(tr: TimeRange) -> list[str]:
    return ["-ss", tr.start_token()] if tr.start > 0 else []


def build_trim_args(req: TrimRequest, output: Path, ctx: BuildContext) -> ArgumentList:
    """
    Cut [start, start+duration). fast_seek puts -ss before -i (jumps to the
    nearest keyframe); otherwise -ss goes after -i and ffmpeg decodes up to
    the exact frame.
    """
    tr = normalize_time_range(req.start, req.end, req.duration)
    b = ctx.builder(overwrite=req.overwrite)

    if req.fast_seek:
        b.input(req.input_path, *seek_args(tr))
    else:
        b.input(req.input_path)
        b.output_option(*seek_args(tr))
    if tr.duration is not None:
        b.output_option("-t", tr.duration_token())

    if req.copy_streams:
        b.map("0")
        b.output_option("-c", "copy", "-avoid_negative_ts", "make_zero")
    else:
        vargs, q = encode_options_args(req, ctx)
        b.output_option(*vargs)
        b.output_option(*audio_encode_args(default_audio_codec(suffix_of(req.output_path)), bitrate=q.audio_bitrate))
        b.output_option(*ctx.thread_args())
    return b.build(output)
