# ffshell/services/commands/merge.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from ffshell.common.strings.escaping import quote_concat_path
from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.enums.file_format import suffix_of
from ffshell.domain.errors import PreconditionError
from ffshell.services.commands.base import (
    BuildContext,
    audio_encode_args,
    default_audio_codec,
    encode_options_args,
)
from ffshell.services.schemas.editing import MergeRequest

MIN_INPUTS = 2


def require_inputs(inputs: Sequence[Path]) -> None:
    if len(inputs) < MIN_INPUTS:
        raise PreconditionError(f"at least two inputs required for merge, got {len(inputs)}")


def build_concat_list(inputs: Sequence[Path]) -> str:
    """Concat demuxer list: one `file '<path>'` line per input, in order."""
    return "".join(f"file {quote_concat_path(Path(p))}\n" for p in inputs)


def concat_filter_graph(count: int, *, include_audio: bool = True) -> str:
    """`[0:v:0][0:a:0][1:v:0][1:a:0]concat=n=2:v=1:a=1[outv][outa]`"""
    pads: List[str] = []
    for i in range(count):
        pads.append(f"[{i}:v:0]")
        if include_audio:
            pads.append(f"[{i}:a:0]")
    a = 1 if include_audio else 0
    sinks = "[outv][outa]" if include_audio else "[outv]"
    return f"{''.join(pads)}concat=n={count}:v=1:a={a}{sinks}"


def build_merge_args(
    req: MergeRequest,
    output: Path,
    ctx: BuildContext,
    *,
    inputs: Optional[Sequence[Path]] = None,
    list_path: Optional[Path] = None,
) -> ArgumentList:
    """
    Without reencode: concat demuxer over `list_path` (written by the caller
    from build_concat_list), streams copied. With reencode: one -i per input
    and a concat filter graph, which tolerates differing codecs.
    """
    inputs = list(inputs if inputs is not None else req.inputs)
    require_inputs(inputs)
    b = ctx.builder(overwrite=req.overwrite)

    if not req.reencode:
        if list_path is None:
            raise ValueError("concat demuxer needs the list file path")
        b.input(list_path, "-f", "concat", "-safe", "0")
        b.map("0")
        b.output_option("-c", "copy")
        if not req.include_audio:
            b.output_option("-an")
        return b.build(output)

    for p in inputs:
        b.input(p)
    b.filter_complex(concat_filter_graph(len(inputs), include_audio=req.include_audio))
    b.map("[outv]")
    vargs, q = encode_options_args(req, ctx)
    b.output_option(*vargs)
    if req.include_audio:
        b.map("[outa]")
        b.output_option(*audio_encode_args(default_audio_codec(suffix_of(req.output_path)), bitrate=q.audio_bitrate))
    b.output_option(*ctx.thread_args())
    return b.build(output)
