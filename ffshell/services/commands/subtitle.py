# ffshell/services/commands/subtitle.py
from __future__ import annotations

from pathlib import Path
from typing import List

from ffshell.common.strings.escaping import escape_filter_value
from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.enums.file_format import VideoFormats, suffix_of
from ffshell.domain.enums.modes import SubtitleMode
from ffshell.services.commands.base import BuildContext, encode_options_args
from ffshell.services.schemas.subtitles import SubtitleRequest

_TEXT_SUBS = {"srt", "vtt", "ass", "ssa"}


def subtitles_filter(req: SubtitleRequest, subtitle_path: Path) -> str:
    """
    `subtitles=filename=...` with the path (and any style) escaped for both
    filter-graph levels, so colons, commas and quotes in names survive.
    """
    opts = [f"filename={escape_filter_value(str(subtitle_path))}"]
    if req.charset:
        opts.append(f"charenc={escape_filter_value(req.charset)}")
    style: List[str] = []
    if req.font_name:
        style.append(f"FontName={req.font_name}")
    if req.font_size:
        style.append(f"FontSize={req.font_size}")
    if style:
        opts.append(f"force_style={escape_filter_value(','.join(style))}")
    return "subtitles=" + ":".join(opts)


def soft_subtitle_codec(container: str, subtitle_suffix: str) -> str:
    if container in (VideoFormats.MP4, VideoFormats.MOV, VideoFormats.M4V):
        return "mov_text"
    if container == VideoFormats.WEBM:
        return "webvtt"
    if container == VideoFormats.MKV and subtitle_suffix == "srt":
        return "srt"
    return "copy"


def build_subtitle_args(
    req: SubtitleRequest,
    output: Path,
    ctx: BuildContext,
    *,
    subtitle_path: Path | None = None,
    existing_subtitle_streams: int = 0,
) -> ArgumentList:
    subs = Path(subtitle_path or req.subtitle_path)
    b = ctx.builder(overwrite=req.overwrite)

    if req.mode is SubtitleMode.burn:
        b.input(req.input_path)
        b.video_filter(subtitles_filter(req, subs))
        vargs, _ = encode_options_args(req, ctx)
        b.output_option(*vargs)
        b.output_option("-c:a", "copy")
        b.output_option(*ctx.thread_args())
        return b.build(output)

    # embed: keep everything from the input, add the subtitle file as one more stream
    b.input(req.input_path)
    b.input(subs)
    b.map("0", "1:0")
    idx = existing_subtitle_streams
    b.output_option("-c", "copy")
    b.output_option(f"-c:s:{idx}", soft_subtitle_codec(suffix_of(req.output_path), suffix_of(subs)))
    if req.language:
        b.output_option(f"-metadata:s:s:{idx}", f"language={req.language}")
    if req.title:
        b.output_option(f"-metadata:s:s:{idx}", f"title={req.title}")
    if req.default:
        b.output_option(f"-disposition:s:{idx}", "default")
    return b.build(output)
