# ffshell/services/commands/gif.py
from __future__ import annotations

from pathlib import Path
from typing import List

from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.policies.time_range import TimeRange, normalize_time_range
from ffshell.services.commands.base import BuildContext
from ffshell.services.schemas.stills import GifRequest


def _window(tr: TimeRange) -> List[str]:
    out: List[str] = []
    if tr.start > 0:
        out += ["-ss", tr.start_token()]
    if tr.duration is not None:
        out += ["-t", tr.duration_token()]
    return out


def gif_base_chain(req: GifRequest, ctx: BuildContext) -> str:
    fps = req.fps or ctx.gif_fps
    width = req.width or ctx.gif_width
    return f"fps={fps},scale={width}:-1:flags={req.algorithm}"


def gif_time_range(req: GifRequest) -> TimeRange:
    return normalize_time_range(req.start, req.end, req.duration)


def build_palette_args(req: GifRequest, palette: Path, ctx: BuildContext) -> ArgumentList:
    """Stage 1: analyse the clip and write a palette image."""
    tr = gif_time_range(req)
    b = ctx.builder(overwrite=True)
    b.input(req.input_path, *_window(tr))
    b.video_filter(
        f"{gif_base_chain(req, ctx)},palettegen=max_colors={req.max_colors}:stats_mode={req.stats_mode}"
    )
    b.output_option("-update", "1")
    return b.build(palette)


def build_gif_args(req: GifRequest, output: Path, ctx: BuildContext, *, palette: Path | None = None) -> ArgumentList:
    """
    Stage 2 when `palette` is given (paletteuse against the stage 1 image),
    otherwise a single pass with ffmpeg's default gif palette.
    """
    tr = gif_time_range(req)
    b = ctx.builder(overwrite=req.overwrite)
    b.input(req.input_path, *_window(tr))
    base = gif_base_chain(req, ctx)
    if palette is not None:
        b.input(palette)
        b.filter_complex(f"[0:v]{base}[x];[x][1:v]paletteuse=dither={req.dither}")
    else:
        b.video_filter(base)
    b.output_option("-an", "-loop", str(req.loop))
    return b.build(output)
