# ffshell/services/commands/resize.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.enums.filters import ScaleAlgorithm
from ffshell.domain.enums.upscale_policy import UpscalePolicy
from ffshell.services.commands.base import BuildContext, encode_options_args
from ffshell.services.schemas.transcode import ResizeRequest


def scale_filter(
    width: Optional[int],
    height: Optional[int],
    *,
    algorithm: ScaleAlgorithm = ScaleAlgorithm.lanczos,
    upscale: UpscalePolicy = UpscalePolicy.always,
    pad: bool = False,
    pad_color: str = "black",
) -> str:
    """
    One side given: scale to it, the other follows the aspect ratio (kept even).
    Both given: fit inside the box keeping aspect; with pad, letterbox to exactly the box.
    UpscalePolicy.never caps each side at the source size.
    """
    never = upscale is UpscalePolicy.never

    def side(v: Optional[int], src: str) -> str:
        if v is None:
            return "-2"
        return f"'min({v},{src})'" if never else str(v)

    parts: List[str] = [f"w={side(width, 'iw')}", f"h={side(height, 'ih')}"]
    if width is not None and height is not None:
        parts += ["force_original_aspect_ratio=decrease", "force_divisible_by=2"]
    parts.append(f"flags={algorithm}")
    chain = ["scale=" + ":".join(parts)]
    if pad and width is not None and height is not None:
        chain.append(f"pad={width}:{height}:(ow-iw)/2:(oh-ih)/2:color={pad_color}")
    chain.append("setsar=1")
    return ",".join(chain)


def build_resize_args(req: ResizeRequest, output: Path, ctx: BuildContext) -> ArgumentList:
    b = ctx.builder(overwrite=req.overwrite).input(req.input_path)
    b.video_filter(
        scale_filter(
            req.width,
            req.height,
            algorithm=req.algorithm,
            upscale=req.upscale,
            pad=req.pad,
            pad_color=req.pad_color,
        )
    )
    vargs, _ = encode_options_args(req, ctx)
    b.output_option(*vargs)
    b.output_option("-c:a", "copy")
    b.output_option(*ctx.thread_args())
    return b.build(output)
