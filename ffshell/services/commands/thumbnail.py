# ffshell/services/commands/thumbnail.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from ffshell.common.timecodes import format_seconds
from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.enums.file_format import ImageFormats, suffix_of
from ffshell.domain.enums.filters import ScaleAlgorithm
from ffshell.domain.enums.upscale_policy import UpscalePolicy
from ffshell.domain.errors import PreconditionError, RequestValidationError
from ffshell.services.commands.base import BuildContext


def image_format_of(path: Path) -> ImageFormats:
    suffix = suffix_of(path)
    try:
        return ImageFormats(suffix)
    except ValueError:
        allowed = ", ".join(f.value for f in ImageFormats)
        raise RequestValidationError(f"unsupported image format {suffix!r}; use one of {allowed}") from None


def time_from_percent(percent: float, duration: Optional[float], *, source: object = "input") -> float:
    """Position for a fraction of the duration, kept inside the stream."""
    if not duration or duration <= 0:
        raise PreconditionError(f"cannot place a thumbnail by percent in {source}: duration unknown")
    # the very last instant usually has no decodable frame
    return max(0.0, min(duration * float(percent), duration - 0.1))


def decide_width(src_width: Optional[int], target_width: int, allow_upscale: UpscalePolicy | str) -> int:
    policy = UpscalePolicy(str(allow_upscale or UpscalePolicy.if_smaller_than).lower())
    if src_width is None:
        return int(target_width)
    if src_width >= target_width:
        return int(target_width)
    if policy is UpscalePolicy.never:
        return int(src_width)
    return int(target_width)


def _quality_args(fmt: ImageFormats, quality: int) -> List[str]:
    if fmt in (ImageFormats.JPG, ImageFormats.JPEG):
        return ["-q:v", str(quality)]
    if fmt is ImageFormats.WEBP:
        # -q:v scale (1 best .. 31 worst) -> libwebp quality (100 .. 0)
        return ["-c:v", "libwebp", "-quality", str(round(100 - (quality - 1) * 100 / 30))]
    return []


def build_frame_args(
    input_path: Path,
    output: Path,
    ctx: BuildContext,
    *,
    at: float,
    width: Optional[int] = None,
    quality: int = 2,
    fast_seek: bool = True,
    overwrite: bool = False,
    algorithm: ScaleAlgorithm = ScaleAlgorithm.lanczos,
) -> ArgumentList:
    """Grab exactly one frame at `at` seconds into an image file."""
    fmt = image_format_of(output)
    b = ctx.builder(overwrite=overwrite)
    seek = ["-ss", format_seconds(at)]
    if fast_seek:
        b.input(input_path, *seek)
    else:
        b.input(input_path)
        b.output_option(*seek)
    if width:
        b.video_filter(f"scale={int(width)}:-2:flags={algorithm}")
        b.video_filter("setsar=1")
    b.output_option("-frames:v", "1", "-an", "-sn")
    b.output_option(*_quality_args(fmt, quality))
    if fmt is not ImageFormats.WEBP:
        b.output_option("-update", "1")
    return b.build(output)
