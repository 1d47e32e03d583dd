# ffshell/services/commands/optimize.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.enums.file_format import FASTSTART_FORMATS, suffix_of
from ffshell.domain.errors import PreconditionError, RequestValidationError
from ffshell.domain.policies.encoders import speed_args, video_encoder
from ffshell.domain.policies.profiles import OPTIMIZE_PROFILES, OptimizeSettings
from ffshell.domain.policies.quality import bitrate_kbps
from ffshell.services.commands.base import BuildContext, audio_encode_args
from ffshell.services.schemas.transcode import OptimizeRequest

KBIT_PER_MB = 8 * 1024


def target_video_kbps(size_mb: float, duration: Optional[float], audio_bitrate: str) -> int:
    """
    Video bitrate that lands the file near `size_mb`: total budget over the
    duration, minus what the audio takes. Container overhead is ignored.
    """
    if not duration or duration <= 0:
        raise PreconditionError("cannot aim for a file size without a known duration")
    total = size_mb * KBIT_PER_MB / duration
    video = int(total - bitrate_kbps(audio_bitrate))
    if video <= 0:
        raise RequestValidationError(
            f"{size_mb} MB is too small for {duration:.1f}s at audio {audio_bitrate}"
        )
    return video


def build_optimize_args(
    req: OptimizeRequest,
    output: Path,
    ctx: BuildContext,
    *,
    duration: Optional[float] = None,
) -> ArgumentList:
    p: OptimizeSettings = OPTIMIZE_PROFILES[req.profile]
    encoder = video_encoder(p.video_codec)
    b = ctx.builder(overwrite=req.overwrite).input(req.input_path)
    b.map("0:v:0", "0:a:0?")

    max_h = req.max_height or p.max_height
    if max_h:
        # never enlarge
        b.video_filter(f"scale=-2:'min({max_h},ih)'")

    b.output_option("-c:v", encoder, *speed_args(encoder, p.speed))
    if req.target_size_mb:
        k = target_video_kbps(req.target_size_mb, duration, p.audio_bitrate)
        b.output_option("-b:v", f"{k}k", "-maxrate", f"{k}k", "-bufsize", f"{2 * k}k")
    else:
        b.output_option("-crf", str(p.crf))
    b.output_option("-pix_fmt", p.pixel_format, *p.extra_video_args)
    b.output_option(*audio_encode_args(p.audio_codec, bitrate=p.audio_bitrate))

    if req.strip_metadata:
        b.output_option("-map_metadata", "-1", "-map_chapters", "-1")
    if p.faststart and suffix_of(req.output_path) in FASTSTART_FORMATS:
        b.output_option("-movflags", "+faststart")
    b.output_option(*ctx.thread_args())
    return b.build(output)
