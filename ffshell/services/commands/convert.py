# ffshell/services/commands/convert.py
from __future__ import annotations

from pathlib import Path

from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.enums.file_format import FASTSTART_FORMATS, suffix_of
from ffshell.services.commands.base import (
    BuildContext,
    audio_encode_args,
    default_audio_codec,
    default_video_codec,
    encode_options_args,
    is_audio_suffix,
)
from ffshell.services.schemas.transcode import ConvertRequest


def build_convert_args(req: ConvertRequest, output: Path, ctx: BuildContext) -> ArgumentList:
    """
    Format/codec conversion. An audio-only output suffix (mp3, flac, ...)
    drops video on its own; codecs left unset follow the output container.
    """
    suffix = suffix_of(req.output_path)
    b = ctx.builder(overwrite=req.overwrite).input(req.input_path)

    audio_bitrate = req.audio_bitrate
    if req.no_video or is_audio_suffix(suffix):
        b.output_option("-vn")
    else:
        vcodec = req.video_codec or default_video_codec(suffix)
        vargs, q = encode_options_args(req, ctx, codec=vcodec)
        b.output_option(*vargs)
        audio_bitrate = q.audio_bitrate
        if req.frame_rate:
            b.output_option("-r", f"{req.frame_rate:g}")
        if req.pixel_format:
            b.output_option("-pix_fmt", req.pixel_format)

    if req.no_audio:
        b.output_option("-an")
    else:
        acodec = req.audio_codec or default_audio_codec(suffix)
        b.output_option(
            *audio_encode_args(
                acodec,
                bitrate=audio_bitrate,
                sample_rate=req.audio_sample_rate,
                channels=req.audio_channels,
            )
        )

    if req.faststart and suffix in FASTSTART_FORMATS:
        b.output_option("-movflags", "+faststart")
    b.output_option(*ctx.thread_args())
    return b.build(output)
