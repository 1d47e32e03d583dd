# ffshell/services/commands/extract_audio.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, Tuple

from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.enums.codecs import AudioCodec
from ffshell.domain.enums.file_format import AudioFormats, suffix_of
from ffshell.domain.errors import RequestValidationError
from ffshell.services.commands.base import BuildContext, audio_encode_args
from ffshell.services.schemas.audio import ExtractAudioRequest

# format -> (codec, muxer)
AUDIO_TARGETS: Dict[AudioFormats, Tuple[AudioCodec, str]] = {
    AudioFormats.MP3: (AudioCodec.MP3, "mp3"),
    AudioFormats.AAC: (AudioCodec.AAC, "adts"),
    AudioFormats.M4A: (AudioCodec.AAC, "ipod"),
    AudioFormats.WAV: (AudioCodec.PCM, "wav"),
    AudioFormats.FLAC: (AudioCodec.FLAC, "flac"),
    AudioFormats.OPUS: (AudioCodec.OPUS, "opus"),
    AudioFormats.OGG: (AudioCodec.VORBIS, "ogg"),
}


def resolve_audio_format(req: ExtractAudioRequest) -> AudioFormats:
    if req.format is not None:
        return req.format
    suffix = suffix_of(req.output_path)
    try:
        return AudioFormats(suffix)
    except ValueError:
        allowed = ", ".join(f.value for f in AudioFormats)
        raise RequestValidationError(
            f"cannot tell the audio format from {req.output_path.name!r}; set format ({allowed})"
        ) from None


def build_extract_audio_args(req: ExtractAudioRequest, output: Path, ctx: BuildContext) -> ArgumentList:
    fmt = resolve_audio_format(req)
    codec, muxer = AUDIO_TARGETS[fmt]
    b = ctx.builder(overwrite=req.overwrite).input(req.input_path)
    b.map(f"0:a:{req.stream_index}")
    b.output_option("-vn", "-sn", "-dn")
    b.output_option(
        *audio_encode_args(codec, bitrate=req.bitrate, sample_rate=req.sample_rate, channels=req.channels)
    )
    b.output_option("-f", muxer)
    return b.build(output)
