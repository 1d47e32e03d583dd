# ffshell/services/commands/base.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ffshell.common.settings import Settings
from ffshell.domain.enums.codecs import AudioCodec, HardwareAccel, VideoCodec
from ffshell.domain.enums.file_format import AudioFormats, VideoFormats
from ffshell.domain.enums.quality import EncoderSpeed, QualityPreset
from ffshell.domain.policies.encoders import audio_encoder, rate_control_args, speed_args, video_encoder
from ffshell.domain.policies.quality import ResolvedQuality, resolve_quality
from ffshell.services.ffmpeg.args import ArgumentBuilder


@dataclass(frozen=True)
class BuildContext:
    """Everything a pure argument builder needs besides the request itself."""
    ffmpeg_bin: str = "ffmpeg"
    log_level: Optional[str] = "error"
    hide_banner: bool = True
    threads: Optional[int] = None
    default_quality: Optional[QualityPreset] = QualityPreset.medium
    thumb_width: int = 960
    thumb_percent: float = 0.10
    collage_tile_width: int = 400
    gif_fps: int = 10
    gif_width: int = 480

    @classmethod
    def from_settings(cls, cfg: Settings) -> "BuildContext":
        return cls(
            ffmpeg_bin=cfg.ffmpeg_bin,
            log_level=cfg.ffmpeg.log_level,
            hide_banner=cfg.ffmpeg.hide_banner,
            threads=cfg.ffmpeg.threads,
            default_quality=QualityPreset(cfg.default_quality) if cfg.default_quality else None,
            thumb_width=cfg.thumb_width,
            thumb_percent=cfg.thumb_percent,
            collage_tile_width=cfg.collage_tile_width,
            gif_fps=cfg.gif_fps,
            gif_width=cfg.gif_width,
        )

    def builder(self, *, overwrite: bool) -> ArgumentBuilder:
        return ArgumentBuilder.for_ffmpeg(
            self.ffmpeg_bin,
            overwrite=overwrite,
            log_level=self.log_level,
            hide_banner=self.hide_banner,
        )

    def thread_args(self) -> List[str]:
        return ["-threads", str(self.threads)] if self.threads is not None else []


# ---- container defaults ------------------------------------------------------
_AUDIO_CODEC_BY_SUFFIX = {
    AudioFormats.MP3: AudioCodec.MP3,
    AudioFormats.AAC: AudioCodec.AAC,
    AudioFormats.M4A: AudioCodec.AAC,
    AudioFormats.WAV: AudioCodec.PCM,
    AudioFormats.FLAC: AudioCodec.FLAC,
    AudioFormats.OPUS: AudioCodec.OPUS,
    AudioFormats.OGG: AudioCodec.VORBIS,
    VideoFormats.WEBM: AudioCodec.OPUS,
}


def is_audio_suffix(suffix: str) -> bool:
    return suffix in {f.value for f in AudioFormats}


def default_video_codec(suffix: str) -> VideoCodec:
    return VideoCodec.VP9 if suffix == VideoFormats.WEBM else VideoCodec.H264


def default_audio_codec(suffix: str) -> AudioCodec:
    return _AUDIO_CODEC_BY_SUFFIX.get(suffix, AudioCodec.AAC)


def lossless_audio(codec: AudioCodec) -> bool:
    return codec in (AudioCodec.FLAC, AudioCodec.PCM)


# ---- shared encode fragments ---------------------------------------------------
def video_encode_args(
    codec: VideoCodec,
    *,
    hw: HardwareAccel = HardwareAccel.none,
    preset: Optional[QualityPreset] = None,
    crf: Optional[int] = None,
    video_bitrate: Optional[str] = None,
    audio_bitrate: Optional[str] = None,
    speed: Optional[EncoderSpeed] = None,
) -> Tuple[List[str], ResolvedQuality]:
    """
    `-c:v <encoder>` plus speed and rate-control flags. Returns the resolved
    quality too, so callers can reuse its audio bitrate.
    """
    q = resolve_quality(
        codec,
        preset=preset,
        crf=crf,
        video_bitrate=video_bitrate,
        audio_bitrate=audio_bitrate,
        speed=speed,
    )
    encoder = video_encoder(codec, hw)
    out = ["-c:v", encoder]
    if codec is not VideoCodec.COPY:
        out += speed_args(encoder, q.speed)
        out += rate_control_args(encoder, codec, crf=q.crf, bitrate=q.video_bitrate)
    return out, q


def encode_options_args(opts, ctx: BuildContext, *, codec: Optional[VideoCodec] = None) -> Tuple[List[str], ResolvedQuality]:
    """Same as video_encode_args, reading the knobs off an EncodeOptions request."""
    return video_encode_args(
        codec or opts.video_codec,
        hw=opts.hw_accel,
        preset=opts.quality or ctx.default_quality,
        crf=opts.crf,
        video_bitrate=opts.video_bitrate,
        audio_bitrate=opts.audio_bitrate,
        speed=opts.encoder_speed,
    )


def audio_encode_args(
    codec: AudioCodec,
    *,
    bitrate: Optional[str] = None,
    sample_rate: Optional[int] = None,
    channels: Optional[int] = None,
) -> List[str]:
    out = ["-c:a", audio_encoder(codec)]
    if codec is AudioCodec.COPY:
        return out
    if bitrate and not lossless_audio(codec):
        out += ["-b:a", bitrate]
    if sample_rate:
        out += ["-ar", str(sample_rate)]
    if channels:
        out += ["-ac", str(channels)]
    return out
