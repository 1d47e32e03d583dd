# ffshell/domain/policies/encoders.py
"""
Codec name -> ffmpeg encoder name, and the flags each encoder family uses
for constant quality, bitrate and speed. Pure tables; no I/O.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from ffshell.domain.enums.codecs import AudioCodec, HardwareAccel, VideoCodec
from ffshell.domain.enums.quality import EncoderSpeed
from ffshell.domain.errors import RequestValidationError

SOFTWARE_VIDEO_ENCODERS: Dict[VideoCodec, str] = {
    VideoCodec.H264: "libx264",
    VideoCodec.H265: "libx265",
    VideoCodec.VP9: "libvpx-vp9",
    VideoCodec.AV1: "libaom-av1",
}

HARDWARE_VIDEO_ENCODERS: Dict[HardwareAccel, Dict[VideoCodec, str]] = {
    HardwareAccel.nvenc: {
        VideoCodec.H264: "h264_nvenc",
        VideoCodec.H265: "hevc_nvenc",
        VideoCodec.AV1: "av1_nvenc",
    },
    HardwareAccel.qsv: {
        VideoCodec.H264: "h264_qsv",
        VideoCodec.H265: "hevc_qsv",
        VideoCodec.VP9: "vp9_qsv",
        VideoCodec.AV1: "av1_qsv",
    },
    HardwareAccel.vaapi: {
        VideoCodec.H264: "h264_vaapi",
        VideoCodec.H265: "hevc_vaapi",
        VideoCodec.VP9: "vp9_vaapi",
        VideoCodec.AV1: "av1_vaapi",
    },
    HardwareAccel.videotoolbox: {
        VideoCodec.H264: "h264_videotoolbox",
        VideoCodec.H265: "hevc_videotoolbox",
    },
    HardwareAccel.amf: {
        VideoCodec.H264: "h264_amf",
        VideoCodec.H265: "hevc_amf",
        VideoCodec.AV1: "av1_amf",
    },
}

AUDIO_ENCODERS: Dict[AudioCodec, str] = {
    AudioCodec.AAC: "aac",
    AudioCodec.MP3: "libmp3lame",
    AudioCodec.OPUS: "libopus",
    AudioCodec.VORBIS: "libvorbis",
    AudioCodec.FLAC: "flac",
    AudioCodec.PCM: "pcm_s16le",
    AudioCodec.AC3: "ac3",
    AudioCodec.COPY: "copy",
}

# inclusive upper bound of -crf per codec family
CRF_MAX: Dict[VideoCodec, int] = {
    VideoCodec.H264: 51,
    VideoCodec.H265: 51,
    VideoCodec.VP9: 63,
    VideoCodec.AV1: 63,
}

_SPEED_ORDER = list(EncoderSpeed)


def video_encoder(codec: VideoCodec, hw: HardwareAccel = HardwareAccel.none) -> str:
    if codec is VideoCodec.COPY:
        return "copy"
    if hw is HardwareAccel.none:
        return SOFTWARE_VIDEO_ENCODERS[codec]
    name = HARDWARE_VIDEO_ENCODERS.get(hw, {}).get(codec)
    if not name:
        raise RequestValidationError(f"{hw} has no encoder for {codec}")
    return name


def audio_encoder(codec: AudioCodec) -> str:
    return AUDIO_ENCODERS[codec]


def check_crf(codec: VideoCodec, crf: int) -> int:
    hi = CRF_MAX.get(codec, 51)
    if not 0 <= int(crf) <= hi:
        raise RequestValidationError(f"crf for {codec} must be within 0..{hi}, got {crf}")
    return int(crf)


def _double_bitrate(bitrate: str) -> str:
    """'2500k' -> '5000k', '4M' -> '8M'. Used for -bufsize."""
    num, unit = bitrate[:-1], bitrate[-1]
    if unit.isdigit():
        num, unit = bitrate, ""
    value = float(num) * 2
    return f"{value:g}{unit}"


def rate_control_args(
    encoder: str,
    codec: VideoCodec,
    *,
    crf: Optional[int] = None,
    bitrate: Optional[str] = None,
) -> List[str]:
    """
    Flags for constant quality and/or a bitrate. With both, CRF stays the
    target and the bitrate becomes a cap (-maxrate/-bufsize), except for
    libvpx/libaom where '-crf N -b:v X' already means constrained quality.
    """
    out: List[str] = []
    if crf is not None:
        q = str(check_crf(codec, crf))
        if encoder in ("libx264", "libx265"):
            out += ["-crf", q]
        elif encoder in ("libvpx-vp9", "libaom-av1"):
            out += ["-crf", q, "-b:v", bitrate or "0"]
            return out
        elif encoder.endswith("_nvenc"):
            out += ["-rc", "vbr", "-cq", q]
        elif encoder.endswith("_qsv"):
            out += ["-global_quality", q]
        elif encoder.endswith("_vaapi"):
            out += ["-rc_mode", "CQP", "-qp", q]
        elif encoder.endswith("_amf"):
            out += ["-rc", "cqp", "-qp_i", q, "-qp_p", q]
        elif encoder.endswith("_videotoolbox"):
            # videotoolbox takes 1..100, higher is better
            hi = CRF_MAX.get(codec, 51)
            out += ["-q:v", str(max(1, min(100, round(100 - int(q) * 100 / hi))))]
        else:
            out += ["-crf", q]
        if bitrate:
            out += ["-maxrate", bitrate, "-bufsize", _double_bitrate(bitrate)]
        return out

    if bitrate:
        out += ["-b:v", bitrate]
    return out


def speed_args(encoder: str, speed: Optional[EncoderSpeed]) -> List[str]:
    if speed is None:
        return []
    if encoder in ("libx264", "libx265"):
        return ["-preset", str(speed)]
    rank = _SPEED_ORDER.index(speed)  # 0 fastest .. 8 slowest
    if encoder.endswith("_nvenc"):
        # p1 (fastest) .. p7 (slowest)
        return ["-preset", f"p{1 + round(rank * 6 / 8)}"]
    if encoder == "libvpx-vp9":
        return ["-deadline", "good", "-cpu-used", str(5 - round(rank * 5 / 8))]
    if encoder == "libaom-av1":
        return ["-cpu-used", str(8 - rank)]
    return []
