# ffshell/common/probe/ffprobe_helpers.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ffshell.common.logging import get_logger
from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.entities.probe import AudioStreamInfo, MediaDescriptor, VideoStreamInfo

logger = get_logger(__name__)


def build_ffprobe_cmd(
    input_path: str | Path,
    extra_args: Iterable[str] | None = None,
    *,
    ffprobe_bin: str = "ffprobe",
    log_level: str = "error",
) -> ArgumentList:
    """
    Build a robust ffprobe command that emits JSON we can parse consistently.
    """
    tokens: List[str] = [
        "-v", log_level,
        "-show_streams",
        "-show_format",
        "-print_format", "json",
    ]
    if extra_args:
        tokens += list(extra_args)
    # ffprobe has no "--"; a "file:" prefix keeps names starting with '-' from
    # being read as options
    path = str(input_path)
    if path.startswith("-"):
        path = f"file:{path}"
    tokens.append(path)
    return ArgumentList(binary=ffprobe_bin, tokens=tuple(tokens))


# ---- tiny parse helpers -------------------------------------------------------
def _maybe_int(x) -> Optional[int]:
    try:
        if x is None:
            return None
        return int(float(x))
    except (TypeError, ValueError):
        return None


def _maybe_float(x) -> Optional[float]:
    try:
        if x is None:
            return None
        return float(x)
    except (TypeError, ValueError):
        return None


def _fps_from_fraction(fr: str | None) -> Optional[float]:
    # fps commonly appears as "num/den" in avg_frame_rate / r_frame_rate
    if not fr or "/" not in fr:
        return _maybe_float(fr)
    num, den = fr.split("/", 1)
    n, d = _maybe_float(num), _maybe_float(den)
    if n is None or not d:
        return None
    return n / d


def _string_tags(obj: Dict[str, Any] | None) -> Dict[str, str]:
    tags = (obj or {}).get("tags") or {}
    if not isinstance(tags, dict):
        return {}
    return {str(k): str(v) for k, v in tags.items() if v is not None}


def parse_ffprobe(data: Dict[str, Any], path: Path | None = None) -> MediaDescriptor:
    """
    Extract the fields we care about (container, duration, bitrates, first
    video/audio stream, tags) from ffprobe JSON. Safe to call in unit tests
    with fixture JSON.
    """
    fmt = (data or {}).get("format", {}) or {}
    streams = (data or {}).get("streams", []) or []

    vstreams = [s for s in streams if s.get("codec_type") == "video"]
    # cover art shows up as a one-frame video stream; skip it when a real one exists
    real_video = [s for s in vstreams if not (s.get("disposition") or {}).get("attached_pic")]
    v = (real_video or vstreams or [None])[0]
    a = next((s for s in streams if s.get("codec_type") == "audio"), None)
    subs = [s for s in streams if s.get("codec_type") == "subtitle"]

    duration = _maybe_float(fmt.get("duration"))
    if duration is None:
        # fallback: max stream duration
        ds = [d for d in (_maybe_float(s.get("duration")) for s in streams) if d is not None]
        duration = max(ds) if ds else None

    bitrate = _maybe_int(fmt.get("bit_rate"))
    if bitrate is None:
        sb = [b for b in (_maybe_int(s.get("bit_rate")) for s in streams) if b is not None]
        bitrate = sum(sb) if sb else None

    video = None
    if v is not None:
        video = VideoStreamInfo(
            codec=v.get("codec_name"),
            width=_maybe_int(v.get("width")),
            height=_maybe_int(v.get("height")),
            fps=_fps_from_fraction(v.get("avg_frame_rate")) or _fps_from_fraction(v.get("r_frame_rate")),
            pixel_format=v.get("pix_fmt"),
            bitrate=_maybe_int(v.get("bit_rate")),
        )

    audio = None
    if a is not None:
        audio = AudioStreamInfo(
            codec=a.get("codec_name"),
            sample_rate=_maybe_int(a.get("sample_rate")),
            channels=_maybe_int(a.get("channels")),
            bitrate=_maybe_int(a.get("bit_rate")),
        )

    return MediaDescriptor(
        path=Path(path) if path else None,
        container=fmt.get("format_name"),
        duration_sec=duration,
        bitrate=bitrate,
        size_bytes=_maybe_int(fmt.get("size")),
        video=video,
        audio=audio,
        stream_count=len(streams),
        subtitle_count=len(subs),
        tags=_string_tags(fmt),
    )
