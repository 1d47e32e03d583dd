# ffshell/domain/entities/probe.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional


@dataclass(frozen=True)
class VideoStreamInfo:
    codec: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    fps: Optional[float] = None
    pixel_format: Optional[str] = None
    bitrate: Optional[int] = None


@dataclass(frozen=True)
class AudioStreamInfo:
    codec: Optional[str] = None
    sample_rate: Optional[int] = None
    channels: Optional[int] = None
    bitrate: Optional[int] = None


@dataclass(frozen=True)
class MediaDescriptor:
    """
    Normalized, framework-free result of probing one file with ffprobe.
    Built on demand and never persisted; lifetime is the call that made it.
    """
    path: Optional[Path] = None
    container: Optional[str] = None
    duration_sec: Optional[float] = None
    bitrate: Optional[int] = None
    size_bytes: Optional[int] = None
    video: Optional[VideoStreamInfo] = None
    audio: Optional[AudioStreamInfo] = None
    stream_count: int = 0
    subtitle_count: int = 0
    # container-level tags (title, artist, comment, ...) as reported by ffprobe
    tags: Dict[str, str] = field(default_factory=dict)

    @property
    def has_video(self) -> bool:
        return self.video is not None

    @property
    def has_audio(self) -> bool:
        return self.audio is not None

    def tag(self, key: str) -> Optional[str]:
        """Case-insensitive tag lookup (mp4 and mkv disagree on key case)."""
        want = key.lower()
        for k, v in self.tags.items():
            if k.lower() == want:
                return v
        return None
