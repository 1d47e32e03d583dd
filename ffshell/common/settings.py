# ffshell/common/settings.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ffshell.common.strings.splitters import to_bool


class FFmpegConfig(BaseModel):
    log_level: str = "error"  # quiet|panic|fatal|error|warning|info|verbose|debug|trace
    hide_banner: bool = True
    # None means wait for the process for as long as it takes
    timeout_sec: Optional[int] = Field(default=None, ge=1)
    threads: Optional[int] = Field(default=None, ge=0, le=256)

    @field_validator("hide_banner", mode="before")
    @classmethod
    def _boolify(cls, v):
        return to_bool(v, default=True)


class FFProbeConfig(BaseModel):
    timeout_sec: int = Field(default=30, ge=1)
    log_level: str = "error"


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "ffshell"
    app_env: str = "development"  # development|test|production
    log_level: str = "INFO"

    # -------- External binaries --------
    ffmpeg_bin: str = Field(default="ffmpeg", description="Name or absolute path of the ffmpeg binary")
    ffprobe_bin: str = Field(default="ffprobe", description="Name or absolute path of the ffprobe binary")

    # -------- Sub-configs --------
    ffmpeg: FFmpegConfig = FFmpegConfig()
    ffprobe: FFProbeConfig = FFProbeConfig()

    # -------- Files --------
    temp_dir: Optional[Path] = Field(default=None, description="Where intermediate artifacts go; system temp if unset")
    atomic_outputs: bool = Field(default=True, description="Write to a staging sibling, then move into place")

    # -------- Command defaults --------
    default_quality: str = Field("medium", pattern="^(low|medium|high|ultra)$")
    thumb_width: int = Field(960, ge=16, le=7680, description="Width of single-frame thumbnails")
    thumb_percent: float = Field(0.10, ge=0.0, le=1.0, description="Default thumbnail position within the video")
    collage_tile_width: int = Field(400, ge=16, le=4096, description="Width of each tile in a contact sheet")
    gif_fps: int = Field(10, ge=1, le=50)
    gif_width: int = Field(480, ge=16, le=4096)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @computed_field  # type: ignore[misc]
    @property
    def temp_root(self) -> Optional[Path]:
        return Path(self.temp_dir).expanduser() if self.temp_dir else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this at the edges (CLI, service
    construction) and pass the object down:
        from ffshell.common.settings import get_settings
        cfg = get_settings()
    """
    s = Settings()  # pydantic_settings will read from .env automatically
    if s.temp_root is not None:
        s.temp_root.mkdir(parents=True, exist_ok=True)
    return s
