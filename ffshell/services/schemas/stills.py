# ffshell/services/schemas/stills.py
from __future__ import annotations

from typing import Optional, Tuple

from pydantic import Field, model_validator

from ffshell.domain.enums.filters import GifDither, PaletteStatsMode, ScaleAlgorithm
from ffshell.domain.enums.upscale_policy import UpscalePolicy
from ffshell.services.schemas.common import SingleInputRequest, TimeValue


class ThumbnailRequest(SingleInputRequest):
    timestamp: Optional[TimeValue] = Field(None, description="Exact position; wins over percent")
    percent: Optional[float] = Field(None, ge=0.0, le=1.0, description="Position as a fraction of the duration")
    width: Optional[int] = Field(None, ge=16, le=7680)
    quality: int = Field(2, ge=1, le=31, description="ffmpeg -q:v for jpeg/webp (1 best, 31 worst)")
    fast_seek: bool = True

    @model_validator(mode="after")
    def _one_position(self):
        if self.timestamp is not None and self.percent is not None:
            raise ValueError("give either timestamp or percent, not both")
        return self


class ContactSheetRequest(SingleInputRequest):
    percents: Tuple[float, ...] = (10, 20, 30, 40, 50, 60, 70, 80, 90)
    grid: Optional[Tuple[int, int]] = Field(None, description="rows, cols; derived from the tile count if unset")
    tile_width: Optional[int] = Field(None, ge=16, le=4096)
    spacing: int = Field(6, ge=0, le=200)
    background: str = Field("#000000", pattern=r"^#?([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")
    upscale: UpscalePolicy = UpscalePolicy.if_smaller_than
    quality: int = Field(95, ge=1, le=100, description="Pillow quality for jpeg/webp sheets")

    @model_validator(mode="after")
    def _tiles(self):
        if not self.percents:
            raise ValueError("percents must not be empty")
        if self.grid is not None and (self.grid[0] < 1 or self.grid[1] < 1):
            raise ValueError("grid rows and cols must be positive")
        return self


class GifRequest(SingleInputRequest):
    start: TimeValue = "0"
    end: Optional[TimeValue] = None
    duration: Optional[TimeValue] = None
    fps: Optional[int] = Field(None, ge=1, le=50)
    width: Optional[int] = Field(None, ge=16, le=4096)
    algorithm: ScaleAlgorithm = ScaleAlgorithm.lanczos
    loop: int = Field(0, ge=-1, le=65535, description="0 loops forever, -1 plays once")
    optimize_palette: bool = Field(True, description="Two passes: palettegen, then paletteuse")
    dither: GifDither = GifDither.sierra2_4a
    max_colors: int = Field(256, ge=2, le=256)
    stats_mode: PaletteStatsMode = PaletteStatsMode.full
