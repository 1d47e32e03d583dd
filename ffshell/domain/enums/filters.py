# ffshell/domain/enums/filters.py
from __future__ import annotations

from enum import StrEnum


class ScaleAlgorithm(StrEnum):
    """Values for the scale filter's `flags` option."""
    fast_bilinear = "fast_bilinear"
    bilinear = "bilinear"
    bicubic = "bicubic"
    neighbor = "neighbor"
    area = "area"
    gauss = "gauss"
    lanczos = "lanczos"
    spline = "spline"


class GifDither(StrEnum):
    """Values for paletteuse's `dither` option."""
    none = "none"
    bayer = "bayer"
    heckbert = "heckbert"
    floyd_steinberg = "floyd_steinberg"
    sierra2 = "sierra2"
    sierra2_4a = "sierra2_4a"


class PaletteStatsMode(StrEnum):
    full = "full"
    diff = "diff"
    single = "single"
