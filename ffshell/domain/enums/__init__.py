from ffshell.domain.enums.codecs import AudioCodec, HardwareAccel, VideoCodec
from ffshell.domain.enums.file_format import AudioFormats, ImageFormats, VideoFormats
from ffshell.domain.enums.filters import GifDither, PaletteStatsMode, ScaleAlgorithm
from ffshell.domain.enums.modes import OptimizeProfile, SubtitleMode, Tool
from ffshell.domain.enums.quality import EncoderSpeed, QualityPreset
from ffshell.domain.enums.upscale_policy import UpscalePolicy
__all__ = [
    "AudioCodec",
    "HardwareAccel",
    "VideoCodec",
    "AudioFormats",
    "ImageFormats",
    "VideoFormats",
    "GifDither",
    "PaletteStatsMode",
    "ScaleAlgorithm",
    "OptimizeProfile",
    "SubtitleMode",
    "Tool",
    "EncoderSpeed",
    "QualityPreset",
    "UpscalePolicy",
]
