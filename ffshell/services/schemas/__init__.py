from ffshell.services.schemas.audio import ExtractAudioRequest
from ffshell.services.schemas.common import CommandRequest, EncodeOptions, SingleInputRequest, parse_request
from ffshell.services.schemas.editing import MergeRequest, SplitRequest, TrimRequest
from ffshell.services.schemas.metadata import MetadataTags, SetMetadataRequest
from ffshell.services.schemas.stills import ContactSheetRequest, GifRequest, ThumbnailRequest
from ffshell.services.schemas.subtitles import SubtitleRequest
from ffshell.services.schemas.transcode import ConvertRequest, OptimizeRequest, ResizeRequest
__all__ = [
    "CommandRequest",
    "EncodeOptions",
    "SingleInputRequest",
    "parse_request",
    "ConvertRequest",
    "ResizeRequest",
    "OptimizeRequest",
    "TrimRequest",
    "MergeRequest",
    "SplitRequest",
    "ExtractAudioRequest",
    "ThumbnailRequest",
    "ContactSheetRequest",
    "GifRequest",
    "SubtitleRequest",
    "MetadataTags",
    "SetMetadataRequest",
]
