# ffshell/cli.py
"""
Command line front end. Every sub-command prints one JSON document to stdout.

Exit codes: 0 success, 1 failure, 2 usage error, 3 skipped (output existed).
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ffshell.common.logging import get_logger, set_level
from ffshell.common.settings import get_settings
from ffshell.common.strings.splitters import csv_to_list, key_value_pairs
from ffshell.domain.entities.outcome import Failure, Skipped, Success
from ffshell.domain.enums import (
    AudioCodec,
    AudioFormats,
    EncoderSpeed,
    GifDither,
    HardwareAccel,
    OptimizeProfile,
    PaletteStatsMode,
    QualityPreset,
    ScaleAlgorithm,
    SubtitleMode,
    UpscalePolicy,
    VideoCodec,
)
from ffshell.domain.errors import FFshellError
from ffshell.services.media_service import MediaService
from ffshell.services.schemas.metadata import MetadataTags

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_SKIPPED = 3

# argparse dests that are not request fields
_CLI_ONLY = {"command", "verbose", "quiet", "input", "output", "tag"}


# ---- JSON rendering -----------------------------------------------------------
def _plain(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        return {k: _plain(v) for k, v in asdict(obj).items()}
    if isinstance(obj, dict):
        return {str(k): _plain(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_plain(v) for v in obj]
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    return obj


def _emit(data: Dict[str, Any], code: int) -> int:
    print(json.dumps(_plain(data), indent=2))
    return code


def outcome_summary(outcome: Success | Skipped | Failure) -> tuple[Dict[str, Any], int]:
    if isinstance(outcome, Success):
        return {
            "status": "success",
            "outputs": [
                {"path": h.path, "size_bytes": h.size_bytes, "modified_at": h.modified_at}
                for h in outcome.handles
            ],
            "commands": [c.as_command() for c in outcome.commands],
        }, EXIT_OK
    if isinstance(outcome, Skipped):
        return {"status": "skipped", "output": outcome.output_path, "reason": outcome.reason}, EXIT_SKIPPED
    return {
        "status": "failed",
        "kind": outcome.kind,
        "message": outcome.message,
        "returncode": outcome.returncode,
        "command": list(outcome.command),
    }, EXIT_FAILED


# ---- request assembly ---------------------------------------------------------
def request_fields(args: argparse.Namespace) -> Dict[str, Any]:
    """Namespace -> request dict: drop CLI-only keys and options left unset."""
    data = {k: v for k, v in vars(args).items() if k not in _CLI_ONLY and v is not None}
    if getattr(args, "input", None) is not None:
        data["input_path"] = args.input
    if getattr(args, "output", None) is not None:
        data["output_path"] = args.output
    return data


def metadata_tags(items: Optional[List[str]]) -> Dict[str, Any]:
    """`--tag title=X --tag myKey=Y` -> well-known fields plus `custom`."""
    pairs = key_value_pairs(items)
    known = set(MetadataTags.model_fields) - {"custom"}
    tags: Dict[str, Any] = {k: v for k, v in pairs.items() if k in known}
    custom = {k: v for k, v in pairs.items() if k not in known}
    if custom:
        tags["custom"] = custom
    return tags


# ---- parser -------------------------------------------------------------------
def _choices(enum_cls) -> List[str]:
    return [e.value for e in enum_cls]


def _io(p: argparse.ArgumentParser) -> None:
    p.add_argument("input", type=Path, help="Source media file")
    p.add_argument("-o", "--output", type=Path, required=True, help="Where to write the result")
    p.add_argument("--overwrite", action="store_true", default=None, help="Replace an existing output")


def _quality(p: argparse.ArgumentParser) -> None:
    g = p.add_argument_group("encoding")
    g.add_argument("--video-codec", dest="video_codec", choices=_choices(VideoCodec))
    g.add_argument("--hw-accel", dest="hw_accel", choices=_choices(HardwareAccel))
    g.add_argument("--quality", choices=_choices(QualityPreset))
    g.add_argument("--crf", type=int)
    g.add_argument("--video-bitrate", dest="video_bitrate")
    g.add_argument("--audio-bitrate", dest="audio_bitrate")
    g.add_argument("--speed", dest="encoder_speed", choices=_choices(EncoderSpeed))


def _time_window(p: argparse.ArgumentParser) -> None:
    p.add_argument("--start", help="Seconds or [HH:]MM:SS")
    w = p.add_mutually_exclusive_group()
    w.add_argument("--end")
    w.add_argument("--duration")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ffshell", description="Typed wrapper around ffmpeg and ffprobe")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every command at DEBUG")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("convert", help="Change container and/or codecs")
    _io(p)
    _quality(p)
    p.add_argument("--audio-codec", dest="audio_codec", choices=_choices(AudioCodec))
    p.add_argument("--frame-rate", dest="frame_rate", type=float)
    p.add_argument("--pixel-format", dest="pixel_format")
    p.add_argument("--sample-rate", dest="audio_sample_rate", type=int)
    p.add_argument("--channels", dest="audio_channels", type=int)
    p.add_argument("--no-audio", dest="no_audio", action="store_true", default=None)
    p.add_argument("--no-video", dest="no_video", action="store_true", default=None)
    p.add_argument("--no-faststart", dest="faststart", action="store_false", default=None)

    p = sub.add_parser("resize", help="Scale video")
    _io(p)
    _quality(p)
    p.add_argument("--width", type=int)
    p.add_argument("--height", type=int)
    p.add_argument("--algorithm", choices=_choices(ScaleAlgorithm))
    p.add_argument("--upscale", choices=_choices(UpscalePolicy))
    p.add_argument("--pad", action="store_true", default=None)
    p.add_argument("--pad-color", dest="pad_color")

    p = sub.add_parser("trim", help="Cut a time range")
    _io(p)
    _quality(p)
    _time_window(p)
    p.add_argument("--accurate", dest="fast_seek", action="store_false", default=None,
                   help="Seek after decoding (frame exact, slower)")
    p.add_argument("--copy", dest="copy_streams", action="store_true", default=None)

    p = sub.add_parser("merge", help="Concatenate inputs in order")
    p.add_argument("inputs", type=Path, nargs="+")
    p.add_argument("-o", "--output", type=Path, required=True)
    p.add_argument("--overwrite", action="store_true", default=None)
    _quality(p)
    p.add_argument("--reencode", action="store_true", default=None)
    p.add_argument("--no-audio", dest="include_audio", action="store_false", default=None)

    p = sub.add_parser("extract-audio", help="Write one audio stream to its own file")
    _io(p)
    p.add_argument("--format", choices=_choices(AudioFormats))
    p.add_argument("--stream", dest="stream_index", type=int)
    p.add_argument("--bitrate")
    p.add_argument("--sample-rate", dest="sample_rate", type=int)
    p.add_argument("--channels", type=int)

    p = sub.add_parser("thumbnail", help="Grab one frame as an image")
    _io(p)
    pos = p.add_mutually_exclusive_group()
    pos.add_argument("--at", dest="timestamp")
    pos.add_argument("--percent", type=float)
    p.add_argument("--width", type=int)
    p.add_argument("--jpeg-q", dest="quality", type=int)
    p.add_argument("--accurate", dest="fast_seek", action="store_false", default=None)

    p = sub.add_parser("contact-sheet", help="Grid of frames in one image")
    _io(p)
    p.add_argument("--percents", type=lambda s: tuple(float(x) for x in csv_to_list(s)),
                   help="Comma separated, 0..1 or 0..100")
    p.add_argument("--grid", type=lambda s: tuple(int(x) for x in s.lower().split("x")), help="ROWSxCOLS")
    p.add_argument("--tile-width", dest="tile_width", type=int)
    p.add_argument("--spacing", type=int)
    p.add_argument("--background")
    p.add_argument("--upscale", choices=_choices(UpscalePolicy))

    p = sub.add_parser("gif", help="Animated GIF from a time range")
    _io(p)
    _time_window(p)
    p.add_argument("--fps", type=int)
    p.add_argument("--width", type=int)
    p.add_argument("--algorithm", choices=_choices(ScaleAlgorithm))
    p.add_argument("--loop", type=int)
    p.add_argument("--single-pass", dest="optimize_palette", action="store_false", default=None)
    p.add_argument("--dither", choices=_choices(GifDither))
    p.add_argument("--max-colors", dest="max_colors", type=int)
    p.add_argument("--stats-mode", dest="stats_mode", choices=_choices(PaletteStatsMode))

    p = sub.add_parser("subtitle", help="Burn in or embed a subtitle file")
    _io(p)
    _quality(p)
    p.add_argument("--subtitles", dest="subtitle_path", type=Path, required=True)
    p.add_argument("--mode", choices=_choices(SubtitleMode))
    p.add_argument("--font-name", dest="font_name")
    p.add_argument("--font-size", dest="font_size", type=int)
    p.add_argument("--charset")
    p.add_argument("--language")
    p.add_argument("--title")
    p.add_argument("--default", action="store_true", default=None)

    p = sub.add_parser("set-metadata", help="Write container tags (streams copied)")
    _io(p)
    p.add_argument("--tag", action="append", metavar="KEY=VALUE")
    p.add_argument("--clear", dest="clear_existing", action="store_true", default=None)

    p = sub.add_parser("split", help="Cut into numbered segments")
    p.add_argument("input", type=Path)
    p.add_argument("-d", "--output-dir", dest="output_dir", type=Path, required=True)
    p.add_argument("--overwrite", action="store_true", default=None)
    p.add_argument("--prefix")
    p.add_argument("--extension")
    n = p.add_mutually_exclusive_group(required=True)
    n.add_argument("--every", dest="segment_duration")
    n.add_argument("--count", dest="segment_count", type=int)
    p.add_argument("--reencode", dest="copy_streams", action="store_false", default=None)

    p = sub.add_parser("optimize", help="Re-encode with a delivery profile")
    _io(p)
    p.add_argument("--profile", choices=_choices(OptimizeProfile))
    p.add_argument("--max-height", dest="max_height", type=int)
    p.add_argument("--target-size-mb", dest="target_size_mb", type=float)
    p.add_argument("--strip-metadata", dest="strip_metadata", action="store_true", default=None)

    p = sub.add_parser("probe", help="Describe a media file")
    p.add_argument("input", type=Path)

    sub.add_parser("capabilities", help="What ffmpeg can do here")
    sub.add_parser("versions", help="ffmpeg / ffprobe versions")
    return parser


# ---- handlers -----------------------------------------------------------------
def _run_operation(service: MediaService, operation: str, args: argparse.Namespace) -> int:
    data = request_fields(args)
    if operation == "set_metadata":
        try:
            data["tags"] = metadata_tags(args.tag)
        except ValueError as e:
            return _emit({"status": "failed", "kind": "validation", "message": str(e)}, EXIT_FAILED)
    summary, code = outcome_summary(service.attempt(operation, data))
    return _emit(summary, code)


def _probe(service: MediaService, args: argparse.Namespace) -> int:
    return _emit({"status": "success", "media": service.probe(args.input)}, EXIT_OK)


def _capabilities(service: MediaService, args: argparse.Namespace) -> int:
    return _emit({"status": "success", "tools": service.capabilities()}, EXIT_OK)


def _versions(service: MediaService, args: argparse.Namespace) -> int:
    return _emit({"status": "success", "versions": service.versions()}, EXIT_OK)


_QUERIES: Dict[str, Callable[[MediaService, argparse.Namespace], int]] = {
    "probe": _probe,
    "capabilities": _capabilities,
    "versions": _versions,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits 2 on bad usage and 0 for --help
        return EXIT_USAGE if e.code else EXIT_OK

    cfg = get_settings()
    set_level(logging.DEBUG if args.verbose else logging.ERROR if args.quiet else cfg.log_level)
    service = MediaService(cfg)

    query = _QUERIES.get(args.command)
    try:
        if query is not None:
            return query(service, args)
        return _run_operation(service, args.command.replace("-", "_"), args)
    except FFshellError as e:
        logger.debug("%s failed", args.command, exc_info=True)
        return _emit({"status": "failed", "message": e.message}, EXIT_FAILED)


if __name__ == "__main__":
    sys.exit(main())
