# ffshell/services/media_service.py
from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ffshell.common.logging import get_logger
from ffshell.common.settings import Settings, get_settings
from ffshell.common.timecodes import format_seconds, parse_timecode
from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.entities.outcome import CommandOutcome, CommandResult, Failure, FailureKind
from ffshell.domain.entities.probe import MediaDescriptor
from ffshell.domain.entities.tools import ToolReport
from ffshell.domain.enums.modes import SubtitleMode, Tool
from ffshell.domain.errors import (
    ExecutionError,
    FFshellError,
    OutputMissingError,
    PreconditionError,
    ProbeError,
    RequestValidationError,
)
from ffshell.domain.policies.collage import normalize_percents, preferred_collage_grid
from ffshell.domain.policies.profiles import OPTIMIZE_PROFILES
from ffshell.domain.policies.time_range import normalize_time_range
from ffshell.domain.ports.capability import CapabilityPort
from ffshell.domain.ports.probe import MediaProbePort
from ffshell.domain.ports.runner import CommandRunnerPort
from ffshell.services.commands.base import BuildContext
from ffshell.services.commands.convert import build_convert_args
from ffshell.services.commands.extract_audio import build_extract_audio_args, resolve_audio_format
from ffshell.services.commands.gif import build_gif_args, build_palette_args
from ffshell.services.commands.merge import build_concat_list, build_merge_args, require_inputs
from ffshell.services.commands.metadata import build_set_metadata_args
from ffshell.services.commands.optimize import build_optimize_args, target_video_kbps
from ffshell.services.commands.resize import build_resize_args
from ffshell.services.commands.split import build_split_args, existing_segments, segment_naming, segment_seconds
from ffshell.services.commands.subtitle import build_subtitle_args
from ffshell.services.commands.thumbnail import build_frame_args, decide_width, image_format_of, time_from_percent
from ffshell.services.commands.trim import build_trim_args
from ffshell.services.ffmpeg.capability import ToolCapability
from ffshell.services.ffmpeg.runner import SubprocessRunner
from ffshell.services.filesystem.local_file_ops import LocalFileOps
from ffshell.services.pipeline import CommandPipeline
from ffshell.services.probe.ffprobe_adapter import FFprobeAdapter
from ffshell.services.schemas import (
    ContactSheetRequest,
    ConvertRequest,
    ExtractAudioRequest,
    GifRequest,
    MergeRequest,
    OptimizeRequest,
    ResizeRequest,
    SetMetadataRequest,
    SplitRequest,
    SubtitleRequest,
    ThumbnailRequest,
    TrimRequest,
    parse_request,
)
from ffshell.services.thumbs.contact_sheet import compose_sheet, pillow_save

logger = get_logger(__name__)

RequestLike = Any  # a request model or a plain mapping of its fields

# operations attempt() may dispatch to; each writes files and returns a CommandResult
OPERATIONS = (
    "convert",
    "resize",
    "trim",
    "merge",
    "extract_audio",
    "thumbnail",
    "contact_sheet",
    "gif",
    "subtitle",
    "set_metadata",
    "split",
    "optimize",
)


class MediaService:
    """
    One method per operation. Each validates its request, checks the
    overwrite gate, spawns ffmpeg and returns Success or Skipped; anything
    that goes wrong is raised as an FFshellError. Use attempt() to get a
    Failure value instead.
    """

    def __init__(
        self,
        cfg: Optional[Settings] = None,
        *,
        capability: Optional[CapabilityPort] = None,
        runner: Optional[CommandRunnerPort] = None,
        probe: Optional[MediaProbePort] = None,
        file_ops: Optional[LocalFileOps] = None,
    ) -> None:
        self.cfg = cfg or get_settings()
        self.runner = runner or SubprocessRunner(timeout_sec=self.cfg.ffmpeg.timeout_sec)
        self.capability = capability or ToolCapability(self.cfg.ffmpeg_bin, self.cfg.ffprobe_bin)
        self.prober = probe or FFprobeAdapter(cfg=self.cfg)
        self.files = file_ops or LocalFileOps(self.cfg.temp_root)
        self.ctx = BuildContext.from_settings(self.cfg)
        self.pipeline = CommandPipeline(
            capability=self.capability,
            runner=self.runner,
            file_ops=self.files,
            atomic_outputs=self.cfg.atomic_outputs,
        )

    # ---- queries --------------------------------------------------------------
    def capabilities(self) -> ToolReport:
        return self.capability.report()

    def versions(self) -> Dict[str, Optional[str]]:
        return self.capability.versions()

    def probe(self, path: Path | str) -> MediaDescriptor:
        self.capability.require(Tool.ffprobe)
        return self.prober.probe(self.files.resolve_input(path))

    get_metadata = probe

    # ---- transcoding ----------------------------------------------------------
    def convert(self, req: ConvertRequest | Mapping[str, Any]) -> CommandResult:
        req = parse_request(ConvertRequest, req)
        return self.pipeline.run_single(
            req.output_path,
            lambda out: build_convert_args(req, out, self.ctx),
            overwrite=req.overwrite,
            inputs=[req.input_path],
        )

    def resize(self, req: ResizeRequest | Mapping[str, Any]) -> CommandResult:
        req = parse_request(ResizeRequest, req)
        return self.pipeline.run_single(
            req.output_path,
            lambda out: build_resize_args(req, out, self.ctx),
            overwrite=req.overwrite,
            inputs=[req.input_path],
        )

    def optimize(self, req: OptimizeRequest | Mapping[str, Any]) -> CommandResult:
        req = parse_request(OptimizeRequest, req)
        tools = (Tool.ffmpeg, Tool.ffprobe) if req.target_size_mb else (Tool.ffmpeg,)
        (src,) = self.pipeline.prepare([req.input_path], tools)

        duration = None
        if req.target_size_mb:
            duration = self.prober.probe(src).duration_sec
            # fail on an impossible size before the gate, same as any bad option
            target_video_kbps(req.target_size_mb, duration, OPTIMIZE_PROFILES[req.profile].audio_bitrate)

        skipped = self.pipeline.gate(req.output_path, req.overwrite)
        if skipped is not None:
            return skipped
        return self.pipeline.execute(
            req.output_path,
            lambda out: build_optimize_args(req, out, self.ctx, duration=duration),
            overwrite=req.overwrite,
        )

    # ---- editing --------------------------------------------------------------
    def trim(self, req: TrimRequest | Mapping[str, Any]) -> CommandResult:
        req = parse_request(TrimRequest, req)
        normalize_time_range(req.start, req.end, req.duration)
        return self.pipeline.run_single(
            req.output_path,
            lambda out: build_trim_args(req, out, self.ctx),
            overwrite=req.overwrite,
            inputs=[req.input_path],
        )

    def merge(self, req: MergeRequest | Mapping[str, Any]) -> CommandResult:
        req = parse_request(MergeRequest, req)
        require_inputs(req.inputs)
        inputs = self.pipeline.prepare(req.inputs)
        skipped = self.pipeline.gate(req.output_path, req.overwrite)
        if skipped is not None:
            return skipped

        if req.reencode:
            return self.pipeline.execute(
                req.output_path,
                lambda out: build_merge_args(req, out, self.ctx, inputs=inputs),
                overwrite=req.overwrite,
            )

        with self.files.temp_artifact(".txt", prefix="ffshell-concat-") as list_path:
            list_path.write_text(build_concat_list(inputs), encoding="utf-8")
            logger.debug("concat list %s with %d entries", list_path, len(inputs))
            return self.pipeline.execute(
                req.output_path,
                lambda out: build_merge_args(req, out, self.ctx, inputs=inputs, list_path=list_path),
                overwrite=req.overwrite,
            )

    def split(self, req: SplitRequest | Mapping[str, Any]) -> CommandResult:
        req = parse_request(SplitRequest, req)
        segment_naming(req)
        if req.segment_count is None or req.segment_duration is not None:
            # also rejects both-or-neither
            seconds = segment_seconds(req)
            self.pipeline.prepare([req.input_path])
        else:
            (src,) = self.pipeline.prepare([req.input_path], (Tool.ffmpeg, Tool.ffprobe))
            seconds = segment_seconds(req, self.prober.probe(src).duration_sec)
        args = build_split_args(req, self.ctx, seconds=seconds)
        return self.pipeline.run_many(
            Path(req.output_dir),
            lambda: existing_segments(req),
            args,
            overwrite=req.overwrite,
        )

    # ---- audio ----------------------------------------------------------------
    def extract_audio(self, req: ExtractAudioRequest | Mapping[str, Any]) -> CommandResult:
        req = parse_request(ExtractAudioRequest, req)
        resolve_audio_format(req)
        return self.pipeline.run_single(
            req.output_path,
            lambda out: build_extract_audio_args(req, out, self.ctx),
            overwrite=req.overwrite,
            inputs=[req.input_path],
        )

    # ---- stills ---------------------------------------------------------------
    def thumbnail(self, req: ThumbnailRequest | Mapping[str, Any]) -> CommandResult:
        req = parse_request(ThumbnailRequest, req)
        image_format_of(req.output_path)
        at = parse_timecode(req.timestamp, field="timestamp") if req.timestamp is not None else None
        tools = (Tool.ffmpeg,) if at is not None else (Tool.ffmpeg, Tool.ffprobe)
        (src,) = self.pipeline.prepare([req.input_path], tools)

        skipped = self.pipeline.gate(req.output_path, req.overwrite)
        if skipped is not None:
            return skipped
        if at is None:
            percent = req.percent if req.percent is not None else self.ctx.thumb_percent
            at = time_from_percent(percent, self.prober.probe(src).duration_sec, source=src)

        return self.pipeline.execute(
            req.output_path,
            lambda out: build_frame_args(
                req.input_path,
                out,
                self.ctx,
                at=at,
                width=req.width or self.ctx.thumb_width,
                quality=req.quality,
                fast_seek=req.fast_seek,
                overwrite=req.overwrite,
            ),
            overwrite=req.overwrite,
        )

    def contact_sheet(self, req: ContactSheetRequest | Mapping[str, Any]) -> CommandResult:
        req = parse_request(ContactSheetRequest, req)
        fmt = image_format_of(req.output_path)
        (src,) = self.pipeline.prepare([req.input_path], (Tool.ffmpeg, Tool.ffprobe))
        skipped = self.pipeline.gate(req.output_path, req.overwrite)
        if skipped is not None:
            return skipped

        info = self.prober.probe(src)
        dur = info.duration_sec or 0
        if dur <= 0:
            raise PreconditionError(f"cannot build a contact sheet for {src}: duration unknown")

        times = [dur * p for p in normalize_percents(req.percents)]
        rows, cols = req.grid or preferred_collage_grid(len(times))
        times = times[: rows * cols]
        tile_w = decide_width(
            info.video.width if info.video else None,
            req.tile_width or self.ctx.collage_tile_width,
            req.upscale,
        )

        commands: List[ArgumentList] = []
        with ExitStack() as stack:
            frames = [stack.enter_context(self.files.temp_artifact(".png", prefix="ffshell-frame-")) for _ in times]
            for t, frame in zip(times, frames):
                args = build_frame_args(req.input_path, frame, self.ctx, at=t, width=tile_w, overwrite=True)
                self.runner.run(args).raise_for_status()
                commands.append(args)
                if not frame.is_file() or frame.stat().st_size == 0:
                    # exit 0 with no frame: the seek landed past the last decodable one
                    raise OutputMissingError(
                        f"ffmpeg reported success but wrote no frame at {format_seconds(t)}s of {src}"
                    )

            sheet = compose_sheet(
                frames,
                grid=(rows, cols),
                tile_width=tile_w,
                spacing=req.spacing,
                background=req.background,
            )
            target = self.pipeline.staging_target(req.output_path)
            try:
                pillow_save(sheet, target, fmt, req.quality)
            except BaseException:
                self.pipeline.discard_staging(target, req.output_path)
                raise
        return self.pipeline.finish(target, req.output_path, overwrite=req.overwrite, commands=commands)

    def gif(self, req: GifRequest | Mapping[str, Any]) -> CommandResult:
        req = parse_request(GifRequest, req)
        normalize_time_range(req.start, req.end, req.duration)
        self.pipeline.prepare([req.input_path])
        skipped = self.pipeline.gate(req.output_path, req.overwrite)
        if skipped is not None:
            return skipped

        if not req.optimize_palette:
            return self.pipeline.execute(
                req.output_path,
                lambda out: build_gif_args(req, out, self.ctx),
                overwrite=req.overwrite,
            )

        # the palette is removed whether either stage fails or not
        with self.files.temp_artifact(".png", prefix="ffshell-palette-") as palette:
            palette_args = build_palette_args(req, palette, self.ctx)
            self.runner.run(palette_args).raise_for_status()
            return self.pipeline.execute(
                req.output_path,
                lambda out: build_gif_args(req, out, self.ctx, palette=palette),
                overwrite=req.overwrite,
                before=(palette_args,),
            )

    # ---- subtitles / metadata ------------------------------------------------
    def subtitle(self, req: SubtitleRequest | Mapping[str, Any]) -> CommandResult:
        req = parse_request(SubtitleRequest, req)
        embed = req.mode is SubtitleMode.embed
        tools = (Tool.ffmpeg, Tool.ffprobe) if embed else (Tool.ffmpeg,)
        src, subs = self.pipeline.prepare([req.input_path, req.subtitle_path], tools)
        skipped = self.pipeline.gate(req.output_path, req.overwrite)
        if skipped is not None:
            return skipped

        existing = self.prober.probe(src).subtitle_count if embed else 0
        return self.pipeline.execute(
            req.output_path,
            lambda out: build_subtitle_args(
                req, out, self.ctx, subtitle_path=subs, existing_subtitle_streams=existing
            ),
            overwrite=req.overwrite,
        )

    def set_metadata(self, req: SetMetadataRequest | Mapping[str, Any]) -> CommandResult:
        req = parse_request(SetMetadataRequest, req)
        return self.pipeline.run_single(
            req.output_path,
            lambda out: build_set_metadata_args(req, out, self.ctx),
            overwrite=req.overwrite,
            inputs=[req.input_path],
        )

    # ---- value-style entry point ---------------------------------------------
    def attempt(self, operation: str, request: RequestLike) -> CommandOutcome:
        """
        Run `operation` and return Success, Skipped or Failure instead of
        raising. Only FFshellErrors are folded; bugs still raise.
        """
        if operation not in OPERATIONS:
            raise ValueError(f"unknown operation {operation!r}; expected one of {', '.join(OPERATIONS)}")
        try:
            return getattr(self, operation)(request)
        except FFshellError as e:
            logger.debug("%s failed: %s", operation, e)
            return to_failure(e)


def to_failure(e: FFshellError) -> Failure:
    if isinstance(e, RequestValidationError):
        return Failure(FailureKind.validation, e.message)
    if isinstance(e, PreconditionError):
        return Failure(FailureKind.precondition, e.message)
    if isinstance(e, OutputMissingError):
        return Failure(FailureKind.postcondition, e.message)
    if isinstance(e, ExecutionError):
        return Failure(
            FailureKind.execution,
            e.message,
            output=e.output,
            returncode=e.returncode,
            command=tuple(e.command),
        )
    if isinstance(e, ProbeError):
        return Failure(FailureKind.execution, e.message, output=e.output, returncode=e.returncode)
    return Failure(FailureKind.execution, e.message)
