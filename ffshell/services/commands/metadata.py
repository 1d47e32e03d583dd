# ffshell/services/commands/metadata.py
from __future__ import annotations

from pathlib import Path

from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.enums.file_format import FASTSTART_FORMATS, suffix_of
from ffshell.services.commands.base import BuildContext
from ffshell.services.schemas.metadata import SetMetadataRequest


def build_set_metadata_args(req: SetMetadataRequest, output: Path, ctx: BuildContext) -> ArgumentList:
    """
    Stream-copy the input and write container tags. With clear_existing the
    input's tags are dropped and bitexact keeps ffmpeg from adding its own
    `encoder` tag, so only the requested keys are present afterwards.
    """
    b = ctx.builder(overwrite=req.overwrite).input(req.input_path)
    b.map("0")
    b.output_option("-c", "copy")
    if req.clear_existing:
        b.output_option("-map_metadata", "-1", "-fflags", "+bitexact")
    else:
        b.output_option("-map_metadata", "0")
    if req.tags.custom and suffix_of(req.output_path) in FASTSTART_FORMATS:
        # mp4/mov only keep a fixed set of keys unless told otherwise
        b.output_option("-movflags", "use_metadata_tags")
    for key, value in req.tags.as_dict().items():
        b.output_option("-metadata", f"{key}={value}")
    return b.build(output)
