# ffshell/services/probe/ffprobe_adapter.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from ffshell.common.logging import get_logger
from ffshell.common.probe.ffprobe_helpers import build_ffprobe_cmd, parse_ffprobe
from ffshell.common.settings import Settings, get_settings
from ffshell.domain.entities.probe import MediaDescriptor
from ffshell.domain.errors import PreconditionError, ProbeError
from ffshell.domain.ports.probe import MediaProbePort
from ffshell.domain.ports.runner import CommandRunnerPort
from ffshell.services.ffmpeg.runner import SubprocessRunner

logger = get_logger(__name__)


class FFprobeAdapter(MediaProbePort):
    """
    Infrastructure adapter implementing MediaProbePort using `ffprobe`.
    The runner is injectable so tests can hand back canned JSON.
    """

    def __init__(
        self,
        ffprobe_bin: Optional[str] = None,
        *,
        runner: Optional[CommandRunnerPort] = None,
        cfg: Optional[Settings] = None,
    ) -> None:
        cfg = cfg or get_settings()
        self.ffprobe_bin = ffprobe_bin or cfg.ffprobe_bin
        self.log_level = cfg.ffprobe.log_level
        self.runner = runner or SubprocessRunner(timeout_sec=cfg.ffprobe.timeout_sec)

    # ---- Port API -------------------------------------------------------------
    def probe(self, path: Path) -> MediaDescriptor:
        if not path:
            raise PreconditionError("No path provided to probe().")
        path = Path(path)
        if not path.is_file():
            raise PreconditionError(f"File not found: {path}")

        args = build_ffprobe_cmd(path, ffprobe_bin=self.ffprobe_bin, log_level=self.log_level)
        res = self.runner.run(args)
        if not res.ok:
            raise ProbeError(
                f"ffprobe returned non-zero exit code for {path}",
                output=res.output,
                returncode=res.returncode,
            )

        try:
            data = json.loads(res.stdout or "{}")
        except json.JSONDecodeError as e:
            raise ProbeError("ffprobe produced invalid JSON", output=res.stdout) from e

        desc = parse_ffprobe(data, path=path)
        logger.debug("probed %s: container=%s duration=%s", path, desc.container, desc.duration_sec)
        return desc
