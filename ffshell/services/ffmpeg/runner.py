# ffshell/services/ffmpeg/runner.py
from __future__ import annotations

import subprocess
import time
from pathlib import Path
from typing import Optional

from ffshell.common.logging import get_logger
from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.entities.execution import ExecutionResult
from ffshell.domain.errors import ExecutionError, ToolNotAvailableError
from ffshell.domain.ports.runner import CommandRunnerPort

logger = get_logger(__name__)


class SubprocessRunner(CommandRunnerPort):
    """
    Runs one external command to completion and captures its output.
    No retries: an invocation may already have written part of its output.
    """

    def __init__(self, timeout_sec: Optional[int] = None) -> None:
        self.timeout_sec = timeout_sec

    def run(self, args: ArgumentList) -> ExecutionResult:
        cmd = args.as_command()
        logger.debug("exec: %s", args)
        started = time.monotonic()
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                stdin=subprocess.DEVNULL,
                timeout=self.timeout_sec,
                check=False,  # we handle rc ourselves to keep the output
            )
        except subprocess.TimeoutExpired as e:
            out = _text(e.stdout) + _text(e.stderr)
            raise ExecutionError(
                f"{args.binary} timed out after {self.timeout_sec}s", output=out, command=cmd
            ) from e
        except OSError as e:
            raise ToolNotAvailableError(Path(args.binary).stem, f"{args.binary}: {e}") from e

        elapsed = time.monotonic() - started
        result = ExecutionResult(
            command=args,
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
            elapsed_sec=elapsed,
        )
        if result.ok:
            logger.debug("%s finished in %.2fs", args.binary, elapsed)
        else:
            logger.error("%s exited with %s: %s", args.binary, result.returncode, result.output.strip())
        return result


def _text(x: bytes | str | None) -> str:
    if x is None:
        return ""
    if isinstance(x, bytes):
        return x.decode("utf-8", "replace")
    return x
