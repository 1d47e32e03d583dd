# ffshell/domain/errors.py
from __future__ import annotations

from typing import Optional, Sequence


class FFshellError(Exception):
    """Base for every error this package raises on purpose."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class PreconditionError(FFshellError):
    """Something required before spawning was missing (input file, enough inputs)."""


class ToolNotAvailableError(PreconditionError):
    """
    ffmpeg / ffprobe is not installed or cannot be executed. `tool` is the
    tool name (it picks the settings variable in the hint); the configured
    binary path goes into `detail`.
    """

    def __init__(self, tool: str, detail: Optional[str] = None) -> None:
        msg = f"{tool} is not available; install ffmpeg or set {tool.upper()}_BIN"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)
        self.tool = tool


class RequestValidationError(FFshellError, ValueError):
    """An option value is outside its allowed set or range, or cannot be parsed."""


class ExecutionError(FFshellError):
    """The external tool exited non-zero (or timed out). `output` is its verbatim output."""

    def __init__(
        self,
        message: str,
        *,
        output: str = "",
        returncode: Optional[int] = None,
        command: Sequence[str] = (),
    ) -> None:
        full = f"{message}\n{output.strip()}" if output and output.strip() else message
        super().__init__(full)
        self.output = output
        self.returncode = returncode
        self.command = list(command)


class OutputMissingError(FFshellError):
    """The tool reported success but the declared output does not exist."""


class ProbeError(FFshellError):
    """ffprobe failed or returned something we could not parse."""

    def __init__(self, message: str, *, output: str = "", returncode: Optional[int] = None) -> None:
        super().__init__(message)
        self.output = output
        self.returncode = returncode
