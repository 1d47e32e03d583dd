# ffshell/domain/entities/execution.py
from __future__ import annotations

from dataclasses import dataclass

from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.errors import ExecutionError


@dataclass(frozen=True)
class ExecutionResult:
    command: ArgumentList
    returncode: int
    stdout: str = ""
    stderr: str = ""
    elapsed_sec: float = 0.0

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stdout + stderr. ffmpeg writes its diagnostics to stderr."""
        parts = [p for p in (self.stdout, self.stderr) if p]
        return "\n".join(parts)

    def raise_for_status(self) -> "ExecutionResult":
        if self.returncode != 0:
            raise ExecutionError(
                f"{self.command.binary} exited with code {self.returncode}",
                output=self.output,
                returncode=self.returncode,
                command=self.command.as_command(),
            )
        return self
