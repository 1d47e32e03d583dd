from __future__ import annotations

from typing import Protocol

from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.entities.execution import ExecutionResult


class CommandRunnerPort(Protocol):
    def run(self, args: ArgumentList) -> ExecutionResult:
        """
        Spawn `args.binary` with `args.tokens`, wait for it, capture output.
        Must not raise on a non-zero exit; callers use ExecutionResult.raise_for_status().
        """
        ...
