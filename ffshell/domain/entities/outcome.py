# ffshell/domain/entities/outcome.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Optional, Tuple, Union

from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.entities.output import OutputFileHandle


@dataclass(frozen=True)
class Success:
    handles: Tuple[OutputFileHandle, ...]
    commands: Tuple[ArgumentList, ...] = ()

    @property
    def handle(self) -> OutputFileHandle:
        """The (first) artifact; most commands write exactly one."""
        return self.handles[0]

    @property
    def path(self) -> Path:
        return self.handles[0].path


@dataclass(frozen=True)
class Skipped:
    output_path: Path
    reason: str


class FailureKind(StrEnum):
    precondition = "precondition"
    validation = "validation"
    execution = "execution"
    postcondition = "postcondition"


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str
    output: str = ""
    returncode: Optional[int] = None
    command: Tuple[str, ...] = field(default_factory=tuple)


CommandResult = Union[Success, Skipped]
CommandOutcome = Union[Success, Skipped, Failure]
