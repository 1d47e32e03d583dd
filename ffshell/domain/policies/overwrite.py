# ffshell/domain/policies/overwrite.py
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Iterable, Optional


class OverwriteAction(StrEnum):
    proceed = "proceed"
    skip = "skip"


@dataclass(frozen=True)
class OverwriteDecision:
    action: OverwriteAction
    path: Path
    reason: Optional[str] = None

    @property
    def proceed(self) -> bool:
        return self.action is OverwriteAction.proceed


def decide_overwrite(output: Path, overwrite: bool) -> OverwriteDecision:
    """
    The only safety gate: an existing output is kept unless the caller asked
    for overwrite. Must run before anything is spawned.
    """
    output = Path(output)
    if output.exists() and not overwrite:
        return OverwriteDecision(
            OverwriteAction.skip,
            output,
            f"output already exists: {output} (pass overwrite to replace it)",
        )
    return OverwriteDecision(OverwriteAction.proceed, output)


def decide_overwrite_many(outputs: Iterable[Path], overwrite: bool, *, anchor: Path) -> OverwriteDecision:
    """Same gate for commands that write several files; `anchor` names the decision."""
    for p in outputs:
        d = decide_overwrite(p, overwrite)
        if not d.proceed:
            return OverwriteDecision(OverwriteAction.skip, Path(anchor), d.reason)
    return OverwriteDecision(OverwriteAction.proceed, Path(anchor))
