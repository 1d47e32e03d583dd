# ffshell/services/pipeline.py
from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Sequence

from ffshell.common.logging import get_logger
from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.entities.outcome import CommandResult, Skipped, Success
from ffshell.domain.enums.modes import Tool
from ffshell.domain.errors import OutputMissingError
from ffshell.domain.policies.overwrite import decide_overwrite, decide_overwrite_many
from ffshell.domain.ports.capability import CapabilityPort
from ffshell.domain.ports.runner import CommandRunnerPort
from ffshell.services.filesystem.local_file_ops import LocalFileOps

logger = get_logger(__name__)

BuildFn = Callable[[Path], ArgumentList]


class CommandPipeline:
    """
    The fixed path every ffmpeg command takes:
        require tools -> resolve inputs -> overwrite gate -> staging path
        -> build -> run -> check exit -> commit -> describe
    Nothing is spawned before the gate has passed.
    """

    def __init__(
        self,
        *,
        capability: CapabilityPort,
        runner: CommandRunnerPort,
        file_ops: LocalFileOps,
        atomic_outputs: bool = True,
    ) -> None:
        self.capability = capability
        self.runner = runner
        self.files = file_ops
        self.atomic_outputs = atomic_outputs

    # ---- gates --------------------------------------------------------------
    def prepare(self, inputs: Sequence[Path], tools: Sequence[Tool] = (Tool.ffmpeg,)) -> List[Path]:
        """Tool check plus input resolution; raises before anything runs."""
        self.capability.require(*tools)
        return [self.files.resolve_input(p) for p in inputs]

    def gate(self, output: Path, overwrite: bool) -> Skipped | None:
        decision = decide_overwrite(output, overwrite)
        if decision.proceed:
            return None
        logger.warning("skipping: %s", decision.reason)
        return Skipped(output_path=decision.path, reason=decision.reason or "output exists")

    # ---- single output ------------------------------------------------------
    def run_single(
        self,
        output: Path,
        build: BuildFn,
        *,
        overwrite: bool,
        inputs: Sequence[Path] = (),
        tools: Sequence[Tool] = (Tool.ffmpeg,),
    ) -> CommandResult:
        output = Path(output)
        self.prepare(inputs, tools)
        skipped = self.gate(output, overwrite)
        if skipped is not None:
            return skipped
        return self.execute(output, build, overwrite=overwrite)

    def execute(
        self,
        output: Path,
        build: BuildFn,
        *,
        overwrite: bool,
        before: Sequence[ArgumentList] = (),
    ) -> CommandResult:
        """
        Run after the gates: build against the staging path, run, commit,
        describe. `before` lists commands already run for this output
        (palette pass) so they show up in the result.
        """
        target = self.staging_target(output)
        args = build(target)
        try:
            self.runner.run(args).raise_for_status()
        except BaseException:
            self.discard_staging(target, output)
            raise
        return self.finish(target, output, overwrite=overwrite, commands=(*before, args))

    def staging_target(self, output: Path) -> Path:
        if self.atomic_outputs:
            return self.files.staging_path(output)
        self.files.ensure_dir(Path(output).parent)
        return Path(output)

    def discard_staging(self, target: Path, output: Path) -> None:
        if target != output:
            self.files.discard(target)

    def finish(
        self,
        target: Path,
        output: Path,
        *,
        overwrite: bool,
        commands: Sequence[ArgumentList] = (),
    ) -> CommandResult:
        """Commit a written staging file and map it to a handle."""
        if target != output:
            if not target.exists():
                raise OutputMissingError(f"external tool reported success but produced no file at {output}")
            if not self.files.commit(target, output, overwrite=overwrite):
                return Skipped(output_path=output, reason=f"output appeared while writing: {output}")
        return Success(handles=(self.files.describe(output),), commands=tuple(commands))

    # ---- several outputs (segment muxer) -----------------------------------
    def run_many(
        self,
        anchor: Path,
        existing: Callable[[], List[Path]],
        args: ArgumentList,
        *,
        overwrite: bool,
    ) -> CommandResult:
        """
        For commands whose tool writes a numbered set of files itself.
        `existing()` lists the files that belong to the set; the gate runs over
        them, and with overwrite they are removed first so no stale member
        survives a shorter run.
        """
        before = existing()
        decision = decide_overwrite_many(before, overwrite, anchor=anchor)
        if not decision.proceed:
            logger.warning("skipping: %s", decision.reason)
            return Skipped(output_path=decision.path, reason=decision.reason or "outputs exist")
        for p in before:
            self.files.discard(p)

        self.files.ensure_dir(anchor)
        self.runner.run(args).raise_for_status()
        produced = existing()
        if not produced:
            raise OutputMissingError(f"external tool reported success but wrote nothing under {anchor}")
        return Success(handles=tuple(self.files.describe(p) for p in produced), commands=(args,))
