# ffshell/services/filesystem/local_file_ops.py
from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

from ffshell.common.logging import get_logger
from ffshell.common.naming.slugger import random_slug, staging_name
from ffshell.domain.entities.output import OutputFileHandle
from ffshell.domain.errors import OutputMissingError, PreconditionError

logger = get_logger(__name__)


class LocalFileOps:
    """
    Local filesystem side of every command: input checks, staging outputs,
    committing them into place, temp artifacts and stat -> handle mapping.
    """

    def __init__(self, temp_root: Optional[Path] = None) -> None:
        self.temp_root = Path(temp_root) if temp_root else None

    # ---- inputs -------------------------------------------------------------
    def resolve_input(self, path: Path | str) -> Path:
        p = Path(path).expanduser()
        if not p.is_file():
            raise PreconditionError(f"Input file not found: {p}")
        return p.resolve()

    def ensure_dir(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    # ---- outputs ------------------------------------------------------------
    def staging_path(self, target: Path) -> Path:
        target = Path(target)
        self.ensure_dir(target.parent)
        return target.parent / staging_name(target)

    def commit(self, staged: Path, target: Path, *, overwrite: bool) -> bool:
        """
        Move a finished staging file onto `target`.

        overwrite=True: os.replace (atomic on one filesystem).
        overwrite=False: hard-link without clobbering, so a file that appeared
        at `target` after the overwrite gate ran is kept. Returns False (and
        drops the staged file) in that case.
        """
        staged, target = Path(staged), Path(target)
        if overwrite:
            os.replace(staged, target)
            return True
        try:
            os.link(staged, target)
        except FileExistsError:
            logger.warning("%s appeared while we were writing; keeping the existing file", target)
            staged.unlink(missing_ok=True)
            return False
        except OSError:
            # no hard links here (e.g. FAT, some network mounts)
            if target.exists():
                logger.warning("%s appeared while we were writing; keeping the existing file", target)
                staged.unlink(missing_ok=True)
                return False
            os.replace(staged, target)
            return True
        staged.unlink(missing_ok=True)
        return True

    def discard(self, path: Optional[Path]) -> None:
        if path is not None:
            Path(path).unlink(missing_ok=True)

    def describe(self, path: Path) -> OutputFileHandle:
        p = Path(path)
        try:
            st = p.stat()
        except FileNotFoundError:
            raise OutputMissingError(
                f"external tool reported success but produced no file at {p}"
            ) from None
        return OutputFileHandle(
            path=p.resolve(),
            size_bytes=st.st_size,
            modified_at=datetime.fromtimestamp(st.st_mtime),
            created_at=datetime.fromtimestamp(getattr(st, "st_birthtime", st.st_ctime)),
        )

    # ---- intermediates ------------------------------------------------------
    @contextmanager
    def temp_artifact(self, suffix: str, *, prefix: str = "ffshell-") -> Iterator[Path]:
        """
        Unique path for an intermediate file (palette, concat list, frame).
        The file is removed on exit whether the body succeeded or not.
        """
        root = self.temp_root or Path(tempfile.gettempdir())
        self.ensure_dir(root)
        path = root / f"{prefix}{random_slug(12)}{suffix}"
        try:
            yield path
        finally:
            path.unlink(missing_ok=True)
