# ffshell/domain/entities/output.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class OutputFileHandle:
    """Resolved reference to an artifact the external tool wrote. The file belongs to the filesystem."""
    path: Path
    size_bytes: int
    modified_at: datetime
    created_at: datetime

    @property
    def exists(self) -> bool:
        return self.path.exists()
