from __future__ import annotations
from pathlib import Path
from typing import Protocol
from ffshell.domain.entities.probe import MediaDescriptor

class MediaProbePort(Protocol):
    def probe(self, path: Path) -> MediaDescriptor: ...
