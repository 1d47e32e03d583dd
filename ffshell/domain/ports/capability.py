from __future__ import annotations

from typing import Dict, Optional, Protocol

from ffshell.domain.entities.tools import ToolReport
from ffshell.domain.enums.modes import Tool


class CapabilityPort(Protocol):
    def is_available(self, tool: Tool) -> bool: ...

    def require(self, *tools: Tool) -> None:
        """Raise ToolNotAvailableError for the first missing tool."""
        ...

    def versions(self) -> Dict[str, Optional[str]]: ...

    def report(self) -> ToolReport: ...
