# ffshell/services/ffmpeg/capability.py
from __future__ import annotations

import re
from typing import Dict, List, Optional

from ffshell.common.logging import get_logger
from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.entities.tools import ToolReport
from ffshell.domain.enums.modes import Tool
from ffshell.domain.errors import FFshellError, ToolNotAvailableError
from ffshell.domain.ports.capability import CapabilityPort
from ffshell.domain.ports.runner import CommandRunnerPort
from ffshell.services.ffmpeg.runner import SubprocessRunner

logger = get_logger(__name__)

_VERSION_RE = re.compile(r"^\s*(ffmpeg|ffprobe)\s+version\s+(\S+)", re.IGNORECASE)
# " V....D libx264  libx264 H.264 / AVC ..." -> libx264
_ENCODER_RE = re.compile(r"^\s*[VAS][F.][S.][X.][B.][D.]\s+(\S+)")


def parse_version(text: str) -> Optional[str]:
    for line in (text or "").splitlines():
        m = _VERSION_RE.match(line)
        if m:
            return m.group(2)
    return None


def parse_hwaccels(text: str) -> List[str]:
    """`ffmpeg -hwaccels` prints a header line then one name per line."""
    out: List[str] = []
    seen_header = False
    for line in (text or "").splitlines():
        s = line.strip()
        if not s:
            continue
        if s.lower().startswith("hardware acceleration methods"):
            seen_header = True
            continue
        if seen_header:
            out.append(s)
    return out


def parse_encoders(text: str) -> List[str]:
    out: List[str] = []
    past_legend = False
    for line in (text or "").splitlines():
        if line.strip().startswith("------"):
            past_legend = True
            continue
        if not past_legend:
            continue
        m = _ENCODER_RE.match(line)
        if m and m.group(1) != "=":
            out.append(m.group(1))
    return out


class ToolCapability(CapabilityPort):
    """
    Answers "can we run ffmpeg / ffprobe here?" by actually running
    `<bin> -version`. Any spawn failure or non-zero exit counts as
    unavailable; nothing here raises except `require()`.
    Answers are cached per instance.
    """

    def __init__(
        self,
        ffmpeg_bin: str = "ffmpeg",
        ffprobe_bin: str = "ffprobe",
        runner: Optional[CommandRunnerPort] = None,
    ) -> None:
        self.bins: Dict[Tool, str] = {Tool.ffmpeg: ffmpeg_bin, Tool.ffprobe: ffprobe_bin}
        self.runner = runner or SubprocessRunner(timeout_sec=15)
        self._version_text: Dict[Tool, Optional[str]] = {}

    # ---- Port API -------------------------------------------------------------
    def is_available(self, tool: Tool) -> bool:
        return self._version_output(tool) is not None

    def ffmpeg_available(self) -> bool:
        return self.is_available(Tool.ffmpeg)

    def ffprobe_available(self) -> bool:
        return self.is_available(Tool.ffprobe)

    def require(self, *tools: Tool) -> None:
        for t in tools:
            if not self.is_available(t):
                raise ToolNotAvailableError(str(t), f"tried {self.bins[t]}")

    def versions(self) -> Dict[str, Optional[str]]:
        return {str(t): parse_version(self._version_output(t) or "") for t in Tool}

    def report(self) -> ToolReport:
        ff = self.is_available(Tool.ffmpeg)
        versions = self.versions()
        hwaccels: List[str] = []
        encoders: List[str] = []
        if ff:
            hwaccels = parse_hwaccels(self._query(["-hide_banner", "-hwaccels"]) or "")
            encoders = parse_encoders(self._query(["-hide_banner", "-encoders"]) or "")
        return ToolReport(
            ffmpeg_available=ff,
            ffprobe_available=self.is_available(Tool.ffprobe),
            ffmpeg_version=versions[Tool.ffmpeg],
            ffprobe_version=versions[Tool.ffprobe],
            hwaccels=tuple(hwaccels),
            encoders=tuple(encoders),
        )

    # ---- internals ----------------------------------------------------------
    def _version_output(self, tool: Tool) -> Optional[str]:
        if tool not in self._version_text:
            self._version_text[tool] = self._run_quietly(ArgumentList(self.bins[tool], ("-version",)))
        return self._version_text[tool]

    def _query(self, tokens: List[str]) -> Optional[str]:
        return self._run_quietly(ArgumentList(self.bins[Tool.ffmpeg], tuple(tokens)))

    def _run_quietly(self, args: ArgumentList) -> Optional[str]:
        try:
            res = self.runner.run(args)
        except (FFshellError, OSError) as e:
            logger.debug("capability check failed for %s: %s", args, e)
            return None
        if not res.ok:
            logger.debug("capability check %s exited %s", args, res.returncode)
            return None
        return res.output


class StaticCapability(CapabilityPort):
    """Fixed answers; used by tests and by callers who already checked."""

    def __init__(
        self,
        ffmpeg: bool = True,
        ffprobe: bool = True,
        *,
        ffmpeg_version: Optional[str] = "static",
        ffprobe_version: Optional[str] = "static",
    ) -> None:
        self._available = {Tool.ffmpeg: ffmpeg, Tool.ffprobe: ffprobe}
        self._versions = {Tool.ffmpeg: ffmpeg_version, Tool.ffprobe: ffprobe_version}

    def is_available(self, tool: Tool) -> bool:
        return self._available[tool]

    def require(self, *tools: Tool) -> None:
        for t in tools:
            if not self._available[t]:
                raise ToolNotAvailableError(str(t))

    def versions(self) -> Dict[str, Optional[str]]:
        return {str(t): (self._versions[t] if self._available[t] else None) for t in Tool}

    def report(self) -> ToolReport:
        v = self.versions()
        return ToolReport(
            ffmpeg_available=self._available[Tool.ffmpeg],
            ffprobe_available=self._available[Tool.ffprobe],
            ffmpeg_version=v[Tool.ffmpeg],
            ffprobe_version=v[Tool.ffprobe],
        )
