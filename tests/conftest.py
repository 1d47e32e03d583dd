# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pytest
from PIL import Image

from ffshell.common.settings import Settings
from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.entities.execution import ExecutionResult
from ffshell.domain.entities.probe import MediaDescriptor, VideoStreamInfo
from ffshell.services.commands.base import BuildContext
from ffshell.services.ffmpeg.capability import StaticCapability
from ffshell.services.media_service import MediaService

_IMAGE_SUFFIXES = {".png": "PNG", ".jpg": "JPEG", ".jpeg": "JPEG", ".webp": "WEBP", ".bmp": "BMP"}


def _write_fake_output(target: str, segments: int) -> None:
    """Stand in for ffmpeg: put something at the path it would have written."""
    if "%03d" in target:
        for i in range(segments):
            p = Path(target.replace("%03d", f"{i:03d}"))
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_bytes(b"segment")
        return
    p = Path(target)
    p.parent.mkdir(parents=True, exist_ok=True)
    fmt = _IMAGE_SUFFIXES.get(p.suffix.lower())
    if fmt:
        Image.new("RGB", (64, 36), color=(200, 30, 30)).save(p, format=fmt)
    else:
        p.write_bytes(b"fake media output")


class FakeRunner:
    """
    Records every ArgumentList it is asked to run.
    `returncodes` are consumed in order (0 once exhausted); on rc 0 the output
    named by the last token is created unless write_output is False.
    """

    def __init__(
        self,
        *,
        returncodes: Optional[List[int]] = None,
        write_output: bool = True,
        segments: int = 3,
        stdout: str = "",
        stderr: str = "boom: invalid data",
    ) -> None:
        self.calls: List[ArgumentList] = []
        self.returncodes = list(returncodes or [])
        self.write_output = write_output
        self.segments = segments
        self.stdout = stdout
        self.stderr = stderr

    def run(self, args: ArgumentList) -> ExecutionResult:
        self.calls.append(args)
        rc = self.returncodes.pop(0) if self.returncodes else 0
        if rc == 0 and self.write_output:
            _write_fake_output(args.tokens[-1], self.segments)
        return ExecutionResult(
            command=args,
            returncode=rc,
            stdout=self.stdout,
            stderr="" if rc == 0 else self.stderr,
        )


class FakeProbe:
    def __init__(self, descriptor: Optional[MediaDescriptor] = None) -> None:
        self.descriptor = descriptor or MediaDescriptor(
            container="mov,mp4,m4a,3gp,3g2,mj2",
            duration_sec=30.0,
            video=VideoStreamInfo(codec="h264", width=1920, height=1080, fps=25.0),
        )
        self.calls: List[Path] = []

    def probe(self, path: Path) -> MediaDescriptor:
        self.calls.append(Path(path))
        return self.descriptor


@pytest.fixture()
def cfg(tmp_path) -> Settings:
    return Settings(_env_file=None, temp_dir=tmp_path / "work")


@pytest.fixture()
def ctx() -> BuildContext:
    return BuildContext()


@pytest.fixture()
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def fake_probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture()
def service(cfg, runner, fake_probe) -> MediaService:
    return MediaService(cfg, capability=StaticCapability(), runner=runner, probe=fake_probe)


@pytest.fixture()
def video(tmp_path) -> Path:
    p = tmp_path / "input.mp4"
    p.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    return p


@pytest.fixture()
def out_dir(tmp_path) -> Path:
    d = tmp_path / "out"
    d.mkdir()
    return d
