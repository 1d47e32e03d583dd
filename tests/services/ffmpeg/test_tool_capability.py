import pytest

from ffshell.domain.entities.command import ArgumentList
from ffshell.domain.entities.execution import ExecutionResult
from ffshell.domain.enums.modes import Tool
from ffshell.domain.errors import ToolNotAvailableError
from ffshell.services.ffmpeg.capability import (
    StaticCapability,
    ToolCapability,
    parse_encoders,
    parse_hwaccels,
    parse_version,
)

FFMPEG_VERSION = "ffmpeg version 6.1.1-3ubuntu5 Copyright (c) 2000-2023 the FFmpeg developers\nbuilt with gcc 13\n"
FFPROBE_VERSION = "ffprobe version 6.1.1 Copyright (c) 2007-2023 the FFmpeg developers\n"
HWACCELS = "Hardware acceleration methods:\nvdpau\ncuda\nvaapi\n\n"
ENCODERS = """Encoders:
 V..... = Video
 A..... = Audio
 ------
 V....D libx264              libx264 H.264 / AVC / MPEG-4 AVC (codec h264)
 V....D h264_nvenc           NVIDIA NVENC H.264 encoder (codec h264)
 A....D aac                  AAC (Advanced Audio Coding)
"""


class ScriptedRunner:
    def __init__(self, answers):
        self.answers = answers
        self.calls = []

    def run(self, args: ArgumentList) -> ExecutionResult:
        self.calls.append(args)
        key = (args.binary, args.tokens[-1])
        if key not in self.answers:
            raise ToolNotAvailableError(args.binary, "not found")
        rc, out = self.answers[key]
        return ExecutionResult(command=args, returncode=rc, stdout=out)


def test_parsers():
    assert parse_version(FFMPEG_VERSION) == "6.1.1-3ubuntu5"
    assert parse_version("garbage") is None
    assert parse_hwaccels(HWACCELS) == ["vdpau", "cuda", "vaapi"]
    assert parse_encoders(ENCODERS) == ["libx264", "h264_nvenc", "aac"]


def test_available_tools_and_report():
    runner = ScriptedRunner({
        ("ffmpeg", "-version"): (0, FFMPEG_VERSION),
        ("ffprobe", "-version"): (0, FFPROBE_VERSION),
        ("ffmpeg", "-hwaccels"): (0, HWACCELS),
        ("ffmpeg", "-encoders"): (0, ENCODERS),
    })
    cap = ToolCapability("ffmpeg", "ffprobe", runner=runner)
    assert cap.ffmpeg_available()
    assert cap.ffprobe_available()
    assert cap.versions() == {"ffmpeg": "6.1.1-3ubuntu5", "ffprobe": "6.1.1"}

    report = cap.report()
    assert report.ffmpeg_available and report.ffprobe_available
    assert report.hwaccels == ("vdpau", "cuda", "vaapi")
    assert report.has_encoder("h264_nvenc")


def test_missing_tool_never_raises_until_required():
    runner = ScriptedRunner({("ffmpeg", "-version"): (0, FFMPEG_VERSION)})
    cap = ToolCapability("ffmpeg", "ffprobe", runner=runner)
    assert cap.is_available(Tool.ffmpeg)
    assert not cap.is_available(Tool.ffprobe)
    assert cap.versions()["ffprobe"] is None
    with pytest.raises(ToolNotAvailableError) as e:
        cap.require(Tool.ffmpeg, Tool.ffprobe)
    assert e.value.tool == "ffprobe"


def test_non_zero_exit_means_unavailable_and_is_cached():
    runner = ScriptedRunner({("ffmpeg", "-version"): (1, "")})
    cap = ToolCapability("ffmpeg", "ffprobe", runner=runner)
    assert not cap.ffmpeg_available()
    assert not cap.ffmpeg_available()
    assert len([c for c in runner.calls if c.binary == "ffmpeg"]) == 1


def test_static_capability():
    cap = StaticCapability(ffmpeg=True, ffprobe=False)
    assert cap.versions() == {"ffmpeg": "static", "ffprobe": None}
    assert not cap.report().ffprobe_available


def test_require_names_the_setting_and_the_configured_path():
    cap = ToolCapability("/usr/local/bin/ffmpeg", "ffprobe", runner=ScriptedRunner({}))
    with pytest.raises(ToolNotAvailableError) as e:
        cap.require(Tool.ffmpeg)
    assert e.value.tool == "ffmpeg"
    assert "set FFMPEG_BIN" in e.value.message
    assert "tried /usr/local/bin/ffmpeg" in e.value.message
