import json

import pytest

from ffshell.common.settings import Settings
from ffshell.domain.entities.execution import ExecutionResult
from ffshell.domain.errors import PreconditionError, ProbeError
from ffshell.services.probe.ffprobe_adapter import FFprobeAdapter


class _CannedRunner:
    def __init__(self, returncode=0, stdout="", stderr=""):
        self.returncode, self.stdout, self.stderr = returncode, stdout, stderr
        self.calls = []

    def run(self, args):
        self.calls.append(args)
        return ExecutionResult(command=args, returncode=self.returncode, stdout=self.stdout, stderr=self.stderr)


def _adapter(runner):
    return FFprobeAdapter(runner=runner, cfg=Settings(_env_file=None, ffprobe_bin="/usr/bin/ffprobe"))


def test_probe_parses_json(video):
    payload = {"format": {"duration": "5.0", "format_name": "matroska,webm"}, "streams": []}
    runner = _CannedRunner(stdout=json.dumps(payload))
    desc = _adapter(runner).probe(video)

    assert desc.duration_sec == 5.0
    assert desc.path == video
    assert runner.calls[0].binary == "/usr/bin/ffprobe"
    assert runner.calls[0].tokens[-1] == str(video)


def test_missing_file_never_spawns(tmp_path):
    runner = _CannedRunner()
    with pytest.raises(PreconditionError):
        _adapter(runner).probe(tmp_path / "nope.mp4")
    assert runner.calls == []


def test_non_zero_exit_is_probe_error(video):
    runner = _CannedRunner(returncode=1, stderr="Invalid data found when processing input")
    with pytest.raises(ProbeError) as e:
        _adapter(runner).probe(video)
    assert "Invalid data" in e.value.output
    assert e.value.returncode == 1


def test_invalid_json_is_probe_error(video):
    with pytest.raises(ProbeError):
        _adapter(_CannedRunner(stdout="{not json")).probe(video)
