import json

import pytest

from ffshell import cli


@pytest.fixture()
def run_cli(monkeypatch, capsys, cfg, service):
    monkeypatch.setattr(cli, "get_settings", lambda: cfg)
    monkeypatch.setattr(cli, "MediaService", lambda _cfg: service)

    def _run(*argv):
        code = cli.main([str(a) for a in argv])
        out = capsys.readouterr().out
        return code, (json.loads(out) if out.strip() else None)

    return _run


def test_versions(run_cli):
    code, doc = run_cli("versions")
    assert code == cli.EXIT_OK
    assert doc == {"status": "success", "versions": {"ffmpeg": "static", "ffprobe": "static"}}


def test_capabilities(run_cli):
    code, doc = run_cli("capabilities")
    assert code == cli.EXIT_OK
    assert doc["tools"]["ffmpeg_available"] is True


def test_probe(run_cli, video):
    code, doc = run_cli("probe", video)
    assert code == cli.EXIT_OK
    assert doc["media"]["duration_sec"] == 30.0
    assert doc["media"]["video"]["width"] == 1920


def test_probe_missing_file_fails(run_cli, tmp_path):
    code, doc = run_cli("probe", tmp_path / "nope.mp4")
    assert code == cli.EXIT_FAILED
    assert "Input file not found" in doc["message"]


def test_convert_then_skip(run_cli, runner, video, out_dir):
    target = out_dir / "clip.mkv"
    code, doc = run_cli("convert", video, "-o", target)
    assert code == cli.EXIT_OK
    assert doc["status"] == "success"
    assert doc["outputs"][0]["path"] == str(target.resolve())
    assert doc["commands"][0][0] == "ffmpeg"

    code, doc = run_cli("convert", video, "-o", target)
    assert code == cli.EXIT_SKIPPED
    assert doc["status"] == "skipped"
    assert len(runner.calls) == 1


def test_validation_failure_exit_code(run_cli, runner, video, out_dir):
    code, doc = run_cli("trim", video, "-o", out_dir / "t.mp4", "--start", "60", "--end", "40")
    assert code == cli.EXIT_FAILED
    assert doc["kind"] == "validation"
    assert runner.calls == []


def test_usage_error(run_cli):
    code, doc = run_cli("merge")
    assert code == cli.EXIT_USAGE
    assert doc is None


def test_set_metadata_tags(run_cli, runner, video, out_dir):
    code, _ = run_cli(
        "set-metadata", video, "-o", out_dir / "m.mp4", "--tag", "title=Hi=There", "--tag", "rating=5"
    )
    assert code == cli.EXIT_OK
    tokens = runner.calls[0].tokens
    assert "title=Hi=There" in tokens
    assert "rating=5" in tokens


def test_set_metadata_bad_tag(run_cli, runner, video, out_dir):
    code, doc = run_cli("set-metadata", video, "-o", out_dir / "m.mp4", "--tag", "oops")
    assert code == cli.EXIT_FAILED
    assert doc["kind"] == "validation"
    assert runner.calls == []


def test_split(run_cli, video, out_dir):
    code, doc = run_cli("split", video, "-d", out_dir, "--every", "10")
    assert code == cli.EXIT_OK
    assert [o["path"].rsplit("/", 1)[-1] for o in doc["outputs"]] == [
        "input_000.mp4", "input_001.mp4", "input_002.mp4",
    ]


def test_execution_failure_reports_returncode(monkeypatch, capsys, cfg, fake_probe, video, out_dir):
    from conftest import FakeRunner
    from ffshell.services.ffmpeg.capability import StaticCapability
    from ffshell.services.media_service import MediaService

    svc = MediaService(cfg, capability=StaticCapability(), runner=FakeRunner(returncodes=[1]), probe=fake_probe)
    monkeypatch.setattr(cli, "get_settings", lambda: cfg)
    monkeypatch.setattr(cli, "MediaService", lambda _cfg: svc)

    code = cli.main(["resize", str(video), "-o", str(out_dir / "r.mp4"), "--width", "640"])
    doc = json.loads(capsys.readouterr().out)
    assert code == cli.EXIT_FAILED
    assert doc["kind"] == "execution"
    assert doc["returncode"] == 1
