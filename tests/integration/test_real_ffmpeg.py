# Runs the real binaries; skipped where ffmpeg/ffprobe are not installed.
import shutil
import subprocess
from pathlib import Path

import pytest
from PIL import Image

from ffshell.common.settings import Settings
from ffshell.domain.entities.outcome import Skipped, Success
from ffshell.services.media_service import MediaService

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not (shutil.which("ffmpeg") and shutil.which("ffprobe")),
        reason="ffmpeg/ffprobe not installed",
    ),
]


@pytest.fixture(scope="module")
def sample(tmp_path_factory) -> Path:
    """Three seconds of test pattern plus a tone, mpeg4/aac so any build can write it."""
    p = tmp_path_factory.mktemp("media") / "sample.mp4"
    subprocess.run(
        [
            "ffmpeg", "-hide_banner", "-loglevel", "error", "-y",
            "-f", "lavfi", "-i", "testsrc=size=320x240:rate=25",
            "-f", "lavfi", "-i", "sine=frequency=440:sample_rate=44100",
            "-t", "3", "-c:v", "mpeg4", "-g", "25", "-c:a", "aac", "-shortest", str(p),
        ],
        check=True,
        capture_output=True,
    )
    return p


@pytest.fixture()
def real(tmp_path) -> MediaService:
    return MediaService(Settings(_env_file=None, temp_dir=tmp_path / "work"))


def test_probe(real, sample):
    desc = real.probe(sample)
    assert desc.duration_sec == pytest.approx(3.0, abs=0.2)
    assert desc.video.width == 320
    assert desc.has_audio


def test_metadata_round_trip(real, sample, tmp_path):
    tagged = tmp_path / "tagged.mp4"
    real.set_metadata({
        "input_path": sample, "output_path": tagged,
        "tags": {"title": "Test Pattern", "comment": "generated"},
    })
    assert real.probe(tagged).tag("title") == "Test Pattern"

    cleared = tmp_path / "cleared.mp4"
    real.set_metadata({
        "input_path": tagged, "output_path": cleared,
        "tags": {"artist": "Nobody"}, "clear_existing": True,
    })
    desc = real.probe(cleared)
    assert desc.tag("title") is None
    assert desc.tag("artist") == "Nobody"


def test_trim_copy_and_skip(real, sample, tmp_path):
    out = tmp_path / "cut.mp4"
    res = real.trim({"input_path": sample, "output_path": out, "start": 1, "duration": 1, "copy_streams": True})
    assert isinstance(res, Success)
    assert real.probe(out).duration_sec < 2.5
    assert isinstance(real.trim({"input_path": sample, "output_path": out, "duration": 1}), Skipped)


def test_gif_leaves_no_palette(real, sample, tmp_path):
    res = real.gif({"input_path": sample, "output_path": tmp_path / "a.gif", "duration": 1, "width": 120})
    assert isinstance(res, Success)
    with Image.open(res.path) as im:
        assert im.format == "GIF"
        assert im.width == 120
    assert list((tmp_path / "work").glob("ffshell-palette-*")) == []


def test_thumbnail_and_contact_sheet(real, sample, tmp_path):
    thumb = real.thumbnail({"input_path": sample, "output_path": tmp_path / "t.jpg", "percent": 0.5})
    with Image.open(thumb.path) as im:
        assert im.format == "JPEG"
        assert im.width == 960

    sheet = real.contact_sheet({
        "input_path": sample, "output_path": tmp_path / "sheet.png",
        "percents": [20, 40, 60, 80], "tile_width": 100, "spacing": 2,
    })
    with Image.open(sheet.path) as im:
        assert im.width == 2 * 100 + 3 * 2
    assert list((tmp_path / "work").glob("ffshell-frame-*")) == []


def test_merge_and_split(real, sample, tmp_path):
    merged = real.merge({"inputs": [sample, sample], "output_path": tmp_path / "twice.mp4"})
    assert real.probe(merged.path).duration_sec == pytest.approx(6.0, abs=0.5)

    parts = real.split({"input_path": merged.path, "output_dir": tmp_path / "parts", "segment_duration": 2})
    assert len(parts.handles) >= 2
    assert all(h.path.name.startswith("twice_") for h in parts.handles)


def test_extract_audio(real, sample, tmp_path):
    res = real.extract_audio({"input_path": sample, "output_path": tmp_path / "tone.wav"})
    desc = real.probe(res.path)
    assert desc.has_audio
    assert not desc.has_video
