from pathlib import Path

import pytest

from ffshell.domain.errors import PreconditionError, RequestValidationError
from ffshell.services.commands.split import build_split_args, existing_segments, segment_pattern, segment_seconds
from ffshell.services.schemas.editing import SplitRequest


def _req(tmp_path, **kw):
    return SplitRequest(input_path=Path("/media/talk.mp4"), output_dir=tmp_path, **kw)


def test_pattern_defaults_to_input_stem_and_suffix(tmp_path):
    assert segment_pattern(_req(tmp_path, segment_duration="10")) == tmp_path / "talk_%03d.mp4"
    assert segment_pattern(_req(tmp_path, segment_duration="10", prefix="part", extension="MKV")) == (
        tmp_path / "part_%03d.mkv"
    )


def test_segment_seconds(tmp_path):
    assert segment_seconds(_req(tmp_path, segment_duration="1:00")) == 60
    assert segment_seconds(_req(tmp_path, segment_count=4), 100.0) == 25
    with pytest.raises(PreconditionError):
        segment_seconds(_req(tmp_path, segment_count=4), None)
    with pytest.raises(RequestValidationError):
        segment_seconds(_req(tmp_path))
    with pytest.raises(RequestValidationError):
        segment_seconds(_req(tmp_path, segment_duration="10", segment_count=2))
    with pytest.raises(RequestValidationError):
        segment_seconds(_req(tmp_path, segment_duration="0"))


def test_copy_split_args(tmp_path, ctx):
    a = build_split_args(_req(tmp_path, segment_duration="10"), ctx, seconds=10)
    assert a.value_of("-c") == "copy"
    assert a.value_of("-f") == "segment"
    assert a.value_of("-segment_time") == "10"
    assert a.value_of("-reset_timestamps") == "1"
    assert a.tokens[-1] == str(tmp_path / "talk_%03d.mp4")


def test_reencode_split_forces_keyframes(tmp_path, ctx):
    a = build_split_args(_req(tmp_path, segment_duration="10", copy_streams=False), ctx, seconds=12.5)
    assert a.value_of("-force_key_frames") == "expr:gte(t,n_forced*12.5)"
    assert a.value_of("-c:v") == "libx264"


def test_existing_segments_only_match_the_set(tmp_path):
    for name in ("talk_001.mp4", "talk_000.mp4", "talk_x.mp4", "other_000.mp4", "talk_0001.mp4"):
        (tmp_path / name).write_bytes(b"x")
    found = existing_segments(_req(tmp_path, segment_duration="10"))
    assert [p.name for p in found] == ["talk_000.mp4", "talk_001.mp4"]


def test_existing_segments_sort_by_counter_past_999(tmp_path):
    for name in ("talk_1000.mp4", "talk_999.mp4", "talk_002.mp4", "talk_10000.mp4"):
        (tmp_path / name).write_bytes(b"x")
    found = existing_segments(_req(tmp_path, segment_duration="10"))
    assert [p.name for p in found] == ["talk_002.mp4", "talk_999.mp4", "talk_1000.mp4", "talk_10000.mp4"]
