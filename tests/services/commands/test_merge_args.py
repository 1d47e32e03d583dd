from pathlib import Path

import pytest

from ffshell.domain.errors import PreconditionError
from ffshell.services.commands.merge import build_concat_list, build_merge_args, concat_filter_graph, require_inputs
from ffshell.services.schemas.editing import MergeRequest

PARTS = [Path("/v/one.mp4"), Path("/v/two.mp4"), Path("/v/three's.mp4")]


def test_concat_list_keeps_order_and_quotes():
    assert build_concat_list(PARTS) == (
        "file '/v/one.mp4'\n"
        "file '/v/two.mp4'\n"
        "file '/v/three'\\''s.mp4'\n"
    )


def test_concat_filter_graph():
    assert concat_filter_graph(2) == "[0:v:0][0:a:0][1:v:0][1:a:0]concat=n=2:v=1:a=1[outv][outa]"
    assert concat_filter_graph(2, include_audio=False) == "[0:v:0][1:v:0]concat=n=2:v=1:a=0[outv]"


def test_fewer_than_two_inputs():
    with pytest.raises(PreconditionError) as e:
        require_inputs(PARTS[:1])
    assert "at least two inputs required" in str(e.value)


def test_demuxer_mode_reads_list_file(ctx):
    req = MergeRequest(inputs=PARTS, output_path=Path("/out/all.mp4"))
    a = build_merge_args(req, req.output_path, ctx, list_path=Path("/tmp/list.txt"))
    assert a.tokens[a.index("-i") - 4 : a.index("-i") + 2] == ("-f", "concat", "-safe", "0", "-i", "/tmp/list.txt")
    assert a.value_of("-c") == "copy"


def test_reencode_mode_has_one_input_per_part(ctx):
    req = MergeRequest(inputs=PARTS, output_path=Path("/out/all.mp4"), reencode=True)
    a = build_merge_args(req, req.output_path, ctx)
    inputs = [a.tokens[i + 1] for i, t in enumerate(a.tokens) if t == "-i"]
    assert inputs == [str(p) for p in PARTS]
    assert a.value_of("-filter_complex") == concat_filter_graph(3)
    maps = [a.tokens[i + 1] for i, t in enumerate(a.tokens) if t == "-map"]
    assert maps == ["[outv]", "[outa]"]
    assert a.value_of("-c:v") == "libx264"
