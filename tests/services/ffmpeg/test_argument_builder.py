import pytest

from ffshell.services.ffmpeg.args import ArgumentBuilder


def test_global_flags_follow_overwrite_and_settings():
    a = ArgumentBuilder.for_ffmpeg("ffmpeg", overwrite=False).build("o.mp4")
    assert a.tokens[:5] == ("-hide_banner", "-loglevel", "error", "-nostdin", "-n")
    b = ArgumentBuilder.for_ffmpeg("ffmpeg", overwrite=True, log_level=None, hide_banner=False).build("o.mp4")
    assert b.tokens == ("-nostdin", "-y", "o.mp4")


def test_stages_are_emitted_in_fixed_order_regardless_of_call_order():
    b = ArgumentBuilder("ffmpeg", ["-y"])
    b.output_option("-c:v", "libx264")
    b.map("0:v:0")
    b.audio_filter("volume=2")
    b.video_filter("scale=640:-2")
    b.input("in.mp4", "-ss", "5")
    b.video_filter("setsar=1")
    args = b.build("out.mp4")
    assert args.tokens == (
        "-y",
        "-ss", "5", "-i", "in.mp4",
        "-vf", "scale=640:-2,setsar=1",
        "-af", "volume=2",
        "-map", "0:v:0",
        "-c:v", "libx264",
        "out.mp4",
    )


def test_pre_input_options_stay_with_their_input():
    b = ArgumentBuilder("ffmpeg")
    b.input("a.mp4", "-ss", "1")
    b.input("b.png")
    args = b.build("o.gif")
    assert list(args) == ["-ss", "1", "-i", "a.mp4", "-i", "b.png", "o.gif"]
    assert b.input_count == 2


def test_output_option_skips_none():
    args = ArgumentBuilder("ffmpeg").output_option("-t", None, "-an").build("o.mp4")
    assert list(args) == ["-t", "-an", "o.mp4"]


def test_vf_and_filter_complex_cannot_mix():
    b = ArgumentBuilder("ffmpeg").video_filter("scale=1:1").filter_complex("[0:v]null[v]")
    with pytest.raises(ValueError):
        b.build("o.mp4")
