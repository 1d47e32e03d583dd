from pathlib import Path

from ffshell.common.probe.ffprobe_helpers import build_ffprobe_cmd, parse_ffprobe


def test_build_ffprobe_cmd_uses_json_flags(tmp_path):
    f = tmp_path / "video.mp4"
    cmd = build_ffprobe_cmd(f)
    assert cmd.binary == "ffprobe"
    # Core JSON-ish flags we rely on
    assert "-show_streams" in cmd
    assert "-show_format" in cmd
    assert cmd.value_of("-print_format") == "json"
    assert str(f) == cmd.tokens[-1]


def test_build_ffprobe_cmd_protects_dash_names():
    cmd = build_ffprobe_cmd("-weird.mp4", ffprobe_bin="/usr/bin/ffprobe")
    assert cmd.tokens[-1] == "file:-weird.mp4"
    assert cmd.as_command()[0] == "/usr/bin/ffprobe"


def test_parse_ffprobe_minimal():
    data = {
        "format": {
            "duration": "12.34",
            "format_name": "mov,mp4,m4a,3gp,3g2,mj2",
            "bit_rate": "123456",
            "size": "1000",
            "tags": {"title": "Demo", "encoder": "Lavf60"},
        },
        "streams": [
            {
                "codec_type": "video",
                "codec_name": "h264",
                "width": 1920,
                "height": 1080,
                "r_frame_rate": "30000/1001",
                "pix_fmt": "yuv420p",
            },
            {"codec_type": "audio", "codec_name": "aac", "sample_rate": "48000", "channels": 2},
            {"codec_type": "subtitle", "codec_name": "mov_text"},
        ],
    }

    out = parse_ffprobe(data, path=Path("/x/demo.mp4"))
    assert out.duration_sec == 12.34
    assert out.container.startswith("mov")
    assert out.bitrate == 123456
    assert out.size_bytes == 1000
    assert out.video.codec == "h264"
    assert out.video.width == 1920
    assert 29.9 < out.video.fps < 30.1
    assert out.audio.codec == "aac"
    assert out.audio.sample_rate == 48000
    assert out.subtitle_count == 1
    assert out.stream_count == 3
    assert out.tag("TITLE") == "Demo"


def test_parse_ffprobe_fallbacks_and_cover_art():
    data = {
        "format": {"format_name": "mp3"},
        "streams": [
            {"codec_type": "video", "codec_name": "mjpeg", "disposition": {"attached_pic": 1}},
            {"codec_type": "audio", "codec_name": "mp3", "duration": "200.5", "bit_rate": "320000"},
        ],
    }
    out = parse_ffprobe(data)
    # cover art is the only video stream, so it is still reported
    assert out.video.codec == "mjpeg"
    assert out.duration_sec == 200.5
    assert out.bitrate == 320000
    assert out.tags == {}


def test_parse_ffprobe_empty():
    out = parse_ffprobe({})
    assert out.duration_sec is None
    assert not out.has_video
    assert not out.has_audio
