import pytest

from ffshell.domain.enums.codecs import AudioCodec, HardwareAccel, VideoCodec
from ffshell.domain.enums.quality import EncoderSpeed
from ffshell.domain.errors import RequestValidationError
from ffshell.domain.policies.encoders import audio_encoder, rate_control_args, speed_args, video_encoder


def test_software_and_hardware_encoder_names():
    assert video_encoder(VideoCodec.H264) == "libx264"
    assert video_encoder(VideoCodec.VP9) == "libvpx-vp9"
    assert video_encoder(VideoCodec.H265, HardwareAccel.nvenc) == "hevc_nvenc"
    assert video_encoder(VideoCodec.H264, HardwareAccel.videotoolbox) == "h264_videotoolbox"
    assert video_encoder(VideoCodec.COPY, HardwareAccel.qsv) == "copy"


def test_unsupported_hardware_combination():
    with pytest.raises(RequestValidationError):
        video_encoder(VideoCodec.VP9, HardwareAccel.videotoolbox)


def test_audio_encoder_names():
    assert audio_encoder(AudioCodec.MP3) == "libmp3lame"
    assert audio_encoder(AudioCodec.PCM) == "pcm_s16le"


def test_x264_crf_and_cap():
    assert rate_control_args("libx264", VideoCodec.H264, crf=23) == ["-crf", "23"]
    assert rate_control_args("libx264", VideoCodec.H264, crf=23, bitrate="2M") == [
        "-crf", "23", "-maxrate", "2M", "-bufsize", "4M",
    ]


def test_vp9_constant_quality_needs_zero_bitrate():
    assert rate_control_args("libvpx-vp9", VideoCodec.VP9, crf=33) == ["-crf", "33", "-b:v", "0"]


def test_hardware_quality_flags():
    assert rate_control_args("h264_nvenc", VideoCodec.H264, crf=23) == ["-rc", "vbr", "-cq", "23"]
    assert rate_control_args("hevc_qsv", VideoCodec.H265, crf=25) == ["-global_quality", "25"]
    assert rate_control_args("h264_vaapi", VideoCodec.H264, crf=20) == ["-rc_mode", "CQP", "-qp", "20"]


def test_bitrate_only():
    assert rate_control_args("libx264", VideoCodec.H264, bitrate="2500k") == ["-b:v", "2500k"]
    assert rate_control_args("libx264", VideoCodec.H264) == []


def test_speed_args_per_family():
    assert speed_args("libx264", EncoderSpeed.slow) == ["-preset", "slow"]
    assert speed_args("h264_nvenc", EncoderSpeed.ultrafast) == ["-preset", "p1"]
    assert speed_args("h264_nvenc", EncoderSpeed.veryslow) == ["-preset", "p7"]
    assert speed_args("libvpx-vp9", EncoderSpeed.medium) == ["-deadline", "good", "-cpu-used", "2"]
    assert speed_args("libaom-av1", EncoderSpeed.slow) == ["-cpu-used", "2"]
    assert speed_args("libx264", None) == []
