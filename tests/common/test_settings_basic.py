from ffshell.common import settings as s
from ffshell.common.settings import Settings, get_settings


def test_settings_env_overrides_and_temp_dir(tmp_path, monkeypatch):
    s.get_settings.cache_clear()
    monkeypatch.setenv("FFMPEG_BIN", "/opt/ffmpeg/bin/ffmpeg")
    monkeypatch.setenv("FFMPEG__TIMEOUT_SEC", "120")
    monkeypatch.setenv("FFMPEG__HIDE_BANNER", "no")
    monkeypatch.setenv("TEMP_DIR", str(tmp_path / "scratch"))
    try:
        cfg = get_settings()
        assert cfg.ffmpeg_bin == "/opt/ffmpeg/bin/ffmpeg"
        assert cfg.ffmpeg.timeout_sec == 120
        assert cfg.ffmpeg.hide_banner is False
        assert cfg.temp_root == tmp_path / "scratch"
        assert cfg.temp_root.exists()
    finally:
        s.get_settings.cache_clear()


def test_settings_defaults():
    cfg = Settings(_env_file=None)
    assert cfg.ffprobe_bin == "ffprobe"
    assert cfg.ffmpeg.log_level == "error"
    assert cfg.ffmpeg.timeout_sec is None
    assert cfg.ffprobe.timeout_sec == 30
    assert cfg.atomic_outputs is True
    assert cfg.default_quality == "medium"
    assert cfg.thumb_percent == 0.10
