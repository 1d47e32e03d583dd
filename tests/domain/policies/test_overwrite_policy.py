from ffshell.domain.policies.overwrite import OverwriteAction, decide_overwrite, decide_overwrite_many


def test_missing_output_proceeds(tmp_path):
    d = decide_overwrite(tmp_path / "new.mp4", overwrite=False)
    assert d.proceed
    assert d.reason is None


def test_existing_output_is_skipped_without_overwrite(tmp_path):
    out = tmp_path / "old.mp4"
    out.write_bytes(b"keep me")
    d = decide_overwrite(out, overwrite=False)
    assert d.action is OverwriteAction.skip
    assert "already exists" in d.reason
    assert out.read_bytes() == b"keep me"


def test_existing_output_proceeds_with_overwrite(tmp_path):
    out = tmp_path / "old.mp4"
    out.write_bytes(b"x")
    assert decide_overwrite(out, overwrite=True).proceed


def test_many_skips_when_any_member_exists(tmp_path):
    a, b = tmp_path / "a_000.mp4", tmp_path / "a_001.mp4"
    b.write_bytes(b"x")
    d = decide_overwrite_many([a, b], overwrite=False, anchor=tmp_path)
    assert not d.proceed
    assert d.path == tmp_path
    assert "a_001.mp4" in d.reason
    assert decide_overwrite_many([a, b], overwrite=True, anchor=tmp_path).proceed
