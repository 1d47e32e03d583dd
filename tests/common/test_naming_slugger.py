import string
from pathlib import Path

from ffshell.common.naming.slugger import random_slug, staging_name


def test_random_slug_length_and_charset():
    slug = random_slug(12)
    assert len(slug) == 12
    for ch in slug:
        assert ch in string.ascii_lowercase + string.digits


def test_random_slug_varies():
    # Not a cryptographic test; just ensure outputs usually differ.
    slugs = {random_slug(8) for _ in range(50)}
    assert len(slugs) > 40


def test_staging_name_is_hidden_and_keeps_suffix():
    name = staging_name(Path("/out/clip.mp4"))
    assert name.startswith(".clip.partial-")
    assert name.endswith(".mp4")
    assert staging_name(Path("/out/clip.mp4")) != name
