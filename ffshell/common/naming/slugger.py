# ffshell/common/naming/slugger.py
from __future__ import annotations

import secrets
import string
from pathlib import Path
from typing import Iterable

DEFAULT_ALPHABET = string.ascii_lowercase + string.digits


def random_slug(length: int = 8, alphabet: Iterable[str] = DEFAULT_ALPHABET) -> str:
    """Generate a short, filesystem-friendly slug."""
    pool = tuple(alphabet)
    return "".join(secrets.choice(pool) for _ in range(length))


def staging_name(target: Path, tag: str = "partial") -> str:
    """
    Hidden sibling name for `target` that keeps its extension, so ffmpeg still
    picks the muxer from the suffix:
        out/clip.mp4 -> .clip.partial-k3x9a0q1.mp4
    """
    return f".{target.stem}.{tag}-{random_slug()}{target.suffix}"
