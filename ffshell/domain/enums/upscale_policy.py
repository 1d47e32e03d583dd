# ffshell/domain/enums/upscale_policy.py
from __future__ import annotations

from enum import StrEnum


class UpscalePolicy(StrEnum):
    """Whether a target width/height larger than the source may enlarge it."""
    never = "never"
    if_smaller_than = "if_smaller_than"
    always = "always"
