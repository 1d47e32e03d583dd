# ffshell/services/schemas/metadata.py
from __future__ import annotations

import re
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ffshell.services.schemas.common import SingleInputRequest

_KEY_PATTERN = r"^[A-Za-z0-9_.-]+$"


class MetadataTags(BaseModel):
    """Well-known container tags, plus `custom` for anything else."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    album_artist: Optional[str] = None
    composer: Optional[str] = None
    genre: Optional[str] = None
    date: Optional[str] = None
    track: Optional[str] = None
    comment: Optional[str] = None
    description: Optional[str] = None
    copyright: Optional[str] = None
    language: Optional[str] = None
    custom: Dict[str, str] = Field(default_factory=dict)

    @field_validator("custom")
    @classmethod
    def _keys(cls, v: Dict[str, str]) -> Dict[str, str]:
        bad = [k for k in v if not re.match(_KEY_PATTERN, k)]
        if bad:
            raise ValueError(f"metadata keys may only use letters, digits, '_', '.', '-': {bad}")
        return v

    def as_dict(self) -> Dict[str, str]:
        """Set values only, well-known keys first, in declaration order."""
        out = {k: v for k, v in self.model_dump(exclude={"custom"}).items() if v is not None}
        out.update(self.custom)
        return out


class SetMetadataRequest(SingleInputRequest):
    tags: MetadataTags = Field(default_factory=MetadataTags)
    clear_existing: bool = Field(False, description="Drop every tag the input had before writing ours")
