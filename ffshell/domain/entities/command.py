# ffshell/domain/entities/command.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from ffshell.common.logging import format_command


@dataclass(frozen=True)
class ArgumentList:
    """
    Ordered, immutable command line for one external tool invocation.
    Order is meaningful (seek before/after input, map order, filter stages).
    `tokens` excludes the binary itself.
    """
    binary: str
    tokens: Tuple[str, ...] = ()

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __contains__(self, item: object) -> bool:
        return item in self.tokens

    def as_command(self) -> List[str]:
        return [self.binary, *self.tokens]

    def index(self, token: str) -> int:
        return self.tokens.index(token)

    def value_of(self, flag: str) -> str | None:
        """Token following the first occurrence of `flag`, if any."""
        try:
            i = self.tokens.index(flag)
        except ValueError:
            return None
        return self.tokens[i + 1] if i + 1 < len(self.tokens) else None

    def __str__(self) -> str:
        return format_command(self.as_command())
