# ffshell/domain/policies/collage.py
from __future__ import annotations

from math import ceil, floor, sqrt
from typing import Iterable, List, Tuple


def preferred_collage_grid(num_tiles: int = 9) -> Tuple[int, int]:
    """
    Rows x cols for a contact sheet. 9 tiles is the classic 3x3; anything else
    gets the square-ish layout.
    """
    if num_tiles <= 0:
        raise ValueError("num_tiles must be positive")
    if num_tiles == 9:
        return (3, 3)
    rows = max(1, floor(sqrt(num_tiles)))
    cols = ceil(num_tiles / rows)
    return rows, cols


def normalize_percents(percents: Iterable[float]) -> List[float]:
    """
    Accept 0..1 or 0..100, clamp into [0.01, 0.99], dedupe and sort so tiles
    run in timeline order.
    """
    ps = []
    for p in percents:
        p = float(p)
        if p > 1.0:
            p = p / 100.0
        p = min(max(p, 0.01), 0.99)
        ps.append(round(p, 4))
    return sorted(set(ps))
