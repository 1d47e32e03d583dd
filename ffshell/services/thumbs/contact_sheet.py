# ffshell/services/thumbs/contact_sheet.py
from __future__ import annotations

import re
from pathlib import Path
from typing import Sequence, Tuple

from PIL import Image

from ffshell.common.logging import get_logger
from ffshell.domain.enums.file_format import ImageFormats

logger = get_logger(__name__)


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    s = hex_color.strip().lstrip("#")
    if len(s) == 3:
        s = "".join(ch * 2 for ch in s)
    if not re.fullmatch(r"[0-9a-fA-F]{6}", s):
        return (0, 0, 0)
    return (int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))


def compose_sheet(
    frames: Sequence[Path],
    *,
    grid: Tuple[int, int],
    tile_width: int,
    spacing: int = 6,
    background: str = "#000000",
) -> Image.Image:
    """
    Paste the frames row by row into one sheet, each centred in its cell.
    Frames beyond rows*cols are dropped.
    """
    rows, cols = grid
    frames = list(frames)[: rows * cols]
    tiles = []
    for p in frames:
        with Image.open(p) as im:
            tiles.append(im.convert("RGB"))

    cell_w = tile_width
    cell_h = max(im.height for im in tiles) if tiles else int(cell_w * 9 / 16)
    sheet_w = cols * cell_w + (cols + 1) * spacing
    sheet_h = rows * cell_h + (rows + 1) * spacing
    sheet = Image.new("RGB", (sheet_w, sheet_h), color=hex_to_rgb(background))

    for i, im in enumerate(tiles):
        r, c = divmod(i, cols)
        x0 = spacing + c * (cell_w + spacing) + (cell_w - im.width) // 2
        y0 = spacing + r * (cell_h + spacing) + (cell_h - im.height) // 2
        sheet.paste(im, (x0, y0))
    logger.debug("composed %d tiles into a %dx%d sheet (%dx%d px)", len(tiles), rows, cols, sheet_w, sheet_h)
    return sheet


def pillow_save(img: Image.Image, path: Path, fmt: ImageFormats | str, quality: int = 95) -> None:
    fmt = str(fmt).lower()
    if fmt == "png":
        img.save(path, format="PNG", optimize=True)
    elif fmt in ("jpg", "jpeg"):
        img = img.convert("RGB")
        img.save(path, format="JPEG", quality=int(quality), subsampling=0, optimize=True, progressive=True)
    elif fmt == "webp":
        img.save(path, format="WEBP", quality=int(quality), method=6)
    elif fmt == "bmp":
        img.convert("RGB").save(path, format="BMP")
    else:
        raise ValueError(f"Unsupported format: {fmt}")
