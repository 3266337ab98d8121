"""Digit previews: 3-line ASCII art for terminals and a PIL image.

Each cell is drawn from an active-segment set, so previews show the
effective pattern including any user override.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

from PIL import Image, ImageDraw

log = logging.getLogger(__name__)

ON_COLOR = (255, 77, 79)        # #ff4d4f
OFF_COLOR = (235, 235, 235)     # unlit bar, faint on white
BACKGROUND = (255, 255, 255)


def _ascii_cell(active: Iterable[str]) -> Tuple[str, str, str]:
    on = set(active)

    def pick(seg: str, mark: str) -> str:
        return mark if seg in on else ' '

    return (
        f" {pick('a', '_')}  ",
        f"{pick('f', '|')}{pick('g', '_')}{pick('b', '|')} ",
        f"{pick('e', '|')}{pick('d', '_')}{pick('c', '|')}{pick('dp', '.')}",
    )


def render_ascii(cells: Sequence[Iterable[str]]) -> str:
    """Render one row of digits as three text lines.

    Example for ``[{'b','c'}, {'a','b','d','e','g'}]``::

              _
          |   _|
          |  |_
    """
    rows: List[List[str]] = [[], [], []]
    for active in cells:
        for row, part in zip(rows, _ascii_cell(active)):
            row.append(part)
    return "\n".join(" ".join(row).rstrip() for row in rows)


def segment_boxes(size: int) -> dict:
    """Bar rectangles (x0, y0, x1, y1) for one cell *size* pixels wide.

    Bar thickness is 16% of the width, gaps 8%; height is 1.6x width.
    ``dp`` maps to the bounding box of its circle.
    """
    w = size
    h = round(size * 1.6)
    t = round(size * 0.16)
    gap = round(size * 0.08)
    v_len = round((h - 3 * t - 4 * gap) / 2)

    def rect(x, y, width, height):
        return (x, y, x + width, y + height)

    y_mid = t + gap + v_len + gap
    y_low = y_mid + t + gap
    y_bot = y_low + v_len + gap
    r = max(2, round(t / 3))
    cx, cy = w - t / 2, h - t / 2
    return {
        'a': rect(t, 0, w - 2 * t, t),
        'f': rect(0, t + gap, t, v_len),
        'b': rect(w - t, t + gap, t, v_len),
        'g': rect(t, y_mid, w - 2 * t, t),
        'e': rect(0, y_low, t, v_len),
        'c': rect(w - t, y_low, t, v_len),
        'd': rect(t, y_bot, w - 2 * t, t),
        'dp': (cx - r, cy - r, cx + r, cy + r),
    }


def render_image(cells: Sequence[Iterable[str]], size: int = 80) -> Image.Image:
    """Draw a row of seven-segment cells onto a new RGB image."""
    boxes = segment_boxes(size)
    cell_h = round(size * 1.6)
    # dp circle sits in the cell's corner, so spacing must leave room for it
    pad = max(4, size // 5)
    count = max(1, len(cells))
    img = Image.new('RGB', (pad + count * (size + pad), cell_h + 2 * pad), BACKGROUND)
    draw = ImageDraw.Draw(img)

    for idx, active in enumerate(cells):
        on = set(active)
        ox = pad + idx * (size + pad)
        for seg, (x0, y0, x1, y1) in boxes.items():
            fill = ON_COLOR if seg in on else OFF_COLOR
            box = (ox + x0, pad + y0, ox + x1, pad + y1)
            if seg == 'dp':
                draw.ellipse(box, fill=fill)
            else:
                radius = min(3, (x1 - x0) // 2, (y1 - y0) // 2)
                draw.rounded_rectangle(box, radius=radius, fill=fill)

    log.debug("Rendered %d-cell preview at %dpx", len(cells), size)
    return img
