from __future__ import annotations

from pathlib import Path
from typing import Tuple

from PIL import Image, ImageDraw, ImageFont

from .state import MachineState

BACKGROUND = (25, 25, 25)
POINTER_FILL = (255, 165, 0)
ZERO_FILL = (60, 60, 60)
CELL_WIDTH = 45
CELL_HEIGHT = 30
MARGIN = 20
HEADER_HEIGHT = 60


def _load_font(size: int):
    try:
        return ImageFont.truetype("DejaVuSansMono.ttf", size)
    except OSError:
        return ImageFont.load_default()


def _cell_colors(value: int, is_pointer: bool):
    if is_pointer:
        return POINTER_FILL, (0, 0, 0)
    if value > 0:
        # brighter green for larger values
        return (40, min(255, 80 + value), 40), (255, 255, 255)
    return ZERO_FILL, (120, 120, 120)


def render_tape(state: MachineState, *, radius: int = 50, cells_per_row: int = 25) -> Image.Image:
    """Draw the cells around the pointer as a grid.

    Covers addresses ``[pointer - radius, pointer + radius)`` clamped to the
    tape. The pointer cell is orange, nonzero cells green, zero cells grey.
    """
    if radius < 1:
        raise ValueError(f"radius must be at least 1 (got {radius})")
    if cells_per_row < 1:
        raise ValueError(f"cells_per_row must be at least 1 (got {cells_per_row})")

    mem_start, cells = state.window(radius)
    rows = max(1, -(-len(cells) // cells_per_row))
    width = MARGIN * 2 + cells_per_row * CELL_WIDTH
    height = HEADER_HEIGHT + rows * CELL_HEIGHT + MARGIN

    img = Image.new('RGB', (width, height), color=BACKGROUND)
    draw = ImageDraw.Draw(img)
    font = _load_font(11)
    font_small = _load_font(9)

    val = state.current
    ascii_char = chr(val) if 32 <= val <= 126 else '.'
    draw.text(
        (MARGIN, 15),
        f"Step: {state.steps:,}  |  Pointer: {state.pointer}  |  Value: {val} ('{ascii_char}')",
        fill=(200, 200, 200),
        font=font,
    )

    for i, cell in enumerate(cells):
        addr = mem_start + i
        value = int(cell)
        x, y = cell_origin(i, cells_per_row)
        fill_color, text_color = _cell_colors(value, addr == state.pointer)

        draw.rectangle([x, y, x + CELL_WIDTH - 2, y + CELL_HEIGHT - 2],
                       fill=fill_color, outline=(100, 100, 100))

        text = str(value)
        left, top, right, bottom = draw.textbbox((0, 0), text, font=font_small)
        text_x = x + (CELL_WIDTH - (right - left)) // 2
        text_y = y + (CELL_HEIGHT - (bottom - top)) // 2
        draw.text((text_x, text_y), text, fill=text_color, font=font_small)

        if addr == state.pointer:
            draw.text((x, y - 15), f"@{addr}", fill=POINTER_FILL, font=font_small)

    return img


def cell_origin(slot: int, cells_per_row: int = 25) -> Tuple[int, int]:
    """Top-left pixel of the ``slot``-th cell of the rendered window."""
    row, col = divmod(slot, cells_per_row)
    return MARGIN + col * CELL_WIDTH, HEADER_HEIGHT + row * CELL_HEIGHT


def save_snapshot(state: MachineState, path: str | Path, **kwargs) -> Path:
    p = Path(path)
    render_tape(state, **kwargs).save(p)
    return p
