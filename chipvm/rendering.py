"""Turn display snapshots into images or text.

A display is a boolean array of shape ``(32, 64)`` indexed ``[row, column]``,
so ``display[y, x]`` is the pixel at column ``x`` of screen line ``y``. That
is already image order, and every helper here keeps it.
"""

import jax.numpy as jnp
import numpy as np
from typing import Tuple

from chipvm.constants import SCREEN_WIDTH, SCREEN_HEIGHT

Color = Tuple[int, int, int]

# Lit colour, unlit colour
COLOR_SCHEMES = {
    "classic": ((0, 255, 0), (0, 0, 0)),
    "amber": ((255, 176, 0), (0, 0, 0)),
    "white": ((255, 255, 255), (0, 0, 0)),
    "blue": ((0, 255, 255), (0, 0, 64)),
    "retro": ((255, 255, 0), (64, 0, 64)),
}

GRID_PADDING = 5


def _check_display(display: np.ndarray, batched: bool = False) -> np.ndarray:
    pixels = np.asarray(display, dtype=np.bool_)
    expected = (SCREEN_HEIGHT, SCREEN_WIDTH)
    shape = pixels.shape[1:] if batched else pixels.shape
    if shape != expected or (batched and pixels.ndim != 3):
        prefix = "(N, " if batched else "("
        raise ValueError(
            f"Expected display shape {prefix}{SCREEN_HEIGHT}, {SCREEN_WIDTH}), got {pixels.shape}"
        )
    return pixels


def chip8_display_to_rgb(
    display: jnp.ndarray,
    scale: int = 8,
    on_color: Color = COLOR_SCHEMES["classic"][0],
    off_color: Color = COLOR_SCHEMES["classic"][1],
) -> np.ndarray:
    """Paint one display snapshot as an RGB image.

    Each machine pixel becomes a ``scale`` x ``scale`` block, so the image is
    ``(32 * scale, 64 * scale, 3)`` uint8 with rows first, ready for
    matplotlib or a pygame surface (after swapping the first two axes).
    """
    pixels = _check_display(display)
    palette = np.array([off_color, on_color], dtype=np.uint8)
    rgb_frame = palette[pixels.astype(np.intp)]

    if scale > 1:
        rgb_frame = rgb_frame.repeat(scale, axis=0).repeat(scale, axis=1)

    return rgb_frame


def create_color_scheme(scheme: str = "classic") -> Tuple[Color, Color]:
    """Look up a ``(lit, unlit)`` colour pair by name; see ``COLOR_SCHEMES``."""
    if scheme not in COLOR_SCHEMES:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(COLOR_SCHEMES)}"
        )
    return COLOR_SCHEMES[scheme]


def batch_render(
    displays: jnp.ndarray, scale: int = 4, color_scheme: str = "classic"
) -> np.ndarray:
    """Tile a stack of ``(N, 32, 64)`` snapshots into one RGBA contact sheet.

    Snapshots fill a near-square grid left to right, top to bottom, with
    ``GRID_PADDING`` transparent pixels between tiles. Unused tiles stay
    fully transparent.
    """
    displays = _check_display(displays, batched=True)
    count = displays.shape[0]
    on_color, off_color = create_color_scheme(color_scheme)

    columns = int(np.ceil(np.sqrt(count)))
    lines = int(np.ceil(count / columns))
    tile_h, tile_w = SCREEN_HEIGHT * scale, SCREEN_WIDTH * scale
    step_h, step_w = tile_h + GRID_PADDING, tile_w + GRID_PADDING

    sheet = np.zeros((lines * step_h - GRID_PADDING, columns * step_w - GRID_PADDING, 4), dtype=np.uint8)
    for index, display in enumerate(displays):
        top = (index // columns) * step_h
        left = (index % columns) * step_w
        tile = sheet[top:top + tile_h, left:left + tile_w]
        tile[..., :3] = chip8_display_to_rgb(display, scale, on_color, off_color)
        tile[..., 3] = 255

    return sheet


def display_to_text(display: jnp.ndarray, on: str = "x", off: str = " ") -> str:
    """Render the display as text, one line per row."""
    pixels = _check_display(display)
    return "".join("".join(on if lit else off for lit in row) + "\n" for row in pixels)
