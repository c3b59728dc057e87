"""Palette line allocation for tiles.

A tile is drawn with exactly one of the four CRAM palette lines. For every
tile the allocator picks an existing line that already has all the colors the
tile needs, grows an existing line, or opens a new one. Colors are only ever
appended to a line, so indices handed out to earlier tiles stay valid.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .color import BLACK
from .errors import PaletteOverflowError, TooManyPalettesError

MAX_PALETTES = 4
COLORS_PER_PALETTE = 16

Palette = List[int]


@dataclass(frozen=True)
class PalettePlan:
    """Outcome of :func:`plan_palette`, applied with :func:`commit_palette`."""

    index: int
    colors: Tuple[int, ...]
    created: bool = False
    grown: bool = False


def ordered_colors(colors: Iterable[int]) -> List[int]:
    """Drop duplicates while keeping first-seen order."""

    return list(dict.fromkeys(colors))


def plan_palette(
    needed: Sequence[int],
    palettes: Sequence[Sequence[int]],
    tile: Tuple[int, int] = (0, 0),
) -> PalettePlan:
    """Decide which palette line covers ``needed`` without touching ``palettes``.

    ``needed`` must be duplicate free and in first-seen order; the order is
    what new colors are appended in. ``tile`` is the top-left pixel used in
    error messages.
    """

    x, y = tile
    if len(needed) > COLORS_PER_PALETTE:
        raise PaletteOverflowError(x, y, f"{len(needed)} colors")

    for index, palette in enumerate(palettes):
        if all(color in palette for color in needed):
            return PalettePlan(index=index, colors=tuple(palette))

    for index, palette in enumerate(palettes):
        grown = list(palette)
        for color in needed:
            if color not in grown:
                grown.append(color)
        if len(grown) <= COLORS_PER_PALETTE:
            return PalettePlan(index=index, colors=tuple(grown), grown=True)

    if len(palettes) >= MAX_PALETTES:
        raise TooManyPalettesError(x, y, f"{MAX_PALETTES} palettes already in use")

    colors = [BLACK] + [color for color in needed if color != BLACK]
    if len(colors) > COLORS_PER_PALETTE:
        raise PaletteOverflowError(
            x, y, f"{len(colors) - 1} colors besides the reserved black entry"
        )
    return PalettePlan(index=len(palettes), colors=tuple(colors), created=True)


def commit_palette(plan: PalettePlan, palettes: List[Palette]) -> Palette:
    if plan.created:
        palettes.append(list(plan.colors))
    elif plan.grown:
        palettes[plan.index] = list(plan.colors)
    return palettes[plan.index]


def assign_palette(
    needed: Sequence[int],
    palettes: List[Palette],
    tile: Tuple[int, int] = (0, 0),
) -> int:
    """Return the index of the palette line for a tile, growing ``palettes``.

    Nothing is modified when an error is raised.
    """

    plan = plan_palette(needed, palettes, tile)
    commit_palette(plan, palettes)
    return plan.index
