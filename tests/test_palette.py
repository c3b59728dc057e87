from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "md_tile_converter/src"))

from md_tile_converter.errors import PaletteOverflowError, TooManyPalettesError
from md_tile_converter.palette import assign_palette, ordered_colors, plan_palette

RED = 14
GREEN = 7 << 5
BLUE = 7 << 9


def _distinct_colors(count: int, start: int = 1) -> list[int]:
    # packed values with bit 0 clear, skipping black
    return [value << 1 for value in range(start, start + count)]


def test_new_palette_starts_with_black_in_first_seen_order() -> None:
    palettes: list[list[int]] = []

    index = assign_palette(ordered_colors([BLUE, RED, BLUE, 0, RED]), palettes)

    assert index == 0
    assert palettes == [[0, BLUE, RED]]


def test_existing_palette_is_reused_when_it_covers_the_tile() -> None:
    palettes = [[0, RED, GREEN], [0, BLUE]]

    assert assign_palette([BLUE, 0], palettes) == 1
    assert assign_palette([GREEN], palettes) == 0
    assert palettes == [[0, RED, GREEN], [0, BLUE]]


def test_first_palette_with_room_is_grown_in_place() -> None:
    palettes = [[0] + _distinct_colors(15), [0, RED]]

    index = assign_palette([GREEN, RED, BLUE], palettes)

    assert index == 1
    assert palettes[1] == [0, RED, GREEN, BLUE]
    assert len(palettes[0]) == 16


def test_growth_keeps_existing_indices() -> None:
    palettes = [[0, RED]]

    assign_palette([BLUE, GREEN], palettes)

    assert palettes == [[0, RED, BLUE, GREEN]]


def test_fifth_palette_is_refused_before_mutation() -> None:
    palettes = [[0] + _distinct_colors(15, start=1 + 15 * i) for i in range(4)]
    snapshot = [list(p) for p in palettes]

    with pytest.raises(TooManyPalettesError) as excinfo:
        assign_palette(_distinct_colors(2, start=200), palettes, (24, 16))

    assert (excinfo.value.x, excinfo.value.y) == (24, 16)
    assert "24:16" in str(excinfo.value)
    assert palettes == snapshot


def test_sixteen_colors_without_black_cannot_open_a_palette() -> None:
    palettes: list[list[int]] = []

    with pytest.raises(PaletteOverflowError):
        assign_palette(_distinct_colors(16), palettes)
    assert palettes == []


def test_plan_does_not_modify_palettes() -> None:
    palettes = [[0, RED]]

    plan = plan_palette([GREEN], palettes)

    assert plan.index == 0
    assert plan.grown
    assert plan.colors == (0, RED, GREEN)
    assert palettes == [[0, RED]]
