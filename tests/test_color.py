from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "md_tile_converter/src"))

from md_tile_converter.color import (
    VDP_RAMP,
    expand_color,
    quantize_channel,
    quantize_color,
    quantize_rgb_bytes,
)


def test_quantize_channel_is_monotonic_step_function() -> None:
    levels = [quantize_channel(value) for value in range(256)]

    assert levels[0] == 0
    assert levels[255] == 7
    assert all(0 <= level <= 7 for level in levels)
    assert all(a <= b for a, b in zip(levels, levels[1:]))
    # every level is reached exactly once as a contiguous run
    assert sorted(set(levels)) == list(range(8))


def test_ramp_values_map_to_their_own_level() -> None:
    for level, intensity in enumerate(VDP_RAMP):
        assert quantize_channel(intensity) == level


@pytest.mark.parametrize(
    "intensity, level",
    [(25, 0), (26, 1), (68, 1), (69, 2), (229, 6), (230, 7)],
)
def test_midpoint_boundaries(intensity: int, level: int) -> None:
    assert quantize_channel(intensity) == level


def test_quantize_channel_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        quantize_channel(256)
    with pytest.raises(ValueError):
        quantize_channel(-1)


def test_quantize_color_packing() -> None:
    assert quantize_color((0, 0, 0)) == 0
    assert quantize_color((255, 0, 0)) == 14
    assert quantize_color((0, 255, 0)) == 7 << 5
    assert quantize_color((0, 0, 255)) == 7 << 9
    assert quantize_color((255, 255, 255)) == 0x0EEE
    assert quantize_color((52, 87, 116)) == (3 << 9) | (2 << 5) | (1 << 1)


def test_bulk_quantization_matches_per_pixel() -> None:
    colors = [(0, 0, 0), (255, 0, 0), (30, 140, 210), (69, 68, 230)]
    data = bytes(channel for color in colors for channel in color)

    assert quantize_rgb_bytes(data) == [quantize_color(color) for color in colors]


def test_expand_color_returns_ramp_intensities() -> None:
    assert expand_color(0) == (0, 0, 0)
    assert expand_color(14) == (255, 0, 0)
    assert expand_color(quantize_color((52, 87, 116))) == (52, 87, 116)
