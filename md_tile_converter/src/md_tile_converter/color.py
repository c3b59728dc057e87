"""Mega Drive VDP color quantization."""

# Reference: CRAM color word (one palette entry)
# Bit   | 15-12 | 11-9 | 8 | 7-5 | 4 | 3-1 | 0
# Field |   -   |  B   | - |  G  | - |  R  | -
#
# Each channel has eight levels. The DAC output is not linear; VDP_RAMP holds
# the measured 8-bit intensity of every level.

from __future__ import annotations

from typing import Iterable, List, Tuple

Color = Tuple[int, int, int]

VDP_RAMP: Tuple[int, ...] = (0, 52, 87, 116, 144, 172, 206, 255)

BLUE_SHIFT = 9
GREEN_SHIFT = 5
RED_SHIFT = 1
LEVEL_MASK = 0x7

BLACK = 0


def _match_ramp(intensity: int) -> int:
    for i in range(len(VDP_RAMP) - 1):
        if intensity <= VDP_RAMP[i] or intensity < (VDP_RAMP[i] + VDP_RAMP[i + 1]) // 2:
            return i
    return len(VDP_RAMP) - 1


_CHANNEL_LEVELS: Tuple[int, ...] = tuple(_match_ramp(value) for value in range(256))


def quantize_channel(intensity: int) -> int:
    """Return the ramp level (0-7) for an 8-bit channel intensity.

    The level is the first ramp entry the intensity is equal to or below, or
    the first one whose midpoint with the next entry it falls under.
    """

    if not 0 <= intensity <= 255:
        raise ValueError(f"Channel intensity must be between 0 and 255: {intensity}")
    return _CHANNEL_LEVELS[intensity]


def pack_levels(red: int, green: int, blue: int) -> int:
    return (blue << BLUE_SHIFT) | (green << GREEN_SHIFT) | (red << RED_SHIFT)


def quantize_color(color: Color) -> int:
    r, g, b = color
    return pack_levels(quantize_channel(r), quantize_channel(g), quantize_channel(b))


def quantize_rgb_bytes(data: bytes) -> List[int]:
    """Quantize packed RGB bytes (as returned by ``Image.tobytes()``) in bulk."""

    if len(data) % 3:
        raise ValueError("RGB data length must be a multiple of 3")
    levels = _CHANNEL_LEVELS
    return [
        (levels[b] << BLUE_SHIFT) | (levels[g] << GREEN_SHIFT) | (levels[r] << RED_SHIFT)
        for r, g, b in zip(data[0::3], data[1::3], data[2::3])
    ]


def quantize_colors(colors: Iterable[Color]) -> List[int]:
    return [quantize_color(color) for color in colors]


def expand_color(value: int) -> Color:
    """Return the 8-bit RGB intensity the VDP displays for a color word."""

    return (
        VDP_RAMP[(value >> RED_SHIFT) & LEVEL_MASK],
        VDP_RAMP[(value >> GREEN_SHIFT) & LEVEL_MASK],
        VDP_RAMP[(value >> BLUE_SHIFT) & LEVEL_MASK],
    )
