"""Encode a truecolor raster into palette, pattern and name tables."""

# Reference: name table word (plane A/B cell)
# Bit   | 15  | 14-13   | 12    | 11    | 10-0
# Field | pri | palette | vflip | hflip | pattern index
#
# Priority is never set by this encoder.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from PIL import Image

from .color import Color, quantize_colors, quantize_rgb_bytes
from .errors import InvalidDimensionsError, PaletteOverflowError
from .palette import COLORS_PER_PALETTE, Palette, assign_palette, ordered_colors
from .pattern import TILE_SIZE, Pattern, resolve_pattern

HFLIP_BIT = 11
VFLIP_BIT = 12
PALETTE_SHIFT = 13


@dataclass
class TileAssets:
    """In-memory result of one encode: palettes, patterns and name table."""

    width: int
    height: int
    palettes: List[Palette] = field(default_factory=list)
    patterns: List[Pattern] = field(default_factory=list)
    name_table: List[int] = field(default_factory=list)

    @property
    def tiles_wide(self) -> int:
        return self.width // TILE_SIZE

    @property
    def tiles_high(self) -> int:
        return self.height // TILE_SIZE

    @property
    def tile_count(self) -> int:
        return self.tiles_wide * self.tiles_high


def name_table_word(pattern_id: int, h_flip: bool, v_flip: bool, palette_index: int) -> int:
    return (
        pattern_id
        | (int(v_flip) << VFLIP_BIT)
        | (int(h_flip) << HFLIP_BIT)
        | (palette_index << PALETTE_SHIFT)
    )


def decode_name_table_word(word: int) -> Tuple[int, bool, bool, int]:
    """Split a name table word into ``(pattern_id, h_flip, v_flip, palette)``."""

    return (
        word & ((1 << HFLIP_BIT) - 1),
        bool(word >> HFLIP_BIT & 1),
        bool(word >> VFLIP_BIT & 1),
        word >> PALETTE_SHIFT & 0x3,
    )


def check_dimensions(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(width, height, "width and height must be positive")
    if width % TILE_SIZE or height % TILE_SIZE:
        raise InvalidDimensionsError(width, height)


def _encode_quantized(width: int, height: int, colors: Sequence[int]) -> TileAssets:
    check_dimensions(width, height)
    if len(colors) != width * height:
        raise InvalidDimensionsError(
            width, height, f"expected {width * height} pixels, got {len(colors)}"
        )

    assets = TileAssets(width=width, height=height)

    for tile_y in range(0, height, TILE_SIZE):
        for tile_x in range(0, width, TILE_SIZE):
            tile_colors: List[int] = []
            for row in range(tile_y, tile_y + TILE_SIZE):
                offset = row * width + tile_x
                tile_colors.extend(colors[offset : offset + TILE_SIZE])

            needed = ordered_colors(tile_colors)
            if len(needed) > COLORS_PER_PALETTE:
                raise PaletteOverflowError(tile_x, tile_y, f"{len(needed)} colors")

            palette_index = assign_palette(needed, assets.palettes, (tile_x, tile_y))
            lookup = {color: i for i, color in enumerate(assets.palettes[palette_index])}
            pattern = [lookup[color] for color in tile_colors]

            pattern_id, h_flip, v_flip = resolve_pattern(
                pattern, assets.patterns, (tile_x, tile_y)
            )
            assets.name_table.append(name_table_word(pattern_id, h_flip, v_flip, palette_index))

    return assets


def encode_pixels(width: int, height: int, pixels: Sequence[Color]) -> TileAssets:
    """Encode row-major RGB pixels.

    Tiles are visited left to right, top to bottom. That order decides how
    palettes grow, which index every pattern gets and the position of each
    name table word, so the same input always gives the same tables.
    """

    check_dimensions(width, height)
    return _encode_quantized(width, height, quantize_colors(pixels))


def encode_image(image: Image.Image) -> TileAssets:
    width, height = image.size
    check_dimensions(width, height)
    if image.mode != "RGB":
        image = image.convert("RGB")
    return _encode_quantized(width, height, quantize_rgb_bytes(image.tobytes()))
