"""Mega Drive tile asset converter.

Turns a truecolor image into the three binaries the VDP needs to show it: the
CRAM palette lines, the deduplicated pattern (tile) data and the name table.
It can be invoked through the CLI (``python -m md_tile_converter``) or
imported to convert an in-memory Pillow image.
"""

from .color import VDP_RAMP, expand_color, quantize_channel, quantize_color
from .converter import (
    ConvertOptions,
    convert_image,
    convert_png,
    render_preview,
    write_assets,
)
from .encoder import TileAssets, encode_image, encode_pixels
from .errors import (
    ConversionError,
    InvalidDimensionsError,
    PaletteOverflowError,
    PatternStoreOverflowError,
    TileError,
    TooManyPalettesError,
)
from .palette import assign_palette
from .pattern import resolve_pattern
from .serializer import SerializedAssets, serialize

__all__ = [
    "VDP_RAMP",
    "ConvertOptions",
    "ConversionError",
    "InvalidDimensionsError",
    "PaletteOverflowError",
    "PatternStoreOverflowError",
    "SerializedAssets",
    "TileAssets",
    "TileError",
    "TooManyPalettesError",
    "assign_palette",
    "convert_image",
    "convert_png",
    "encode_image",
    "encode_pixels",
    "expand_color",
    "quantize_channel",
    "quantize_color",
    "render_preview",
    "resolve_pattern",
    "serialize",
    "write_assets",
]
