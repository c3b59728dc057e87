"""Binary layouts for the palette, pattern and name table files.

All words are big-endian, matching what the VDP expects when the data is
DMA'd straight into CRAM/VRAM.

Palette file   : 4 lines x 16 entries x 2 bytes = 128 bytes, zero filled.
Pattern file   : 32 bytes per pattern, two 4-bit pixels per byte, left pixel
                 in the high nibble.
Name table file: one 16-bit word per tile in row-major order.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

from .encoder import TileAssets
from .palette import COLORS_PER_PALETTE, MAX_PALETTES

PALETTE_FILE_SIZE = MAX_PALETTES * COLORS_PER_PALETTE * 2
PATTERN_BYTES = 32


class SerializedAssets(NamedTuple):
    palette: bytes
    pattern: bytes
    name_table: bytes


def serialize_palettes(palettes: Sequence[Sequence[int]]) -> bytes:
    if len(palettes) > MAX_PALETTES:
        raise ValueError(f"At most {MAX_PALETTES} palettes can be stored, got {len(palettes)}")
    data = bytearray(PALETTE_FILE_SIZE)
    for line, palette in enumerate(palettes):
        if len(palette) > COLORS_PER_PALETTE:
            raise ValueError(f"Palette {line} has {len(palette)} colors")
        for entry, color in enumerate(palette):
            offset = (line * COLORS_PER_PALETTE + entry) * 2
            data[offset : offset + 2] = color.to_bytes(2, "big")
    return bytes(data)


def serialize_patterns(patterns: Sequence[Sequence[int]]) -> bytes:
    data = bytearray()
    for pattern in patterns:
        for i in range(0, len(pattern), 2):
            data.append(((pattern[i] & 0x0F) << 4) | (pattern[i + 1] & 0x0F))
    return bytes(data)


def serialize_name_table(name_table: Sequence[int]) -> bytes:
    data = bytearray()
    for word in name_table:
        data += word.to_bytes(2, "big")
    return bytes(data)


def serialize(assets: TileAssets) -> SerializedAssets:
    return SerializedAssets(
        palette=serialize_palettes(assets.palettes),
        pattern=serialize_patterns(assets.patterns),
        name_table=serialize_name_table(assets.name_table),
    )
