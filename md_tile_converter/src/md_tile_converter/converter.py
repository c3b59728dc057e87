"""Pillow-facing conversion API: preprocessing, file output and previews."""

from __future__ import annotations

import os
import tempfile
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from PIL import Image

from .color import Color, expand_color
from .encoder import TileAssets, decode_name_table_word, encode_image
from .errors import ConversionError
from .pattern import TILE_SIZE, flip_pattern
from .serializer import SerializedAssets, serialize


@dataclass
class ConvertOptions:
    """Options applied to the source image before encoding."""

    scale: int = 1  # nearest-neighbour upscale factor


def apply_preprocessing(image: Image.Image, options: ConvertOptions) -> Image.Image:
    if "A" in image.getbands() or "transparency" in image.info:
        warnings.warn(
            "Alpha channel is ignored; transparent pixels use their RGB value",
            UserWarning,
            stacklevel=3,
        )
    image = image.convert("RGB")

    if options.scale < 1:
        raise ConversionError("Scale must be 1 or greater")
    if options.scale > 1:
        width, height = image.size
        image = image.resize((width * options.scale, height * options.scale), Image.NEAREST)

    return image


def convert_image(image: Image.Image, options: ConvertOptions | None = None) -> TileAssets:
    options = options or ConvertOptions()
    return encode_image(apply_preprocessing(image, options))


def convert_png(path: str | Path, options: ConvertOptions | None = None) -> TileAssets:
    path = Path(path)
    try:
        with Image.open(path) as img:
            return convert_image(img, options)
    except FileNotFoundError as exc:
        raise ConversionError(f"Input file not found: {path}") from exc
    except OSError as exc:
        raise ConversionError(f"Failed to read image: {path}") from exc


def write_assets(
    assets: TileAssets,
    palette_path: str | Path,
    pattern_path: str | Path,
    name_table_path: str | Path,
    force: bool = False,
) -> SerializedAssets:
    """Serialize ``assets`` and write the three files.

    Existing files are only replaced with ``force``. Each payload is staged in
    a temporary file beside its target and the targets are only replaced once
    all three are staged, so a failed write leaves no new output behind.
    """

    data = serialize(assets)
    targets: Dict[Path, bytes] = {
        Path(palette_path): data.palette,
        Path(pattern_path): data.pattern,
        Path(name_table_path): data.name_table,
    }
    if len({target.resolve() for target in targets}) != 3:
        raise ConversionError("Palette, pattern and name table outputs must be different files")

    conflicts = [str(target) for target in targets if target.exists() and not force]
    if conflicts:
        raise ConversionError(
            "Output files already exist (use --force to overwrite):\n" + "\n".join(conflicts)
        )

    staged: List[Tuple[Path, Path]] = []
    try:
        for target in targets:
            target.parent.mkdir(parents=True, exist_ok=True)
        for target, payload in targets.items():
            fd, temp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=target.parent)
            staged.append((Path(temp_name), target))
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
        for temp_path, target in staged:
            os.replace(temp_path, target)
    except OSError as exc:
        raise ConversionError(f"Failed to write outputs: {exc}") from exc
    finally:
        for temp_path, _target in staged:
            temp_path.unlink(missing_ok=True)
    return data


def render_preview(assets: TileAssets) -> Image.Image:
    """Draw the tables back into an RGB image, as the VDP would display them."""

    palettes = [[expand_color(color) for color in palette] for palette in assets.palettes]
    pixels: List[Color] = [(0, 0, 0)] * (assets.width * assets.height)

    for tile, word in enumerate(assets.name_table):
        pattern_id, h_flip, v_flip, palette_index = decode_name_table_word(word)
        pattern = flip_pattern(assets.patterns[pattern_id], h_flip, v_flip)
        palette = palettes[palette_index]
        origin_x = (tile % assets.tiles_wide) * TILE_SIZE
        origin_y = (tile // assets.tiles_wide) * TILE_SIZE
        for i, index in enumerate(pattern):
            x = origin_x + i % TILE_SIZE
            y = origin_y + i // TILE_SIZE
            pixels[y * assets.width + x] = palette[index]

    preview = Image.new("RGB", (assets.width, assets.height))
    preview.putdata(pixels)
    return preview


def format_summary(assets: TileAssets) -> str:
    tiles = assets.tile_count
    patterns = len(assets.patterns)
    reused = tiles - patterns
    colors = ", ".join(str(len(palette)) for palette in assets.palettes)
    return (
        f"{assets.width}x{assets.height}: {tiles} tiles, {patterns} patterns "
        f"({reused} reused), {len(assets.palettes)} palettes [{colors}]"
    )
