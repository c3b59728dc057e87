"""Exceptions raised while converting an image into Mega Drive tile assets."""

from __future__ import annotations


class ConversionError(Exception):
    """Base exception for conversion errors."""


class InvalidDimensionsError(ConversionError):
    """Raised when the image cannot be split into whole 8x8 tiles."""

    def __init__(self, width: int, height: int, detail: str | None = None):
        self.width = width
        self.height = height
        message = f"Image dimensions {width}x{height} are not a multiple of 8"
        if detail:
            message = f"Invalid image {width}x{height}: {detail}"
        super().__init__(message)


class TileError(ConversionError):
    """Base for failures tied to one tile; ``x``/``y`` is its top-left pixel."""

    reason = "Tile cannot be encoded"

    def __init__(self, x: int, y: int, detail: str | None = None):
        self.x = x
        self.y = y
        message = f"{self.reason} at {x}:{y}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class PaletteOverflowError(TileError):
    """Raised when a tile needs more colors than one palette line holds."""

    reason = "Too many colors in tile"


class TooManyPalettesError(TileError):
    """Raised when a tile would need a fifth palette line."""

    reason = "Too many palettes needed from tile"


class PatternStoreOverflowError(TileError):
    """Raised when the pattern index no longer fits in a name table word."""

    reason = "Too many unique patterns at tile"
