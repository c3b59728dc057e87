"""Command line interface for the Mega Drive tile converter."""

from __future__ import annotations

import argparse
import sys
import warnings
from pathlib import Path
from typing import Tuple

from .converter import (
    ConvertOptions,
    convert_png,
    format_summary,
    render_preview,
    write_assets,
)
from .errors import ConversionError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Convert an image into Mega Drive VDP palette, pattern and name table binaries.\n"
            "Width and height must be multiples of 8. Each 8x8 tile may use up to 16 colors\n"
            "(one of which is black when a new palette line is opened) and the whole image\n"
            "may use up to 4 palette lines. Mirrored tiles share one pattern."
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("input", help="Source image (PNG or any format Pillow reads)")
    parser.add_argument(
        "-o",
        "--output-dir",
        default=None,
        help="Directory for outputs without an explicit path (default: next to the input)",
    )
    parser.add_argument("--palette", help="Palette output path (default: <stem>.pal)")
    parser.add_argument("--patterns", help="Pattern output path (default: <stem>.pat)")
    parser.add_argument("--nametable", help="Name table output path (default: <stem>.nam)")
    parser.add_argument(
        "--scale",
        type=int,
        default=1,
        help="Nearest-neighbour upscale factor applied before encoding",
    )
    parser.add_argument(
        "--preview",
        help="Also write a PNG rendered back from the generated tables",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite existing files without prompting",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print palette and pattern usage",
    )
    return parser


def resolve_outputs(args: argparse.Namespace) -> Tuple[Path, Path, Path]:
    source = Path(args.input)
    output_dir = Path(args.output_dir) if args.output_dir else source.parent

    def pick(value: str | None, extension: str) -> Path:
        if value:
            return Path(value)
        return output_dir / f"{source.stem}.{extension}"

    return pick(args.palette, "pal"), pick(args.patterns, "pat"), pick(args.nametable, "nam")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = ConvertOptions(scale=args.scale)
        palette_path, pattern_path, name_table_path = resolve_outputs(args)

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            assets = convert_png(args.input, options)
        for warning in caught:
            print(f"Warning: {warning.message}", file=sys.stderr)

        preview_path = Path(args.preview) if args.preview else None
        if preview_path is not None and preview_path.resolve() in {
            path.resolve() for path in (palette_path, pattern_path, name_table_path)
        }:
            raise ConversionError(f"Preview path collides with an asset output: {preview_path}")
        if preview_path is not None and preview_path.exists() and not args.force:
            raise ConversionError(
                f"Output files already exist (use --force to overwrite):\n{preview_path}"
            )

        write_assets(assets, palette_path, pattern_path, name_table_path, force=args.force)
        for target in (palette_path, pattern_path, name_table_path):
            print(f"wrote {target}")

        if preview_path is not None:
            try:
                preview_path.parent.mkdir(parents=True, exist_ok=True)
                render_preview(assets).save(preview_path, format="PNG")
            except OSError as exc:
                raise ConversionError(f"Failed to write preview: {preview_path}") from exc
            print(f"wrote {preview_path}")

        if args.verbose:
            print(format_summary(assets))
        return 0
    except ConversionError as exc:
        print(exc, file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
