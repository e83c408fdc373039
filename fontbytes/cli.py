"""
fontbytes command line tool.

Imports a font and writes it out as source code:

    fontbytes DejaVuSansMono.ttf -s 12 -f arduino -o font12.h
    fontbytes unscii-8.hex --bit-numbering msb -f python-bytes -o font8.py
    fontbytes sheet.png --glyph 8x8 --cell 10x10 --columns 16 -o font.h
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

from . import __version__
from .errors import FontBytesError
from .fontdata import Face, Size
from .formats import FORMATS, available_formats, format_for
from .generator import (DEFAULT_FONT_NAME, ExportMethod, FontSourceCodeGenerator,
                        SourceCodeOptions)
from .idiom import Indentation
from .importers import (ascii_chars, face_from_hex, face_from_image, face_from_ttf,
                        font_characters)
from .margins import trimmed_size
from .packer import BitNumbering, bytes_per_glyph
from .preview import save_preview
from .settings import Settings

TTF_SUFFIXES = {".ttf", ".otf", ".ttc", ".pcf", ".bdf"}
IMAGE_SUFFIXES = {".png", ".bmp", ".gif", ".pbm", ".pgm", ".ppm", ".tif", ".tiff"}
HEX_SUFFIXES = {".hex"}

OUTPUT_SUFFIXES = {"c": ".h", "arduino": ".h", "python-list": ".py", "python-bytes": ".py"}


def parse_size(text: str) -> Size:
    """WIDTHxHEIGHT"""
    try:
        width, height = (int(part) for part in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}")
    return Size(width, height)


def parse_codepoint(text: str) -> int:
    """Accept decimal or 0x-prefixed hex codepoint strings."""
    return int(text, 0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fontbytes",
        description="Convert a bitmap font into C, Arduino or Python source code",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 16px ASCII font as a C array
  fontbytes DejaVuSansMono.ttf -s 16 -o font16.h

  # only digits, with a lookup table, MSB first
  fontbytes DejaVuSansMono.ttf -s 24 -e 0123456789 --bit-numbering msb -o digits.h

  # 8x8 cells from a font sheet, white ink on black
  fontbytes font8x8.png --glyph 8x8 --cell 10x10 --origin 1,0 -f python-list

Dependencies:
  pip install freetype-py fonttools Pillow
        """,
    )

    parser.add_argument("font", nargs="?", help="TTF/OTF font, .hex font or font sheet image")
    parser.add_argument("-o", "--output",
                        help="output file, '-' for stdout (default: <font name> + .h/.py)")
    parser.add_argument("-f", "--format", choices=available_formats(),
                        help="output format (default: c, or the saved setting)")
    parser.add_argument("-n", "--name", default=DEFAULT_FONT_NAME,
                        help=f"array name (default: {DEFAULT_FONT_NAME})")
    parser.add_argument("--list-formats", action="store_true",
                        help="list output formats and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    imp = parser.add_argument_group("import")
    imp.add_argument("-s", "--size", type=int, default=16,
                     help="font size in pixels for TTF/OTF fonts (default: 16)")
    imp.add_argument("-c", "--chars",
                     help="characters to import (default: printable ASCII)")
    imp.add_argument("--all-glyphs", action="store_true",
                     help="import every character the font maps")
    imp.add_argument("--cell-size", type=parse_size,
                     help="TTF glyph cell WIDTHxHEIGHT (default: widest advance x line height)")
    imp.add_argument("--first", type=parse_codepoint, default=0x20,
                     help=".hex fonts: first codepoint (default: 0x20)")
    imp.add_argument("--last", type=parse_codepoint, default=0x7E,
                     help=".hex fonts: last codepoint (default: 0x7E)")
    imp.add_argument("--hex-height", type=int, default=8,
                     help=".hex fonts: glyph height (default: 8)")
    imp.add_argument("--glyph", type=parse_size, default=Size(8, 8),
                     help="font sheets: glyph WIDTHxHEIGHT (default: 8x8)")
    imp.add_argument("--cell", type=parse_size,
                     help="font sheets: grid pitch WIDTHxHEIGHT (default: glyph size)")
    imp.add_argument("--origin", default="0,0",
                     help="font sheets: glyph offset X,Y inside each cell (default: 0,0)")
    imp.add_argument("--columns", type=int, default=16,
                     help="font sheets: cells per row (default: 16)")
    imp.add_argument("--count", type=int,
                     help="font sheets: number of glyphs (default: every cell)")
    imp.add_argument("--threshold", type=int, default=128,
                     help="font sheets: ink threshold 0-255 (default: 128)")
    imp.add_argument("--dark-ink", action="store_true",
                     help="font sheets: ink is darker than the background")

    gen = parser.add_argument_group("source code")
    gen.add_argument("--bit-numbering", choices=[b.value for b in BitNumbering],
                     help="bit holding the first pixel of each byte (default: lsb)")
    gen.add_argument("--invert", action=argparse.BooleanOptionalAction, default=None,
                     help="invert all bits")
    gen.add_argument("--line-spacing", action=argparse.BooleanOptionalAction, default=None,
                     help="keep blank rows shared by all glyphs")
    gen.add_argument("--wrap", type=int, default=80,
                     help="wrap array rows at this column (default: 80)")
    gen.add_argument("--indent", type=Indentation.parse, default=Indentation.tab(),
                     help="'tab' or a number of spaces (default: tab)")
    gen.add_argument("-e", "--export",
                     help="export only these characters, plus a lookup table")

    parser.add_argument("--preview", metavar="PNG", help="also write a preview image")
    parser.add_argument("--settings", metavar="INI",
                        help="read saved options from this file")
    parser.add_argument("--save-settings", action="store_true",
                        help="write the options used back to --settings")
    return parser


def load_face(args: argparse.Namespace) -> Face:
    path = Path(args.font)
    suffix = path.suffix.lower()

    if suffix in HEX_SUFFIXES:
        return face_from_hex(path, args.first, args.last, args.hex_height)

    if suffix in IMAGE_SUFFIXES:
        ox, oy = (int(part) for part in args.origin.split(","))
        return face_from_image(path, args.glyph, args.cell, args.columns, args.count,
                               (ox, oy), args.threshold, args.dark_ink)

    if suffix not in TTF_SUFFIXES:
        raise FontBytesError(f"unsupported font file type: {path.suffix or path.name}")

    if args.all_glyphs:
        chars = "".join(font_characters(path))
    else:
        chars = args.chars or ascii_chars()
    return face_from_ttf(path, args.size, chars, args.cell_size)


def select_exported(face: Face, chars: str) -> Face:
    ids = []
    for ch in chars:
        try:
            ids.append(face.glyph_id_for(ord(ch)))
        except IndexError:
            raise FontBytesError(f"character {ch!r} is not in the imported font") from None
    return face.with_exported_glyphs(ids)


def build_options(args: argparse.Namespace, settings: Settings) -> SourceCodeOptions:
    options = settings.options(SourceCodeOptions(wrap_column=args.wrap,
                                                 indentation=args.indent))
    changes = {}
    if args.bit_numbering is not None:
        changes["bit_numbering"] = BitNumbering(args.bit_numbering)
    if args.invert is not None:
        changes["invert_bits"] = args.invert
    if args.line_spacing is not None:
        changes["include_line_spacing"] = args.line_spacing
    if args.export:
        changes["export_method"] = ExportMethod.SELECTED
    return dataclasses.replace(options, **changes)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_formats:
        for fmt in FORMATS:
            print(f"{fmt.identifier:14} {fmt.name}")
        return 0

    if not args.font:
        parser.error("the font argument is required")
    if args.save_settings and not args.settings:
        parser.error("--save-settings needs --settings")

    font_path = Path(args.font)
    if not font_path.exists():
        print(f"Error: Font file not found: {font_path}", file=sys.stderr)
        return 1

    settings = Settings.load(args.settings) if args.settings else Settings()
    format_id = args.format or settings.format
    fmt = format_for(format_id)
    options = build_options(args, settings)

    # Progress goes to stderr when the source code itself goes to stdout.
    log = sys.stderr if args.output == "-" else sys.stdout

    try:
        print(f"Loading font: {font_path}", file=log)
        face = load_face(args)
        if args.export:
            face = select_exported(face, args.export)

        size, _ = trimmed_size(face, options.include_line_spacing)
        print("Font info:", file=log)
        print(f"  Glyphs: {face.num_glyphs}", file=log)
        print(f"  Glyph size: {face.glyph_size}", file=log)
        print(f"  Trimmed size: {size}", file=log)
        print(f"  Bytes per glyph: {bytes_per_glyph(size)}", file=log)
        if options.export_method is ExportMethod.SELECTED:
            print(f"  Exported: {len(face.exported_glyph_ids)}", file=log)
        print(f"  Format: {fmt.name}", file=log)

        source = FontSourceCodeGenerator(options).generate(face, fmt, args.name)
    except FontBytesError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output == "-":
        sys.stdout.write(source)
    else:
        out_path = Path(args.output) if args.output else \
            font_path.with_suffix(OUTPUT_SUFFIXES[fmt.identifier])
        if out_path.resolve() == font_path.resolve():
            print(f"Error: refusing to overwrite the input {font_path}", file=sys.stderr)
            return 1
        out_path.write_text(source, encoding="utf-8")
        print(f"Wrote {out_path} ({out_path.stat().st_size} bytes)", file=log)

    if args.preview:
        try:
            preview_path = save_preview(face, args.preview)
        except FontBytesError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"Preview saved: {preview_path}", file=log)

    if args.save_settings:
        settings.update_from(options, fmt.identifier)
        print(f"Settings saved: {settings.save()}", file=log)

    return 0
