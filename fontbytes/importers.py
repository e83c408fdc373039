"""
Font importers.

Build a Face from:
- a TTF/OTF font, rasterised in monochrome by FreeType into fixed cells
- a font sheet image, one glyph per grid cell
- an 8-pixel-wide .hex font (the unscii / GNU Unifont format)

Requires: freetype-py, Pillow, fonttools
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import freetype
from fontTools.ttLib import TTFont, TTLibError
from PIL import Image, UnidentifiedImageError

from .errors import FontImportError
from .fontdata import FIRST_ASCII, Face, Glyph, Size

ASCII_FIRST = 0x20
ASCII_LAST = 0x7E


def ascii_chars() -> str:
    return "".join(chr(code) for code in range(ASCII_FIRST, ASCII_LAST + 1))


def font_characters(font_path: Path | str) -> list[str]:
    """Characters covered by the Unicode cmaps of a font, sorted."""
    try:
        tt = TTFont(str(font_path))
    except (OSError, TTLibError) as e:
        raise FontImportError(f"cannot read font {font_path}: {e}") from e
    chars = set()
    with tt:
        for cmap in tt["cmap"].tables:
            if cmap.isUnicode():
                chars.update(chr(cp) for cp in cmap.cmap.keys())
    return sorted(chars)


# ---------------------------------------------------------------------------
# TrueType / OpenType
# ---------------------------------------------------------------------------

def load_font(font_path: Path | str, font_size: int) -> freetype.Face:
    """Open a font with FreeType at ``font_size`` pixels."""
    try:
        face = freetype.Face(str(font_path))
        face.set_pixel_sizes(0, font_size)
    except freetype.FT_Exception as e:
        raise FontImportError(f"cannot load font {font_path}: {e}") from e
    return face


def _load_mono(ft_face: freetype.Face, ch: str) -> bool:
    """Render ``ch`` into the glyph slot; False when the font has no glyph for it."""
    index = ft_face.get_char_index(ord(ch))
    if index == 0:
        return False
    ft_face.load_glyph(index, freetype.FT_LOAD_RENDER | freetype.FT_LOAD_TARGET_MONO)
    return True


def compute_cell_size(ft_face: freetype.Face, chars: str) -> Size:
    """Widest advance of ``chars`` by the line height of the face."""
    width = 0
    for ch in chars:
        if _load_mono(ft_face, ch):
            slot = ft_face.glyph
            width = max(width, slot.advance.x >> 6, slot.bitmap_left + slot.bitmap.width)
    height = ft_face.size.height >> 6
    if height == 0:
        height = (ft_face.size.ascender - ft_face.size.descender) >> 6
    return Size(max(width, 1), max(height, 1))


def render_glyph(ft_face: freetype.Face, ch: str, cell: Size, ascender: int) -> Glyph:
    """
    Rasterise one character into a ``cell`` sized glyph.

    The glyph sits on the baseline, ``ascender`` rows below the top of the
    cell; ink falling outside the cell is clipped.
    """
    pixels = [False] * (cell.width * cell.height)
    if not _load_mono(ft_face, ch):
        return Glyph(cell, pixels)

    slot = ft_face.glyph
    bitmap = slot.bitmap
    buffer = bitmap.buffer
    origin_x = slot.bitmap_left
    origin_y = ascender - slot.bitmap_top

    for row in range(bitmap.rows):
        y = origin_y + row
        if not 0 <= y < cell.height:
            continue
        for col in range(bitmap.width):
            x = origin_x + col
            if not 0 <= x < cell.width:
                continue
            # FreeType mono bitmaps are MSB-first, ``pitch`` bytes per row.
            if buffer[row * bitmap.pitch + (col >> 3)] & (0x80 >> (col & 7)):
                pixels[y * cell.width + x] = True

    return Glyph(cell, pixels)


def face_from_ttf(
    font_path: Path | str,
    font_size: int,
    chars: str | None = None,
    cell: Size | None = None,
) -> Face:
    """
    Rasterise ``chars`` (printable ASCII by default) from a TTF/OTF font.

    Args:
        font_path: font file
        font_size: pixel size to render at
        chars: characters to import, glyph 0 first; repeats are dropped
        cell: glyph size; by default the widest advance by the line height
    """
    chars = ascii_chars() if chars is None else "".join(dict.fromkeys(chars))
    ft_face = load_font(font_path, font_size)
    cell = Size(*cell) if cell is not None else compute_cell_size(ft_face, chars)
    ascender = ft_face.size.ascender >> 6
    glyphs = [render_glyph(ft_face, ch, cell, ascender) for ch in chars]
    return Face(glyphs, glyph_size=cell, codes=[ord(ch) for ch in chars])


# ---------------------------------------------------------------------------
# Font sheet images
# ---------------------------------------------------------------------------

def face_from_image(
    image_path: Path | str,
    glyph_size: Size,
    cell_size: Size | None = None,
    columns: int = 16,
    count: int | None = None,
    origin: tuple[int, int] = (0, 0),
    threshold: int = 128,
    dark_ink: bool = False,
    first_code: int = FIRST_ASCII,
) -> Face:
    """
    Cut a font sheet into glyphs.

    Glyph ``i`` is read from the cell in column ``i % columns`` and row
    ``i // columns``; ``origin`` skips a margin inside each cell.

    Args:
        image_path: the sheet
        glyph_size: size of each glyph
        cell_size: grid pitch, glyph_size by default
        columns: cells per sheet row
        count: number of glyphs, by default every full cell of the sheet
        origin: offset of the glyph inside its cell
        threshold: luminance separating ink from background
        dark_ink: ink is darker than the background (black on white)
        first_code: character code of the first cell
    """
    glyph_size = Size(*glyph_size)
    cell = Size(*cell_size) if cell_size is not None else glyph_size
    try:
        with Image.open(image_path) as im:
            img = im.convert("L")
    except (OSError, UnidentifiedImageError) as e:
        raise FontImportError(f"cannot read image {image_path}: {e}") from e

    rows = (img.height - origin[1] + cell.height - glyph_size.height) // cell.height
    cells = columns * max(rows, 0)
    if count is None:
        count = cells
    if count > cells or (img.width - origin[0]) < (columns - 1) * cell.width + glyph_size.width:
        raise FontImportError(
            f"{image_path} ({img.width}x{img.height}) is too small for "
            f"{count} cells of {cell} in {columns} columns"
        )

    pixels = img.load()
    glyphs = []
    for index in range(count):
        cx = (index % columns) * cell.width + origin[0]
        cy = (index // columns) * cell.height + origin[1]
        bits = []
        for y in range(glyph_size.height):
            for x in range(glyph_size.width):
                value = pixels[cx + x, cy + y]
                bits.append(value < threshold if dark_ink else value >= threshold)
        glyphs.append(Glyph(glyph_size, bits))

    return Face(glyphs, glyph_size=glyph_size, first_code=first_code)


# ---------------------------------------------------------------------------
# .hex fonts
# ---------------------------------------------------------------------------

def parse_hex_font(lines: Iterable[str], height: int = 8) -> dict[int, list[int]]:
    """
    Parse ``CODEPOINT:BITMAP`` lines into {codepoint: [row bytes]}.

    Only 8-pixel-wide glyphs of ``height`` rows are kept; blank and '#'
    lines are ignored, and an empty bitmap is a blank glyph.
    """
    glyphs = {}
    for lineno, line in enumerate(lines, 1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split(":")
        if len(parts) != 2:
            raise FontImportError(f"malformed line {lineno}: {line!r}")
        cp_str, bmp_str = parts
        try:
            cp = int(cp_str, 16)
            rows = [int(bmp_str[i:i + 2], 16) for i in range(0, len(bmp_str), 2)]
        except ValueError as e:
            raise FontImportError(f"bad hex data on line {lineno}: {line!r}") from e
        if not rows:
            glyphs[cp] = [0] * height
        elif len(rows) == height:
            glyphs[cp] = rows
    return glyphs


def face_from_hex(
    hex_path: Path | str,
    first: int = ASCII_FIRST,
    last: int = ASCII_LAST,
    height: int = 8,
) -> Face:
    """Glyphs ``first``..``last`` of an 8-pixel-wide .hex font; missing ones are blank."""
    try:
        with open(hex_path, encoding="utf-8") as f:
            rows_by_code = parse_hex_font(f, height)
    except OSError as e:
        raise FontImportError(f"cannot read {hex_path}: {e}") from e

    size = Size(8, height)
    glyphs = []
    for code in range(first, last + 1):
        rows = rows_by_code.get(code, [0] * height)
        glyphs.append(Glyph(size, (
            bool(row & (0x80 >> x)) for row in rows for x in range(8)
        )))
    return Face(glyphs, glyph_size=size, first_code=first)
