"""
Margin calculation.

Rows that are blank in every glyph of a face carry no information and are
trimmed before packing, unless the caller asks to keep line spacing.
Margins are always computed across the whole face so every glyph keeps
the same trimmed size.
"""

from __future__ import annotations

from .fontdata import Face, Glyph, Margins, Size


def _leading_blank(lines) -> int:
    count = 0
    for line in lines:
        if any(line):
            break
        count += 1
    return count


def glyph_line_margins(glyph: Glyph) -> Margins | None:
    """
    Blank rows/columns around the ink of one glyph.

    Returns None for a fully blank glyph, which has no ink to bound.
    """
    if glyph.is_blank():
        return None
    rows = list(glyph.rows())
    columns = list(zip(*rows))
    return Margins(
        top=_leading_blank(rows),
        bottom=_leading_blank(reversed(rows)),
        left=_leading_blank(columns),
        right=_leading_blank(reversed(columns)),
    )


def calculate_margins(face: Face) -> Margins:
    """
    Largest margins (in lines) that are blank in every glyph of the face.

    Blank glyphs such as the space do not constrain the result.  A face
    with fewer than two glyphs, or with nothing but blank glyphs, is left
    untrimmed.
    """
    if face.num_glyphs < 2:
        return Margins()

    found = [m for m in map(glyph_line_margins, face.glyphs) if m is not None]
    if not found:
        return Margins()

    return Margins(
        top=min(m.top for m in found),
        bottom=min(m.bottom for m in found),
        left=min(m.left for m in found),
        right=min(m.right for m in found),
    )


def pixel_margins(line_margins: Margins, glyph_size: Size) -> Margins:
    """Convert line margins to offsets into a glyph's flat pixel sequence."""
    return Margins(
        top=line_margins.top * glyph_size.width,
        bottom=line_margins.bottom * glyph_size.width,
        left=line_margins.left,
        right=line_margins.right,
    )


def trimmed_size(face: Face, include_line_spacing: bool = False) -> tuple[Size, Margins]:
    """
    Size to generate and pixel margins to trim for ``face``.

    With ``include_line_spacing`` every row is kept.
    """
    if include_line_spacing:
        return face.glyph_size, Margins()
    line_margins = calculate_margins(face)
    return (
        face.glyph_size.with_margins(line_margins),
        pixel_margins(line_margins, face.glyph_size),
    )
