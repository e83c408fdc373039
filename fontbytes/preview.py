"""Preview image of a face, to check an import before generating code."""

from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageDraw

from .errors import FontBytesError
from .fontdata import Face

INK = (0, 0, 0)
PAPER = (255, 255, 255)
GRID = (200, 200, 200)
EXPORTED = (220, 40, 40)


def render_preview(face: Face, scale: int = 2, columns: int = 16, spacing: int = 2) -> Image.Image:
    """
    Draw every glyph of ``face`` on a grid.

    Each glyph pixel becomes a ``scale`` x ``scale`` block; exported
    glyphs get a red frame, the others a grey one.
    """
    size = face.glyph_size
    cell_w = size.width * scale + spacing * 2
    cell_h = size.height * scale + spacing * 2
    rows = max((face.num_glyphs + columns - 1) // columns, 1)

    preview = Image.new("RGB", (columns * cell_w, rows * cell_h), color=PAPER)
    draw = ImageDraw.Draw(preview)

    for index, glyph in enumerate(face.glyphs):
        x = (index % columns) * cell_w
        y = (index // columns) * cell_h
        outline = EXPORTED if index in face.exported_glyph_ids else GRID
        draw.rectangle([x, y, x + cell_w - 1, y + cell_h - 1], outline=outline)

        for gy, row in enumerate(glyph.rows()):
            for gx, pixel in enumerate(row):
                if not pixel:
                    continue
                px = x + spacing + gx * scale
                py = y + spacing + gy * scale
                draw.rectangle([px, py, px + scale - 1, py + scale - 1], fill=INK)

    return preview


def save_preview(face: Face, output_path: Path | str, scale: int = 2, columns: int = 16) -> Path:
    """Write the preview of ``face``; the image format follows the file suffix."""
    output_path = Path(output_path)
    try:
        render_preview(face, scale, columns).save(output_path)
    except (OSError, ValueError) as e:
        raise FontBytesError(f"cannot write preview {output_path}: {e}") from e
    return output_path
