"""
fontbytes: bitmap fonts to C, Arduino and Python source code.

    from fontbytes import Face, Glyph, SourceCodeOptions, generate

    face = Face([Glyph.from_rows(rows) for rows in glyph_art])
    print(generate(face, SourceCodeOptions(), "c"))
"""

__version__ = "0.1.0"

from .errors import (FontBytesError, FontDataError, FontImportError, GeneratorError,
                     UnknownFormatError)
from .fontdata import Face, FaceReader, Glyph, Margins, Point, Size
from .formats import FORMATS, Format, available_formats, format_for
from .generator import ExportMethod, FontSourceCodeGenerator, SourceCodeOptions, generate
from .idiom import Indentation
from .margins import calculate_margins, pixel_margins
from .packer import BitNumbering, bytes_per_glyph, pack_glyph

__all__ = [
    "BitNumbering",
    "ExportMethod",
    "FORMATS",
    "Face",
    "FaceReader",
    "FontBytesError",
    "FontDataError",
    "FontImportError",
    "FontSourceCodeGenerator",
    "Format",
    "GeneratorError",
    "Glyph",
    "Indentation",
    "Margins",
    "Point",
    "Size",
    "SourceCodeOptions",
    "UnknownFormatError",
    "available_formats",
    "bytes_per_glyph",
    "calculate_margins",
    "format_for",
    "generate",
    "pack_glyph",
    "pixel_margins",
]
