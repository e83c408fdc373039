"""
Font source code generator.

Turns a face into source code for one of the registered output formats:

    text = generate(face, SourceCodeOptions(bit_numbering=BitNumbering.MSB), "arduino")

Every glyph is packed with the same trimmed size (see margins.py) and
each glyph starts a new array row followed by a comment naming it.  Rows
are wrapped once the output column reaches ``wrap_column``.

In subset mode (ExportMethod.SELECTED) only the exported glyphs are
packed and a lookup table from glyph id to data offset follows the data.
"""

from __future__ import annotations

import dataclasses
import enum
from datetime import datetime
from typing import Callable

from .errors import GeneratorError
from .fontdata import Face, Glyph, Margins, Size
from .formats import DEFAULT_FORMAT, Format, format_for
from .idiom import Indentation, SourceSink
from .lut import emit_lut
from .margins import trimmed_size
from .packer import BitNumbering, bytes_per_glyph, pack_pixels, trim_pixels

DEFAULT_FONT_NAME = "font"


class ExportMethod(enum.Enum):
    ALL = "all"
    SELECTED = "selected"


@dataclasses.dataclass(frozen=True)
class SourceCodeOptions:
    wrap_column: int = 80
    export_method: ExportMethod = ExportMethod.ALL
    bit_numbering: BitNumbering = BitNumbering.LSB
    invert_bits: bool = False
    include_line_spacing: bool = False
    indentation: Indentation = Indentation.tab()


def current_timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def glyph_comment(face: Face) -> Callable[[int], str]:
    """Default glyph comment: the character code and, when printable, the character."""
    def comment(glyph_id: int) -> str:
        code = face.code_for(glyph_id)
        ch = chr(code)
        if ch.isprintable() and not ch.isspace():
            return f"Character 0x{code:02X} ({ch})"
        return f"Character 0x{code:02X}"
    return comment


class FontSourceCodeGenerator:
    """
    Generates source code for faces with a fixed set of options.

    Args:
        options: packing and layout options
        comment_for_glyph: builds the comment for a glyph id of the face
            being generated; defaults to glyph_comment
        timestamp: returns the creation time written into the header
    """

    def __init__(
        self,
        options: SourceCodeOptions = SourceCodeOptions(),
        comment_for_glyph: Callable[[Face], Callable[[int], str]] = glyph_comment,
        timestamp: Callable[[], str] = current_timestamp,
    ):
        self.options = options
        self._comment_for = comment_for_glyph
        self._timestamp = timestamp

    def generate(self, face: Face, fmt: Format | str = DEFAULT_FORMAT,
                 font_name: str = DEFAULT_FONT_NAME) -> str:
        if isinstance(fmt, str):
            fmt = format_for(fmt)
        if face.num_glyphs == 0:
            raise GeneratorError("face has no glyphs")
        if self.options.export_method is ExportMethod.ALL:
            return self._generate_all(face, fmt, font_name)
        if not face.exported_glyph_ids:
            raise GeneratorError("no glyphs selected for export")
        return self._generate_subset(face, fmt, font_name)

    def _begin(self, face: Face, fmt: Format, font_name: str):
        size, margins = trimmed_size(face, self.options.include_line_spacing)
        sink = SourceSink(fmt.render)
        sink.begin(font_name, size, self._timestamp())
        sink.begin_array(font_name)
        return sink, size, margins

    def _generate_all(self, face: Face, fmt: Format, font_name: str) -> str:
        sink, size, margins = self._begin(face, fmt, font_name)
        comment = self._comment_for(face)

        for glyph_id, glyph in enumerate(face.glyphs):
            self._output_glyph(sink, glyph, size, margins)
            sink.comment(comment(glyph_id))
            sink.line_break()

        sink.end_array()
        sink.end()
        return sink.getvalue()

    def _generate_subset(self, face: Face, fmt: Format, font_name: str) -> str:
        sink, size, margins = self._begin(face, fmt, font_name)
        comment = self._comment_for(face)
        glyph_bytes = bytes_per_glyph(size)

        for k, glyph_id in enumerate(sorted(face.exported_glyph_ids)):
            self._output_glyph(sink, face.glyph_at(glyph_id), size, margins)
            sink.comment(f"{comment(glyph_id)} @ {k * glyph_bytes}")
            sink.line_break()

        sink.end_array()

        emit_lut(sink, face.exported_glyph_ids, glyph_bytes,
                 self.options.indentation, comment)

        sink.end()
        return sink.getvalue()

    def _output_glyph(self, sink: SourceSink, glyph: Glyph, size: Size,
                      margins: Margins) -> None:
        options = self.options
        sink.begin_array_row(options.indentation)
        pixels = trim_pixels(glyph.pixels, margins)
        for byte in pack_pixels(pixels, size.width, options.bit_numbering,
                                options.invert_bits):
            sink.value(byte)
            if sink.column >= options.wrap_column:
                sink.line_break()
                sink.begin_array_row(options.indentation)


def generate(
    face: Face,
    options: SourceCodeOptions = SourceCodeOptions(),
    fmt: Format | str = DEFAULT_FORMAT,
    font_name: str = DEFAULT_FONT_NAME,
    timestamp: str | None = None,
) -> str:
    """Generate source code for ``face`` in format ``fmt`` (a Format or its identifier)."""
    if timestamp is None:
        generator = FontSourceCodeGenerator(options)
    else:
        generator = FontSourceCodeGenerator(options, timestamp=lambda: timestamp)
    return generator.generate(face, fmt, font_name)
