"""
Font data model: sizes, glyphs and faces.

A glyph is a fixed-size bitmap stored row-major as a tuple of booleans.
A face is an ordered collection of glyphs sharing one size, plus the set
of glyph ids marked for subset export.  Both are immutable: the
generator only ever reads them.
"""

from __future__ import annotations

from typing import Iterable, Iterator, NamedTuple, Protocol, Sequence

from .errors import FontDataError

# Glyph 0 of a face is the space character unless told otherwise.
FIRST_ASCII = 0x20

SET_PIXEL_CHARS = "#X@1"


class Size(NamedTuple):
    width: int
    height: int

    def with_margins(self, margins: Margins) -> Size:
        """Return the size left after removing the top/bottom margin rows."""
        return Size(self.width, self.height - margins.top - margins.bottom)

    def __str__(self):
        return f"{self.width}x{self.height}"


class Point(NamedTuple):
    x: int
    y: int

    def offset(self, size: Size) -> int:
        return self.y * size.width + self.x


class Margins(NamedTuple):
    top: int = 0
    bottom: int = 0
    left: int = 0
    right: int = 0


class Glyph:
    """An immutable fixed-size bitmap."""

    __slots__ = ("_size", "_pixels")

    def __init__(self, size: Size, pixels: Iterable[bool]):
        size = Size(*size)
        if size.width <= 0 or size.height <= 0:
            raise FontDataError(f"glyph size must be non-zero, got {size}")
        pixels = tuple(bool(p) for p in pixels)
        if len(pixels) != size.width * size.height:
            raise FontDataError(
                f"glyph of size {size} needs {size.width * size.height} "
                f"pixels, got {len(pixels)}"
            )
        self._size = size
        self._pixels = pixels

    @classmethod
    def blank(cls, size: Size) -> Glyph:
        size = Size(*size)
        return cls(size, [False] * (size.width * size.height))

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> Glyph:
        """
        Build a glyph from text art, one string per row.

        '#', 'X', '@' and '1' mark set pixels; any other character is clear.
        All rows must have the same length.
        """
        if not rows:
            raise FontDataError("glyph needs at least one row")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise FontDataError("glyph rows must all have the same length")
        pixels = [ch in SET_PIXEL_CHARS for row in rows for ch in row]
        return cls(Size(width, len(rows)), pixels)

    @property
    def size(self) -> Size:
        return self._size

    @property
    def pixels(self) -> tuple[bool, ...]:
        return self._pixels

    def is_pixel_set(self, point: Point) -> bool:
        x, y = point
        if not (0 <= x < self._size.width and 0 <= y < self._size.height):
            raise IndexError(f"point {tuple(point)} outside glyph of size {self._size}")
        return self._pixels[Point(x, y).offset(self._size)]

    def rows(self) -> Iterator[tuple[bool, ...]]:
        width = self._size.width
        for y in range(self._size.height):
            yield self._pixels[y * width:(y + 1) * width]

    def is_blank(self) -> bool:
        return not any(self._pixels)

    def __eq__(self, other):
        if not isinstance(other, Glyph):
            return NotImplemented
        return self._size == other._size and self._pixels == other._pixels

    def __hash__(self):
        return hash((self._size, self._pixels))

    def __repr__(self):
        return f"Glyph(size={self._size})"

    def __str__(self):
        return "\n".join(
            "".join("1" if p else "0" for p in row) for row in self.rows()
        )


class FaceReader(Protocol):
    """Anything a face can be read from (a font importer, an editor...)."""

    def font_size(self) -> Size: ...

    def num_glyphs(self) -> int: ...

    def is_pixel_set(self, glyph_id: int, point: Point) -> bool: ...


class Face:
    """
    An ordered, immutable set of glyphs sharing one glyph size.

    Args:
        glyphs: the glyphs, in code order
        exported_glyph_ids: ids of the glyphs taking part in subset export
        glyph_size: required when ``glyphs`` is empty, otherwise taken
            from the first glyph
        first_code: character code of glyph 0, when ``codes`` is not given
        codes: character code of every glyph; by default glyph ``i`` is
            ``first_code + i``
    """

    __slots__ = ("_glyphs", "_size", "_exported", "_first_code", "_codes", "_ids_by_code")

    def __init__(
        self,
        glyphs: Iterable[Glyph],
        exported_glyph_ids: Iterable[int] = (),
        glyph_size: Size | None = None,
        first_code: int = FIRST_ASCII,
        codes: Iterable[int] | None = None,
    ):
        glyphs = tuple(glyphs)
        if codes is None:
            codes = range(first_code, first_code + len(glyphs))
        codes = tuple(codes)
        if len(codes) != len(glyphs):
            raise FontDataError(f"{len(codes)} character codes for {len(glyphs)} glyphs")
        ids_by_code = {code: index for index, code in enumerate(codes)}
        if len(ids_by_code) != len(codes):
            raise FontDataError("character codes must be unique")
        if glyph_size is None:
            if not glyphs:
                raise FontDataError("an empty face needs an explicit glyph size")
            glyph_size = glyphs[0].size
        glyph_size = Size(*glyph_size)
        for index, glyph in enumerate(glyphs):
            if glyph.size != glyph_size:
                raise FontDataError(
                    f"glyph {index} has size {glyph.size}, face uses {glyph_size}"
                )
        exported = frozenset(exported_glyph_ids)
        out_of_range = sorted(i for i in exported if not 0 <= i < len(glyphs))
        if out_of_range:
            raise FontDataError(
                f"exported glyph ids out of range: {out_of_range} "
                f"(face has {len(glyphs)} glyphs)"
            )
        self._glyphs = glyphs
        self._size = glyph_size
        self._exported = exported
        self._first_code = codes[0] if codes else first_code
        self._codes = codes
        self._ids_by_code = ids_by_code

    @classmethod
    def from_reader(cls, reader: FaceReader, first_code: int = FIRST_ASCII) -> Face:
        size = Size(*reader.font_size())
        glyphs = []
        for glyph_id in range(reader.num_glyphs()):
            glyphs.append(Glyph(size, (
                reader.is_pixel_set(glyph_id, Point(x, y))
                for y in range(size.height)
                for x in range(size.width)
            )))
        return cls(glyphs, glyph_size=size, first_code=first_code)

    @property
    def glyph_size(self) -> Size:
        return self._size

    @property
    def num_glyphs(self) -> int:
        return len(self._glyphs)

    @property
    def glyphs(self) -> tuple[Glyph, ...]:
        return self._glyphs

    @property
    def exported_glyph_ids(self) -> frozenset[int]:
        return self._exported

    @property
    def first_code(self) -> int:
        return self._first_code

    @property
    def codes(self) -> tuple[int, ...]:
        return self._codes

    def glyph_at(self, index: int) -> Glyph:
        if not 0 <= index < len(self._glyphs):
            raise IndexError(
                f"glyph index {index} out of range [0, {len(self._glyphs)})"
            )
        return self._glyphs[index]

    def code_for(self, index: int) -> int:
        """Character code represented by glyph ``index``."""
        self.glyph_at(index)
        return self._codes[index]

    def glyph_id_for(self, code: int) -> int:
        """Id of the glyph for character ``code``; IndexError if the face has none."""
        try:
            return self._ids_by_code[code]
        except KeyError:
            raise IndexError(f"no glyph for character 0x{code:02X}") from None

    def with_exported_glyphs(self, ids: Iterable[int]) -> Face:
        return Face(self._glyphs, ids, self._size, self._first_code, self._codes)

    def __getitem__(self, ch: str) -> Glyph:
        return self._glyphs[self.glyph_id_for(ord(ch))]

    def __len__(self):
        return len(self._glyphs)

    def __iter__(self):
        return iter(self._glyphs)

    def __repr__(self):
        return (
            f"Face(num_glyphs={len(self._glyphs)}, glyph_size={self._size}, "
            f"exported={len(self._exported)})"
        )
