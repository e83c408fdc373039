"""
Bit packing of glyph pixels.

Pixels are walked row-major and packed eight to a byte.  Every pixel row
starts a new byte, so a row of ``w`` pixels takes ``ceil(w / 8)`` bytes
and the unused trailing bits of its last byte are zero:

    width | bytes per row
    ----------------------
      5   |   1
      8   |   1
     12   |   2
     17   |   3

'9' (8 pixels wide), LSB numbering:

    ..XXXX.. -> 0x3C
    .XX..XX. -> 0x66
    .XX..XX. -> 0x66
    ..XXXXX. -> 0x3E
    .....XX. -> 0x06
    .....XX. -> 0x06
    .XX..XX. -> 0x66
    ..XXXX.. -> 0x3C
    ........ -> 0x00
"""

from __future__ import annotations

import enum
from typing import Iterable, Iterator, Sequence

from .fontdata import Glyph, Margins, Size

BYTE_SIZE = 8


class BitNumbering(enum.Enum):
    LSB = "lsb"
    MSB = "msb"


def bytes_per_row(width: int) -> int:
    return (width + BYTE_SIZE - 1) // BYTE_SIZE


def bytes_per_glyph(size: Size) -> int:
    return size.height * bytes_per_row(size.width)


def bit_at(position: int) -> int:
    """Mask of bit ``position``, counted from the left of the written byte (0 is 0x80)."""
    return 0x80 >> position


def invert_byte(byte: int) -> int:
    return ~byte & 0xFF


def trim_pixels(pixels: Sequence[bool], margins: Margins) -> Sequence[bool]:
    """Drop ``margins.top`` pixels from the front and ``margins.bottom`` from the back."""
    return pixels[margins.top:len(pixels) - margins.bottom]


def pack_pixels(
    pixels: Iterable[bool],
    width: int,
    bit_numbering: BitNumbering = BitNumbering.LSB,
    invert_bits: bool = False,
) -> Iterator[int]:
    """
    Pack a row-major pixel sequence into bytes.

    A byte is emitted whenever it is full or the current pixel row ends.

    Args:
        pixels: row-major pixels, a whole number of rows of ``width``
        width: pixels per row
        bit_numbering: LSB puts the first pixel of a byte at position 0
            (0x80), MSB puts it at position 7 (0x01)
        invert_bits: flip every bit of each byte before it is emitted

    Yields:
        one int in 0..255 per packed byte
    """
    byte = 0
    bit_pos = 0
    col = 0
    for pixel in pixels:
        if pixel:
            if bit_numbering is BitNumbering.LSB:
                byte |= bit_at(bit_pos)
            else:
                byte |= bit_at(BYTE_SIZE - 1 - bit_pos)

        bit_pos += 1
        col += 1

        if col >= width or bit_pos >= BYTE_SIZE:
            yield invert_byte(byte) if invert_bits else byte
            byte = 0
            bit_pos = 0
            if col >= width:
                col = 0


def pack_glyph(
    glyph: Glyph,
    margins: Margins = Margins(),
    bit_numbering: BitNumbering = BitNumbering.LSB,
    invert_bits: bool = False,
) -> bytes:
    """Pack one glyph with ``margins`` (pixel margins) trimmed away."""
    pixels = trim_pixels(glyph.pixels, margins)
    return bytes(pack_pixels(pixels, glyph.size.width, bit_numbering, invert_bits))
