"""
Lookup table for subset export.

When only some glyphs are exported, the data array holds just those
glyphs and a second array maps every glyph id up to the last exported
one to the byte offset of its data.  Ids that were not exported map to 0.
"""

from __future__ import annotations

from typing import Callable, Collection

from .idiom import Indentation, SourceSink

LUT_NAME = "lut"


def lut_value_width(max_offset: int) -> int:
    """Smallest element width in bytes (1, 2, 4 or 8) that holds ``max_offset``."""
    if max_offset < 1 << 8:
        return 1
    if max_offset < 1 << 16:
        return 2
    if max_offset < 1 << 32:
        return 4
    return 8


def max_offset(exported_count: int, bytes_per_glyph: int) -> int:
    return (exported_count - 1) * bytes_per_glyph


def lut_offsets(exported_glyph_ids: Collection[int], bytes_per_glyph: int) -> list[int]:
    """
    One entry per glyph id from 0 to the largest exported id.

    The k-th exported glyph (in ascending id order) sits at
    ``k * bytes_per_glyph`` in the data array.
    """
    offsets = [0] * (max(exported_glyph_ids) + 1)
    for k, glyph_id in enumerate(sorted(exported_glyph_ids)):
        offsets[glyph_id] = k * bytes_per_glyph
    return offsets


def emit_lut(
    sink: SourceSink,
    exported_glyph_ids: Collection[int],
    bytes_per_glyph: int,
    indentation: Indentation,
    comment_for_glyph: Callable[[int], str],
) -> None:
    """
    Emit the lookup table array into ``sink``.

    Exported entries get a row of their own with a comment.  Consecutive
    placeholder entries share a row, which the next exported entry closes.
    """
    exported = frozenset(exported_glyph_ids)
    width = lut_value_width(max_offset(len(exported), bytes_per_glyph))

    sink.begin_array(LUT_NAME, width)

    previous_exported = True
    for glyph_id, offset in enumerate(lut_offsets(exported, bytes_per_glyph)):
        if glyph_id in exported:
            if not previous_exported:
                sink.line_break()
            sink.begin_array_row(indentation)
            sink.value(offset, width)
            sink.comment(comment_for_glyph(glyph_id))
            sink.line_break()
            previous_exported = True
        else:
            if previous_exported:
                sink.begin_array_row(indentation)
            sink.value(0, width)
            previous_exported = False

    sink.end_array()
