"""
Source code idioms.

The generator never writes text itself.  It emits a stream of idiom
events (begin, array open, row, value, comment, line break, close) into a
SourceSink, and the sink turns each one into text with the renderer of
the selected output format.

    BEGIN
    BEGIN_ARRAY(font)
        BEGIN_ARRAY_ROW, VALUE, VALUE, ..., COMMENT, LINE_BREAK
    END_ARRAY
    BEGIN_ARRAY(lut)            subset export only
        ...
    END_ARRAY
    END
"""

from __future__ import annotations

import enum
from typing import Callable, NamedTuple

from .fontdata import Size


class Idiom(enum.Enum):
    BEGIN = "begin"
    BEGIN_ARRAY = "begin_array"
    BEGIN_ARRAY_ROW = "begin_array_row"
    VALUE = "value"
    COMMENT = "comment"
    LINE_BREAK = "line_break"
    END_ARRAY = "end_array"
    END = "end"


class Header(NamedTuple):
    name: str
    size: Size
    timestamp: str


class ArrayHeader(NamedTuple):
    name: str
    value_width: int = 1


class Value(NamedTuple):
    value: int
    width: int = 1


class Indentation(NamedTuple):
    text: str

    @classmethod
    def tab(cls) -> Indentation:
        return cls("\t")

    @classmethod
    def spaces(cls, count: int) -> Indentation:
        return cls(" " * count)

    @classmethod
    def parse(cls, text: str) -> Indentation:
        """'tab' or a number of spaces."""
        if text == "tab":
            return cls.tab()
        count = int(text)
        if count < 0:
            raise ValueError(f"indentation cannot be negative: {count}")
        return cls.spaces(count)


class Event(NamedTuple):
    idiom: Idiom
    arg: object = None


Renderer = Callable[[Event], str]


class SourceSink:
    """
    Collects rendered text and tracks the output column.

    The column counts characters written since the current array row was
    opened, indentation included.
    """

    def __init__(self, render: Renderer):
        self._render = render
        self._parts: list[str] = []
        self._length = 0
        self._row_start = 0

    def emit(self, idiom: Idiom, arg: object = None) -> None:
        if idiom is Idiom.BEGIN_ARRAY_ROW:
            self._row_start = self._length
        text = self._render(Event(idiom, arg))
        self._parts.append(text)
        self._length += len(text)

    def begin(self, name: str, size: Size, timestamp: str) -> None:
        self.emit(Idiom.BEGIN, Header(name, size, timestamp))

    def begin_array(self, name: str, value_width: int = 1) -> None:
        self.emit(Idiom.BEGIN_ARRAY, ArrayHeader(name, value_width))

    def begin_array_row(self, indentation: Indentation) -> None:
        self.emit(Idiom.BEGIN_ARRAY_ROW, indentation)

    def value(self, value: int, width: int = 1) -> None:
        self.emit(Idiom.VALUE, Value(value, width))

    def comment(self, text: str) -> None:
        self.emit(Idiom.COMMENT, text)

    def line_break(self) -> None:
        self.emit(Idiom.LINE_BREAK)

    def end_array(self) -> None:
        self.emit(Idiom.END_ARRAY)

    def end(self) -> None:
        self.emit(Idiom.END)

    @property
    def column(self) -> int:
        return self._length - self._row_start

    def getvalue(self) -> str:
        return "".join(self._parts)
