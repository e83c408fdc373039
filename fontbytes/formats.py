"""
Output formats.

Each format is a table mapping an idiom to a function that renders its
payload.  Idioms missing from a table render as nothing.  A format only
decides how things look; packing and layout are the generator's job, so
adding a format means adding a table here and nothing else.
"""

from __future__ import annotations

from typing import Callable, NamedTuple

from .errors import UnknownFormatError
from .idiom import ArrayHeader, Event, Header, Idiom, Indentation, Renderer, Value

IdiomTable = dict[Idiom, Callable[[object], str]]

C_TYPES = {1: "unsigned char", 2: "uint16_t", 4: "uint32_t", 8: "uint64_t"}
STDINT_TYPES = {1: "uint8_t", 2: "uint16_t", 4: "uint32_t", 8: "uint64_t"}


def _header(prefix: str, header: Header) -> str:
    return (
        f"{prefix}\n"
        f"{prefix} Font Data\n"
        f"{prefix} Created: {header.timestamp}\n"
        f"{prefix} Font: {header.name}\n"
        f"{prefix} Size: {header.size.width}x{header.size.height}\n"
        f"{prefix}\n"
    )


def _hex_value(value: Value) -> str:
    return f"0x{value.value:0{2 * value.width}X},"


def _escaped_bytes(value: Value) -> str:
    return "".join(
        f"\\x{b:02X}" for b in value.value.to_bytes(value.width, "little")
    )


def _indent(indentation: Indentation) -> str:
    return indentation.text


def _render(table: IdiomTable, event: Event) -> str:
    handler = table.get(event.idiom)
    if handler is None:
        return ""
    return handler(event.arg)


C_IDIOMS: IdiomTable = {
    Idiom.BEGIN: lambda header: _header("//", header),
    Idiom.BEGIN_ARRAY: lambda array: (
        f"\n\nconst {C_TYPES[array.value_width]} {array.name}[] = {{\n"
    ),
    Idiom.BEGIN_ARRAY_ROW: _indent,
    Idiom.VALUE: _hex_value,
    Idiom.COMMENT: lambda text: f" // {text}",
    Idiom.LINE_BREAK: lambda _: "\n",
    Idiom.END_ARRAY: lambda _: "};\n",
    Idiom.END: lambda _: "\n\n",
}

ARDUINO_IDIOMS: IdiomTable = {
    **C_IDIOMS,
    Idiom.BEGIN: lambda header: _header("//", header) + "\n#include <Arduino.h>\n",
    Idiom.BEGIN_ARRAY: lambda array: (
        f"\n\nconst {STDINT_TYPES[array.value_width]} {array.name}[] PROGMEM = {{\n"
    ),
}

PYTHON_LIST_IDIOMS: IdiomTable = {
    **C_IDIOMS,
    Idiom.BEGIN: lambda header: _header("#", header),
    Idiom.BEGIN_ARRAY: lambda array: f"\n\n{array.name} = [\n",
    Idiom.COMMENT: lambda text: f" # {text}",
    Idiom.END_ARRAY: lambda _: "\n]\n",
}

# Every row is its own string literal, closed by the line break.
PYTHON_BYTES_IDIOMS: IdiomTable = {
    Idiom.BEGIN: lambda header: _header("#", header),
    Idiom.BEGIN_ARRAY: lambda array: f"\n\n{array.name} = b'' \\\n",
    Idiom.BEGIN_ARRAY_ROW: lambda indentation: indentation.text + "'",
    Idiom.VALUE: _escaped_bytes,
    Idiom.LINE_BREAK: lambda _: "' \\\n",
    Idiom.END: lambda _: "\n\n",
}


def render_c(event: Event) -> str:
    return _render(C_IDIOMS, event)


def render_arduino(event: Event) -> str:
    return _render(ARDUINO_IDIOMS, event)


def render_python_list(event: Event) -> str:
    return _render(PYTHON_LIST_IDIOMS, event)


def render_python_bytes(event: Event) -> str:
    return _render(PYTHON_BYTES_IDIOMS, event)


class Format(NamedTuple):
    identifier: str
    name: str
    render: Renderer


C = Format("c", "C/C++", render_c)
ARDUINO = Format("arduino", "Arduino", render_arduino)
PYTHON_LIST = Format("python-list", "Python List", render_python_list)
PYTHON_BYTES = Format("python-bytes", "Python Bytes", render_python_bytes)

# Registration order; the first entry is the default format.
FORMATS: tuple[Format, ...] = (C, ARDUINO, PYTHON_LIST, PYTHON_BYTES)

DEFAULT_FORMAT = FORMATS[0]


def available_formats() -> list[str]:
    return [f.identifier for f in FORMATS]


def format_for(identifier: str) -> Format:
    for fmt in FORMATS:
        if fmt.identifier == identifier:
            return fmt
    raise UnknownFormatError(identifier)
