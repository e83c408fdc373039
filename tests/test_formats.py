import unittest

from fontbytes.errors import UnknownFormatError
from fontbytes.fontdata import Size
from fontbytes.formats import (ARDUINO, C, FORMATS, PYTHON_BYTES, PYTHON_LIST,
                               available_formats, format_for)
from fontbytes.idiom import (ArrayHeader, Event, Header, Idiom, Indentation, SourceSink,
                             Value)


HEADER = Header("font", Size(8, 9), "2024-01-02 03:04:05")


class TestRegistry(unittest.TestCase):

    def test_identifiers_in_registration_order(self):
        self.assertEqual(available_formats(), ["c", "arduino", "python-list", "python-bytes"])
        self.assertIs(FORMATS[0], C)

    def test_display_names(self):
        self.assertEqual([f.name for f in FORMATS],
                         ["C/C++", "Arduino", "Python List", "Python Bytes"])

    def test_format_for(self):
        self.assertIs(format_for("python-bytes"), PYTHON_BYTES)
        with self.assertRaises(UnknownFormatError):
            format_for("rust")
        with self.assertRaises(KeyError):
            format_for("")


class TestRenderers(unittest.TestCase):

    def render(self, fmt, idiom, arg=None):
        return fmt.render(Event(idiom, arg))

    def test_c(self):
        self.assertEqual(
            self.render(C, Idiom.BEGIN, HEADER),
            "//\n// Font Data\n// Created: 2024-01-02 03:04:05\n"
            "// Font: font\n// Size: 8x9\n//\n",
        )
        self.assertEqual(self.render(C, Idiom.BEGIN_ARRAY, ArrayHeader("font")),
                         "\n\nconst unsigned char font[] = {\n")
        self.assertEqual(self.render(C, Idiom.BEGIN_ARRAY, ArrayHeader("lut", 2)),
                         "\n\nconst uint16_t lut[] = {\n")
        self.assertEqual(self.render(C, Idiom.BEGIN_ARRAY_ROW, Indentation.tab()), "\t")
        self.assertEqual(self.render(C, Idiom.VALUE, Value(0x3C)), "0x3C,")
        self.assertEqual(self.render(C, Idiom.VALUE, Value(0x0A)), "0x0A,")
        self.assertEqual(self.render(C, Idiom.VALUE, Value(0x123, 2)), "0x0123,")
        self.assertEqual(self.render(C, Idiom.COMMENT, "A"), " // A")
        self.assertEqual(self.render(C, Idiom.LINE_BREAK), "\n")
        self.assertEqual(self.render(C, Idiom.END_ARRAY), "};\n")
        self.assertEqual(self.render(C, Idiom.END), "\n\n")

    def test_arduino(self):
        self.assertTrue(self.render(ARDUINO, Idiom.BEGIN, HEADER).endswith(
            "//\n\n#include <Arduino.h>\n"))
        self.assertEqual(self.render(ARDUINO, Idiom.BEGIN_ARRAY, ArrayHeader("font")),
                         "\n\nconst uint8_t font[] PROGMEM = {\n")
        self.assertEqual(self.render(ARDUINO, Idiom.VALUE, Value(0xFF)), "0xFF,")
        self.assertEqual(self.render(ARDUINO, Idiom.COMMENT, "A"), " // A")
        self.assertEqual(self.render(ARDUINO, Idiom.END_ARRAY), "};\n")

    def test_python_list(self):
        self.assertTrue(self.render(PYTHON_LIST, Idiom.BEGIN, HEADER).startswith(
            "#\n# Font Data\n# Created: "))
        self.assertEqual(self.render(PYTHON_LIST, Idiom.BEGIN_ARRAY, ArrayHeader("font")),
                         "\n\nfont = [\n")
        self.assertEqual(self.render(PYTHON_LIST, Idiom.BEGIN_ARRAY_ROW, Indentation.spaces(4)),
                         "    ")
        self.assertEqual(self.render(PYTHON_LIST, Idiom.VALUE, Value(0xab)), "0xAB,")
        self.assertEqual(self.render(PYTHON_LIST, Idiom.COMMENT, "A"), " # A")
        self.assertEqual(self.render(PYTHON_LIST, Idiom.LINE_BREAK), "\n")
        self.assertEqual(self.render(PYTHON_LIST, Idiom.END_ARRAY), "\n]\n")

    def test_python_bytes(self):
        self.assertEqual(self.render(PYTHON_BYTES, Idiom.BEGIN_ARRAY, ArrayHeader("font")),
                         "\n\nfont = b'' \\\n")
        self.assertEqual(self.render(PYTHON_BYTES, Idiom.BEGIN_ARRAY_ROW, Indentation.tab()),
                         "\t'")
        self.assertEqual(self.render(PYTHON_BYTES, Idiom.VALUE, Value(0x3c)), "\\x3C")
        self.assertEqual(self.render(PYTHON_BYTES, Idiom.VALUE, Value(0x0102, 2)),
                         "\\x02\\x01")
        self.assertEqual(self.render(PYTHON_BYTES, Idiom.COMMENT, "A"), "")
        self.assertEqual(self.render(PYTHON_BYTES, Idiom.LINE_BREAK), "' \\\n")
        self.assertEqual(self.render(PYTHON_BYTES, Idiom.END_ARRAY), "")
        self.assertEqual(self.render(PYTHON_BYTES, Idiom.END), "\n\n")

    def test_renderers_are_pure(self):
        event = Event(Idiom.VALUE, Value(0x42))
        for fmt in FORMATS:
            self.assertEqual(fmt.render(event), fmt.render(event))


class TestIndentation(unittest.TestCase):

    def test_parse(self):
        self.assertEqual(Indentation.parse("tab"), Indentation("\t"))
        self.assertEqual(Indentation.parse("2"), Indentation("  "))
        with self.assertRaises(ValueError):
            Indentation.parse("-1")
        with self.assertRaises(ValueError):
            Indentation.parse("wide")


class TestSourceSink(unittest.TestCase):

    def test_column_counts_from_row_start(self):
        sink = SourceSink(C.render)
        sink.begin_array("font")
        sink.begin_array_row(Indentation.tab())
        self.assertEqual(sink.column, 1)
        sink.value(0x01)
        sink.value(0x02)
        self.assertEqual(sink.column, 11)
        sink.line_break()
        sink.begin_array_row(Indentation.spaces(0))
        self.assertEqual(sink.column, 0)
        sink.value(0x03)
        self.assertEqual(sink.column, 5)
        self.assertEqual(sink.getvalue(),
                         "\n\nconst unsigned char font[] = {\n\t0x01,0x02,\n0x03,")

    def test_column_depends_on_rendered_width(self):
        c_sink = SourceSink(C.render)
        bytes_sink = SourceSink(PYTHON_BYTES.render)
        for sink in (c_sink, bytes_sink):
            sink.begin_array_row(Indentation.spaces(0))
            sink.value(0x10)
            sink.value(0x20)
        self.assertEqual(c_sink.column, 10)
        self.assertEqual(bytes_sink.column, 9)


if __name__ == '__main__':
    unittest.main()
