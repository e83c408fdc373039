import tempfile
import unittest
from pathlib import Path

from fontbytes.generator import ExportMethod, SourceCodeOptions
from fontbytes.packer import BitNumbering
from fontbytes.settings import Settings


class TestSettings(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "fontbytes.ini"

    def tearDown(self):
        self.tmp.cleanup()

    def test_defaults_for_missing_file(self):
        settings = Settings.load(self.path)
        self.assertIs(settings.bit_numbering, BitNumbering.LSB)
        self.assertFalse(settings.invert_bits)
        self.assertFalse(settings.include_line_spacing)
        self.assertEqual(settings.format, "c")
        self.assertEqual(settings.options(), SourceCodeOptions())

    def test_round_trip(self):
        settings = Settings.load(self.path)
        options = SourceCodeOptions(bit_numbering=BitNumbering.MSB, invert_bits=True,
                                    include_line_spacing=True)
        settings.update_from(options, "python-list")
        settings.save()

        loaded = Settings.load(self.path)
        self.assertIs(loaded.bit_numbering, BitNumbering.MSB)
        self.assertTrue(loaded.invert_bits)
        self.assertTrue(loaded.include_line_spacing)
        self.assertEqual(loaded.format, "python-list")

    def test_options_keep_unpersisted_fields(self):
        self.path.write_text("[source_code_options]\nbit_numbering = MSB\n", encoding="utf-8")
        base = SourceCodeOptions(wrap_column=40, export_method=ExportMethod.SELECTED)
        options = Settings.load(self.path).options(base)
        self.assertEqual(options.wrap_column, 40)
        self.assertIs(options.export_method, ExportMethod.SELECTED)
        self.assertIs(options.bit_numbering, BitNumbering.MSB)

    def test_bad_values_fall_back_to_defaults(self):
        self.path.write_text(
            "[source_code_options]\n"
            "bit_numbering = middle\n"
            "invert_bits = maybe\n"
            "format = cobol\n",
            encoding="utf-8",
        )
        settings = Settings.load(self.path)
        self.assertIs(settings.bit_numbering, BitNumbering.LSB)
        self.assertFalse(settings.invert_bits)
        self.assertEqual(settings.format, "c")

    def test_save_needs_a_path(self):
        with self.assertRaises(ValueError):
            Settings().save()
        target = Settings().save(self.path)
        self.assertTrue(target.exists())


if __name__ == '__main__':
    unittest.main()
