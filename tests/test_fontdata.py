import unittest

from fontbytes.errors import FontDataError
from fontbytes.fontdata import Face, Glyph, Margins, Point, Size

from .glyphs import NINE


class TestSize(unittest.TestCase):

    def test_equality_by_field(self):
        self.assertEqual(Size(8, 9), Size(8, 9))
        self.assertNotEqual(Size(8, 9), Size(9, 8))

    def test_with_margins_removes_rows_only(self):
        self.assertEqual(Size(8, 16).with_margins(Margins(2, 3, 1, 1)), Size(8, 11))

    def test_point_offset(self):
        self.assertEqual(Point(3, 2).offset(Size(8, 9)), 19)
        self.assertEqual(Point(0, 0).offset(Size(8, 9)), 0)


class TestGlyph(unittest.TestCase):

    def test_from_rows(self):
        self.assertEqual(NINE.size, Size(8, 9))
        self.assertEqual(len(NINE.pixels), 72)
        self.assertTrue(NINE.is_pixel_set(Point(2, 0)))
        self.assertFalse(NINE.is_pixel_set(Point(0, 0)))

    def test_pixel_count_must_match_size(self):
        with self.assertRaises(FontDataError):
            Glyph(Size(2, 2), [True, False, True])

    def test_zero_size_rejected(self):
        with self.assertRaises(FontDataError):
            Glyph(Size(0, 4), [])
        with self.assertRaises(FontDataError):
            Glyph(Size(4, 0), [])

    def test_ragged_rows_rejected(self):
        with self.assertRaises(FontDataError):
            Glyph.from_rows(["##", "#"])

    def test_pixel_outside_glyph(self):
        with self.assertRaises(IndexError):
            NINE.is_pixel_set(Point(8, 0))

    def test_blank(self):
        glyph = Glyph.blank(Size(3, 2))
        self.assertTrue(glyph.is_blank())
        self.assertEqual(str(glyph), "000\n000")

    def test_str_and_equality(self):
        glyph = Glyph.from_rows(["#.", ".#"])
        self.assertEqual(str(glyph), "10\n01")
        self.assertEqual(glyph, Glyph(Size(2, 2), [1, 0, 0, 1]))
        self.assertEqual(hash(glyph), hash(Glyph(Size(2, 2), [1, 0, 0, 1])))


class TestFace(unittest.TestCase):

    def setUp(self):
        self.space = Glyph.blank(Size(8, 9))
        self.face = Face([self.space, NINE], exported_glyph_ids={1})

    def test_accessors(self):
        self.assertEqual(self.face.glyph_size, Size(8, 9))
        self.assertEqual(self.face.num_glyphs, 2)
        self.assertEqual(len(self.face), 2)
        self.assertIs(self.face.glyph_at(1), NINE)
        self.assertEqual(self.face.exported_glyph_ids, frozenset({1}))

    def test_glyph_index_out_of_range(self):
        with self.assertRaises(IndexError):
            self.face.glyph_at(2)
        with self.assertRaises(IndexError):
            self.face.glyph_at(-1)

    def test_ascii_lookup(self):
        self.assertIs(self.face[" "], self.space)
        self.assertIs(self.face["!"], NINE)
        with self.assertRaises(IndexError):
            self.face["\n"]

    def test_exported_ids_must_be_in_range(self):
        with self.assertRaises(FontDataError):
            Face([NINE], exported_glyph_ids={1})

    def test_glyphs_must_share_size(self):
        with self.assertRaises(FontDataError):
            Face([NINE, Glyph.blank(Size(8, 8))])

    def test_empty_face_needs_size(self):
        with self.assertRaises(FontDataError):
            Face([])
        self.assertEqual(Face([], glyph_size=Size(8, 8)).num_glyphs, 0)

    def test_with_exported_glyphs(self):
        face = self.face.with_exported_glyphs([0, 1])
        self.assertEqual(face.exported_glyph_ids, frozenset({0, 1}))
        self.assertEqual(self.face.exported_glyph_ids, frozenset({1}))
        self.assertEqual(face.glyphs, self.face.glyphs)

    def test_explicit_codes(self):
        face = Face([self.space, NINE], exported_glyph_ids={1}, codes=[0x20, 0x41])
        self.assertEqual(face.first_code, 0x20)
        self.assertEqual(face.codes, (0x20, 0x41))
        self.assertEqual(face.code_for(1), 0x41)
        self.assertEqual(face.glyph_id_for(0x41), 1)
        self.assertIs(face["A"], NINE)
        with self.assertRaises(IndexError):
            face["!"]
        with self.assertRaises(IndexError):
            face.code_for(2)
        self.assertEqual(face.with_exported_glyphs([0]).codes, (0x20, 0x41))

    def test_default_codes_follow_first_code(self):
        face = Face([self.space, NINE], first_code=0x30)
        self.assertEqual(face.codes, (0x30, 0x31))
        self.assertIs(face["1"], NINE)

    def test_codes_must_match_glyphs(self):
        with self.assertRaises(FontDataError):
            Face([self.space, NINE], codes=[0x20])
        with self.assertRaises(FontDataError):
            Face([self.space, NINE], codes=[0x41, 0x41])

    def test_from_reader(self):

        class Checkerboard:
            def font_size(self):
                return Size(2, 2)

            def num_glyphs(self):
                return 3

            def is_pixel_set(self, glyph_id, point):
                return (point.x + point.y + glyph_id) % 2 == 0

        face = Face.from_reader(Checkerboard())
        self.assertEqual(face.num_glyphs, 3)
        self.assertEqual(str(face.glyph_at(0)), "10\n01")
        self.assertEqual(str(face.glyph_at(1)), "01\n10")


if __name__ == '__main__':
    unittest.main()
