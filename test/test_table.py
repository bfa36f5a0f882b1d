import unittest
import numpy as np
from textbitmap.font.table import FontTable, Category, BLANK, NEWLINE, ZERO_WIDTH
from textbitmap.errors import InvalidCharacterError
from fixtures import make_font

class TestFontTable(unittest.TestCase):
    def setUp(self): self.table = FontTable(make_font())

    def test_sets_disjoint(self):
        sets = [self.table.printable, BLANK, NEWLINE, ZERO_WIDTH]
        for i, a in enumerate(sets):
            for b in sets[i+1:]: self.assertFalse(a & b)
        self.assertEqual(self.table.valid, self.table.printable | BLANK | NEWLINE | ZERO_WIDTH)
        self.assertEqual(self.table.has_glyph, self.table.printable | BLANK)

    def test_categories(self):
        self.assertEqual(self.table.category(65), Category.PRINTABLE)
        self.assertEqual(self.table.category(32), Category.BLANK)
        self.assertEqual(self.table.category(8232), Category.NEWLINE)
        self.assertEqual(self.table.category(173), Category.ZERO_WIDTH)
        self.assertIsNone(self.table.category(0x4E2D))
        self.assertIn(10, self.table)
        self.assertNotIn(0x4E2D, self.table)

    def test_blank_glyph(self):
        for cp in [9, 32, 160, 8192, 8202]:
            g = self.table.glyph(cp)
            self.assertEqual(g.shape, (12, 5))
            self.assertFalse(g.any())

    def test_font_glyph_for_blank_is_overridden(self):
        table = FontTable(make_font([32, 65]))
        self.assertEqual(table.printable, {65})
        self.assertFalse(table.glyph(32).any())

    def test_lookup(self):
        font = make_font()
        np.testing.assert_array_equal(self.table.glyph(np.uint32(66)), font.glyphs[66 - 33].bitmap)

    def test_missing_glyph(self):
        with self.assertRaises(InvalidCharacterError): self.table.glyph(10)

if __name__ == "__main__": unittest.main()
