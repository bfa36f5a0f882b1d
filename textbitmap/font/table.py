from enum import Enum, auto
from typing import Dict, FrozenSet, Optional
import numpy as np
from textbitmap.errors import InvalidCharacterError
from textbitmap.font.font import Font

# fixed for every font, see https://en.wikipedia.org/wiki/Whitespace_character#Unicode and https://en.wikipedia.org/wiki/Newline#Unicode
BLANK:FrozenSet[int] = frozenset([9, 32, 160, 5760, *range(8192, 8203), 8239, 8287])
NEWLINE:FrozenSet[int] = frozenset([10, 11, 12, 13, 133, 8232, 8233])
ZERO_WIDTH:FrozenSet[int] = frozenset([173, 8203, 8204, 8205, 8288]) # soft hyphen and joiners

class Category(Enum):
    PRINTABLE = auto()
    BLANK = auto()
    NEWLINE = auto()
    ZERO_WIDTH = auto()

class FontTable:
    """Glyph lookup for one font. Blank characters share a single all-false bitmap of the font's glyph size."""
    def __init__(self, font:Font):
        self.font = font
        self.height, self.width = font.height, font.width
        blank = np.zeros((font.height, font.width), dtype=bool)
        blank.flags.writeable = False
        self.glyphs:Dict[int, np.ndarray] = {g.codepoint: g.bitmap for g in font.glyphs if g.codepoint not in BLANK | NEWLINE | ZERO_WIDTH}
        self.printable = frozenset(self.glyphs)
        self.glyphs.update({cp: blank for cp in BLANK})
        self.has_glyph = self.printable | BLANK
        self.valid = self.has_glyph | NEWLINE | ZERO_WIDTH

    def glyph(self, cp:int) -> np.ndarray:
        try: return self.glyphs[cp]
        except KeyError: raise InvalidCharacterError(int(cp)) from None

    def category(self, cp:int) -> Optional[Category]:
        if cp in self.printable: return Category.PRINTABLE
        if cp in BLANK: return Category.BLANK
        if cp in NEWLINE: return Category.NEWLINE
        if cp in ZERO_WIDTH: return Category.ZERO_WIDTH
        return None

    def __contains__(self, cp:int) -> bool: return cp in self.valid
    def __repr__(self): return f"FontTable({self.font.id!r}, {len(self.printable)} printable, {self.height}x{self.width})"
