from dataclasses import dataclass, field
from typing import List, Tuple
import numpy as np

def font_id(name:str) -> str: return name.lower().replace(" ", "_")

@dataclass(frozen=True, eq=False)
class Glyph:
    codepoint:int
    bitmap:np.ndarray

    def __post_init__(self):
        bitmap = np.array(self.bitmap, dtype=bool)
        assert bitmap.ndim == 2, f"Glyph bitmap for U+{self.codepoint:04X} must be 2D, got shape {bitmap.shape}"
        bitmap.flags.writeable = False
        object.__setattr__(self, "bitmap", bitmap)
        object.__setattr__(self, "codepoint", int(self.codepoint))

    def __eq__(self, other):
        if not isinstance(other, Glyph): return NotImplemented
        return self.codepoint == other.codepoint and np.array_equal(self.bitmap, other.bitmap)

    def __setstate__(self, state):
        self.__dict__.update(state)
        self.bitmap.flags.writeable = False

    def __repr__(self): return f"Glyph(U+{self.codepoint:04X}, {self.bitmap.shape[0]}x{self.bitmap.shape[1]})"

@dataclass(frozen=True)
class Font:
    """A monospaced bitmap font: every glyph is height x width, glyphs sorted by code point."""
    name:str
    url:str
    height:int
    width:int
    glyphs:Tuple[Glyph, ...] = field(repr=False)

    def __post_init__(self):
        object.__setattr__(self, "glyphs", tuple(self.glyphs))
        for g in self.glyphs:
            if g.bitmap.shape != (self.height, self.width):
                raise ValueError(f"{g} doesn't match the font's glyph size {self.height}x{self.width}")
        cps = [g.codepoint for g in self.glyphs]
        if any(a >= b for a, b in zip(cps, cps[1:])): raise ValueError(f"Glyphs of font {self.name!r} must be sorted by unique code point")

    @property
    def id(self) -> str: return font_id(self.name)

    @property
    def codepoints(self) -> List[int]: return [g.codepoint for g in self.glyphs]

@dataclass(frozen=True)
class FontSpec:
    """Where to find a font's glyph container."""
    name:str
    url:str

    @property
    def id(self) -> str: return font_id(self.name)

    @property
    def filename(self) -> str: return f"text2im_glyphs_{self.name.replace(' ', '_')}.png"

ARCHIVE = "http://web.archive.org/web/{stamp}im_/https://hjwisselink.nl/FEXsubmissiondata/75021-text2im/"
FONTS = tuple(FontSpec(name, ARCHIVE.format(stamp=stamp) + FontSpec(name, "").filename) for name, stamp in [
    ("CMU Typewriter Text", "20200418101117"), # public domain, 365 characters, 90x55
    ("CMU Concrete", "20200418093550"), # public domain, 364 characters, 90x75
    ("ASCII", "20200418093459"), # printable characters below 127, 20x18
    ("Droid Sans Mono", "20200418093741"), # Apache License 2.0, 411 characters, 95x51
    ("IBM Plex Mono", "20200418093815"), # SIL Open Font License, 376 characters, 95x51
    ("Liberation Mono", "20200418093840"), # GPL, 415 characters, 95x51
    ("Monoid", "20200418093903"), # MIT License, 398 characters, 95x51
])
DEFAULT_FONT = FONTS[0].id
