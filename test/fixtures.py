from typing import Iterable
import numpy as np
from textbitmap.font.font import Font, Glyph

ASCII = range(33, 127)

def make_font(codepoints:Iterable[int]=ASCII, height:int=12, width:int=5, name:str="ASCII", url:str="") -> Font:
    """Font with a pseudo-random but reproducible bitmap per code point."""
    glyphs = [Glyph(cp, np.random.default_rng(cp).random((height, width)) > 0.5) for cp in sorted(set(codepoints))]
    return Font(name, url, height, width, glyphs)

