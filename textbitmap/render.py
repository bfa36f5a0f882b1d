from pathlib import Path
from typing import Optional, Union
import numpy as np
from textbitmap import image
from textbitmap.font.registry import FontRegistry, default_registry
from textbitmap.font.table import FontTable
from textbitmap.lines import normalize
from textbitmap.unicode import Text, codepoints

def rasterize(block:np.ndarray, table:FontTable) -> np.ndarray:
    """Tile the glyph of every code point in a (rows, columns) block into one (rows*height, columns*width) bitmap."""
    block = np.asarray(block)
    assert block.ndim == 2, f"Expected a 2D block of code points, got shape {block.shape}"
    (r, c), (h, w) = block.shape, (table.height, table.width)
    if block.size == 0: return np.zeros((r * h, c * w), dtype=bool)
    tiles = np.stack([table.glyph(cp) for cp in block.ravel()]) # (r*c, h, w)
    return tiles.reshape(r, c, h, w).transpose(0, 2, 1, 3).reshape(r * h, c * w)

def text2im(text:Text, font:Optional[str]=None, encoding:str="utf-8", registry:Optional[FontRegistry]=None) -> np.ndarray:
    """
    Render text as a bool bitmap, set pixels are the glyph (white text on black background).

    text: str, UTF-8 bytes, a sequence of code units in the given encoding ("utf-8" or "utf-16"),
          or a list of those which is rendered as consecutive lines. CR, LF and CRLF start a new line.
    font: font id, see textbitmap.font.font.FONTS, defaults to the registry's default font ("cmu_typewriter_text").
          Unknown ids fall back to the default font with an UnknownFontError warning.
    """
    table = (registry if registry is not None else default_registry()).table(font)
    return rasterize(normalize(codepoints(text, encoding), table), table)

def save(bitmap:np.ndarray, path:Union[str, Path]): image.write(bitmap, path)
