import math
from typing import Sequence, Tuple
import numpy as np
from textbitmap.errors import MalformedContainerError
from textbitmap.font.font import Font, Glyph

"""
Glyph container: a font stored in a 1 bit per pixel raster, so the font file is an ordinary image.

Row 0 holds three 20 bit unsigned integers, most significant bit first: glyph height, glyph width and glyph count.
Below it the glyphs are tiled 32 per row of cells. A cell is `height` pixels high and `width + 1` pixels wide:
column 0 holds the code point in its last min(height, 18) pixels, columns 1.. hold the glyph bitmap.
Cells after the last glyph are padding.
"""

HEADER_BITS = 20
CODEPOINT_BITS = 18
CELLS_PER_ROW = 32

def unpack_bits(bits:Sequence[bool]) -> int:
    value = 0
    for b in bits: value = (value << 1) | bool(b)
    return value

def pack_bits(value:int, n:int) -> np.ndarray:
    if not 0 <= value < (1 << n): raise ValueError(f"{value} doesn't fit in {n} bits")
    return np.array([(value >> (n - 1 - i)) & 1 for i in range(n)], dtype=bool)

def geometry(height:int, width:int, count:int) -> Tuple[int, int]:
    """Minimum (rows, columns) of a container holding count glyphs of height x width."""
    return 1 + math.ceil(count / CELLS_PER_ROW) * height, max(3 * HEADER_BITS, CELLS_PER_ROW * (width + 1))

def encode(font:Font) -> np.ndarray:
    h, w, n = font.height, font.width, len(font.glyphs)
    raster = np.zeros(geometry(h, w, n), dtype=bool)
    raster[0, :3*HEADER_BITS] = np.concatenate([pack_bits(v, HEADER_BITS) for v in (h, w, n)])
    cp_bits = min(h, CODEPOINT_BITS)
    for k, g in enumerate(font.glyphs):
        y, x = 1 + (k // CELLS_PER_ROW) * h, (k % CELLS_PER_ROW) * (w + 1)
        raster[y+h-cp_bits:y+h, x] = pack_bits(g.codepoint, cp_bits)
        raster[y:y+h, x+1:x+1+w] = g.bitmap
    return raster

def decode(raster:np.ndarray, name:str="", url:str="") -> Font:
    raster = np.asarray(raster, dtype=bool)
    if raster.ndim != 2: raise MalformedContainerError(f"Glyph container must be a 2D bit matrix, got shape {raster.shape}")
    if raster.shape[1] < 3 * HEADER_BITS: raise MalformedContainerError(f"Glyph container is {raster.shape[1]} pixels wide, the header alone needs {3 * HEADER_BITS}")
    h, w, n = (unpack_bits(raster[0, i*HEADER_BITS:(i+1)*HEADER_BITS]) for i in range(3))
    if n and not (h and w): raise MalformedContainerError(f"Header declares {n} glyphs of size {h}x{w}")
    rows, cols = geometry(h, w, n)
    if raster.shape[0] < rows or raster.shape[1] < cols:
        raise MalformedContainerError(f"Header declares {n} glyphs of size {h}x{w} which need {rows}x{cols} pixels, "
                                      f"container {name!r} has {raster.shape[0]}x{raster.shape[1]}")
    cp_bits = min(h, CODEPOINT_BITS)
    glyphs = {}
    for k in range(n):
        y, x = 1 + (k // CELLS_PER_ROW) * h, (k % CELLS_PER_ROW) * (w + 1)
        cp = unpack_bits(raster[y+h-cp_bits:y+h, x])
        if cp in glyphs: raise MalformedContainerError(f"Code point U+{cp:04X} appears more than once in container {name!r}")
        glyphs[cp] = Glyph(cp, raster[y:y+h, x+1:x+1+w])
    return Font(name, url, h, w, [glyphs[cp] for cp in sorted(glyphs)])
