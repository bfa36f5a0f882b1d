from typing import List, Optional, Sequence, TYPE_CHECKING
import numpy as np
from textbitmap.errors import InvalidCharacterError
from textbitmap.font.table import NEWLINE, ZERO_WIDTH

if TYPE_CHECKING: from textbitmap.font.table import FontTable

CR, LF, SPACE = 13, 10, 32
# newlines other than CR/LF don't split lines, they are dropped like zero width characters
IGNORED = ZERO_WIDTH | (NEWLINE - {CR, LF})

def split_lines(cps:Sequence[int]) -> List[List[int]]:
    """Split on CRLF, then lone CR, then lone LF. LFCR counts as two line breaks."""
    lines, line, i = [], [], 0
    while i < len(cps):
        if cps[i] == CR:
            lines.append(line)
            line = []
            i += 2 if i + 1 < len(cps) and cps[i+1] == LF else 1
            continue
        if cps[i] == LF:
            lines.append(line)
            line = []
        else: line.append(int(cps[i]))
        i += 1
    lines.append(line)
    return lines

def normalize(rows:Sequence[Sequence[int]], table:Optional["FontTable"]=None) -> np.ndarray:
    """
    Split every row into lines, drop ignored code points and pad with spaces into a rectangular (lines, columns) uint32 array.
    With a font table, every remaining code point must have a glyph in it.
    """
    lines = [[cp for cp in line if cp not in IGNORED] for row in rows for line in split_lines(row)]
    width = max(len(l) for l in lines) if lines else 0
    block = np.full((len(lines), width), SPACE, dtype=np.uint32)
    for r, line in enumerate(lines):
        if table is not None:
            for c, cp in enumerate(line):
                if cp not in table.has_glyph: raise InvalidCharacterError(cp, r, c)
        block[r, :len(line)] = line
    return block
