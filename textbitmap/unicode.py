from dataclasses import dataclass
from typing import List, Optional, Sequence, Union
import numpy as np
from textbitmap.errors import EncodingError

"""
Strict UTF-8 / UTF-16 decoding of raw code units into code points.

UTF-8 multi-byte sequences are matched longest first (4, 3 then 2 bytes). A unit that was consumed by a
longer match is never matched again, so the numeric overlap between lead byte ranges can't cause a
sequence to be decoded twice.
"""

Text = Union[str, bytes, bytearray, Sequence[int], Sequence[Union[str, bytes, Sequence[int]]]]

@dataclass(frozen=True)
class DecodeResult:
    raw:List[int]
    decoded:List[int]
    ok:bool
    error:Optional[EncodingError] = None

    @property
    def codepoints(self) -> List[int]: return self.decoded if self.ok else self.raw

def utf8_decode(units:Sequence[int], strict:bool=True) -> Union[List[int], DecodeResult]:
    """
    Decode 8-bit units. With strict=True returns the code points or raises EncodingError.
    With strict=False never raises and returns a DecodeResult holding the raw input, the best attempt and a success flag.
    """
    raw = [int(u) for u in units]
    error = None
    def fail(e:EncodingError):
        nonlocal error
        if strict: raise e
        if error is None: error = e

    for i, u in enumerate(raw):
        if not 0 <= u < 256: fail(EncodingError(f"{u} is not an 8-bit unit", i))
    if all(u < 128 for u in raw): return list(raw) if strict else DecodeResult(raw, list(raw), error is None, error)

    out:List[Optional[int]] = list(raw)
    consumed = [False] * len(raw)
    for length in (4, 3, 2):
        lead = (0xFF << (8 - length)) & 0xFF
        for i in range(len(out)):
            if consumed[i] or not lead <= out[i] < 256: continue
            if i + length > len(out):
                fail(EncodingError(f"lead byte 0x{out[i]:02X} needs {length - 1} continuation bytes, found {len(out) - i - 1}", i))
                continue
            if any(consumed[i+1:i+length]) or out[i] >> (7 - length) != lead >> (7 - length) or \
                any(b >> 6 != 0b10 for b in out[i+1:i+length]):
                fail(EncodingError(f"invalid {length}-byte sequence {[hex(b) for b in out[i:i+length]]}", i))
                continue
            cp = out[i] & (0x7F >> length)
            for b in out[i+1:i+length]: cp = (cp << 6) | (b & 0x3F)
            out[i], consumed[i] = cp, True
            for j in range(i + 1, i + length): out[j], consumed[j] = None, True

    decoded = [u for u in out if u is not None]
    return decoded if strict else DecodeResult(raw, decoded, error is None, error)

def utf16_decode(units:Sequence[int]) -> List[int]:
    """Decode 16-bit units, combining surrogate pairs. Unpaired surrogates raise EncodingError."""
    units = [int(u) for u in units]
    out, i = [], 0
    while i < len(units):
        u = units[i]
        if not 0 <= u <= 0xFFFF: raise EncodingError(f"{u} is not a 16-bit unit", i)
        if 0xD800 <= u <= 0xDBFF:
            if i + 1 >= len(units) or not 0xDC00 <= units[i+1] <= 0xDFFF:
                raise EncodingError(f"high surrogate 0x{u:04X} is not followed by a low surrogate", i)
            out.append(0x10000 + ((u - 0xD800) << 10) + (units[i+1] - 0xDC00))
            i += 2
            continue
        if 0xDC00 <= u <= 0xDFFF: raise EncodingError(f"unpaired low surrogate 0x{u:04X}", i)
        out.append(u)
        i += 1
    return out

def _decode_units(units:Sequence[int], encoding:str) -> List[int]:
    match encoding.lower().replace("-", "").replace("_", ""):
        case "utf8": return utf8_decode(units)
        case "utf16": return utf16_decode(units)
        case _: raise ValueError(f"Unsupported encoding {encoding!r}, expected 'utf-8' or 'utf-16'")

def codepoints(text:Text, encoding:str="utf-8") -> List[List[int]]:
    """
    Turn caller input into rows of code points. str is decoded from its UTF-16 form (lone surrogates are rejected),
    bytes as UTF-8 and a sequence of ints with the given encoding. A list or tuple of any of those gives one row per element.
    """
    if isinstance(text, str): return [utf16_decode(np.frombuffer(text.encode("utf-16-le", "surrogatepass"), dtype="<u2").tolist())]
    if isinstance(text, (bytes, bytearray)): return [utf8_decode(text)]
    if isinstance(text, np.ndarray): text = text.tolist()
    if all(isinstance(u, (int, np.integer)) for u in text): return [_decode_units(text, encoding)]
    return [row for t in text for row in codepoints(t, encoding)]
