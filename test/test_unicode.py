import unittest, random
from textbitmap.unicode import utf8_decode, utf16_decode, codepoints, DecodeResult
from textbitmap.errors import EncodingError

def sample(lo, hi, n=2000, seed=0):
    rng = random.Random(seed)
    return [lo, hi] + [rng.randint(lo, hi) for _ in range(n)]

class TestUTF8(unittest.TestCase):
    def test_ascii_passthrough(self):
        self.assertEqual(utf8_decode([72, 105]), [72, 105])
        self.assertEqual(utf8_decode(b""), [])

    def test_multibyte(self):
        text = "héllo €uro 😀 ∑"
        self.assertEqual(utf8_decode(text.encode("utf-8")), [ord(c) for c in text])

    def test_property_all_planes(self):
        for cp in sample(0, 0x10FFFF):
            if 0xD800 <= cp <= 0xDFFF: continue
            self.assertEqual(utf8_decode(chr(cp).encode("utf-8")), [cp], hex(cp))

    def test_boundaries(self):
        for cp in [0x7F, 0x80, 0x7FF, 0x800, 0xFFFF, 0x10000, 0x10FFFF]:
            self.assertEqual(utf8_decode(chr(cp).encode("utf-8")), [cp])

    def test_mixed_lengths_not_rematched(self):
        # a decoded 3 byte sequence can have a value in the 2 byte lead range, it must stay one code point
        data = bytes([0xE0, 0x83, 0x80]) + "é".encode("utf-8")
        self.assertEqual(utf8_decode(data), [0xC0, 0xE9])

    def test_truncated(self):
        with self.assertRaises(EncodingError) as cm: utf8_decode(b"ab\xe2\x82")
        self.assertEqual(cm.exception.offset, 2)

    def test_bad_continuation(self):
        with self.assertRaises(EncodingError) as cm: utf8_decode(b"a\xc3\x28")
        self.assertEqual(cm.exception.offset, 1)

    def test_invalid_lead(self):
        with self.assertRaises(EncodingError): utf8_decode(b"\xf8\x88\x80\x80\x80")

    def test_unit_out_of_range(self):
        with self.assertRaises(EncodingError): utf8_decode([65, 256])

    def test_lone_continuation_passes(self):
        self.assertEqual(utf8_decode(b"a\x80"), [97, 0x80])

    def test_best_effort(self):
        res = utf8_decode(b"\xc3\xa9\xc3\x28", strict=False)
        self.assertIsInstance(res, DecodeResult)
        self.assertFalse(res.ok)
        self.assertEqual(res.raw, [0xC3, 0xA9, 0xC3, 0x28])
        self.assertEqual(res.decoded, [0xE9, 0xC3, 0x28])
        self.assertEqual(res.codepoints, res.raw)
        self.assertIsInstance(res.error, EncodingError)

    def test_best_effort_success(self):
        res = utf8_decode("ü".encode("utf-8"), strict=False)
        self.assertTrue(res.ok)
        self.assertEqual(res.codepoints, [0xFC])

class TestUTF16(unittest.TestCase):
    def units(self, text): return [int.from_bytes(b, "little") for b in zip(*[iter(text.encode("utf-16-le", "surrogatepass"))]*2)]

    def test_bmp_passthrough(self):
        self.assertEqual(utf16_decode([72, 105, 0xE000, 0xFFFF]), [72, 105, 0xE000, 0xFFFF])

    def test_property_supplementary(self):
        for cp in sample(0x10000, 0x10FFFF):
            hi, lo = 0xD800 + ((cp - 0x10000) >> 10), 0xDC00 + ((cp - 0x10000) & 0x3FF)
            self.assertEqual(utf16_decode([hi, lo]), [cp])

    def test_matches_python(self):
        text = "a😀b𝄞"
        self.assertEqual(utf16_decode(self.units(text)), [ord(c) for c in text])

    def test_unpaired_high(self):
        with self.assertRaises(EncodingError): utf16_decode([0xD800])
        with self.assertRaises(EncodingError) as cm: utf16_decode([65, 0xD800, 66])
        self.assertEqual(cm.exception.offset, 1)

    def test_unpaired_low(self):
        with self.assertRaises(EncodingError): utf16_decode([0xDC00, 0xD800])

    def test_unit_out_of_range(self):
        with self.assertRaises(EncodingError): utf16_decode([0x10000])

class TestCodepoints(unittest.TestCase):
    def test_str(self): self.assertEqual(codepoints("Hi😀"), [[72, 105, 0x1F600]])
    def test_str_lone_surrogate(self):
        with self.assertRaises(EncodingError): codepoints("a\ud800")
    def test_bytes(self): self.assertEqual(codepoints("é".encode("utf-8")), [[0xE9]])
    def test_units(self):
        self.assertEqual(codepoints([0xC3, 0xA9]), [[0xE9]])
        self.assertEqual(codepoints([0xD83D, 0xDE00], encoding="utf-16"), [[0x1F600]])
        self.assertEqual(codepoints([0xC3, 0xA9], encoding="UTF16"), [[0xC3, 0xA9]])
    def test_rows(self): self.assertEqual(codepoints(["ab", b"c", [100]]), [[97, 98], [99], [100]])
    def test_unknown_encoding(self):
        with self.assertRaises(ValueError): codepoints([65], encoding="latin-1")

if __name__ == "__main__": unittest.main()
