from typing import Optional

class TextBitmapError(Exception):
    """Base class of everything raised by textbitmap."""

class EncodingError(TextBitmapError, ValueError):
    def __init__(self, message:str, offset:Optional[int]=None):
        super().__init__(message if offset is None else f"{message} (at unit {offset})")
        self.offset = offset

class InvalidCharacterError(TextBitmapError, ValueError):
    def __init__(self, codepoint:int, line:Optional[int]=None, column:Optional[int]=None):
        where = f" in line {line}, column {column}" if line is not None else ""
        super().__init__(f"U+{codepoint:04X}{where} is not available in the font (all fonts contain the printable ASCII characters)")
        self.codepoint, self.line, self.column = codepoint, line, column

class UnknownFontError(TextBitmapError, LookupError, UserWarning):
    """Raised by FontRegistry.resolve and issued as a warning when FontRegistry.table falls back to the default font."""
    def __init__(self, font_id:str, default:Optional[str]=None):
        msg = f"Font name {font_id!r} doesn't match any known font"
        super().__init__(msg + (f", reverting to default {default!r}" if default else ""))
        self.font_id = font_id

class MalformedContainerError(TextBitmapError, ValueError): pass

class UnavailableResourceError(TextBitmapError, OSError):
    def __init__(self, font_id:str, reason:str):
        super().__init__(f"Could not acquire glyph container for {font_id!r}: {reason}")
        self.font_id, self.reason = font_id, reason
