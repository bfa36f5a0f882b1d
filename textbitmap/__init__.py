from textbitmap.errors import TextBitmapError, EncodingError, InvalidCharacterError, UnknownFontError, MalformedContainerError, UnavailableResourceError
from textbitmap.font.font import Font, FontSpec, Glyph, FONTS, DEFAULT_FONT
from textbitmap.font.registry import FontRegistry, default_registry
from textbitmap.font.table import FontTable
from textbitmap.render import text2im, rasterize, save
