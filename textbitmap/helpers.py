import contextlib, os
from pathlib import Path
from typing import ClassVar, Optional

# context variable management from: https://github.com/tinygrad/tinygrad/blob/master/tinygrad/helpers.py
def getenv(key:str, default=0): return type(default)(os.getenv(key, default))

class Context(contextlib.ContextDecorator):
  def __init__(self, **kwargs): self.kwargs = kwargs
  def __enter__(self):
    self.old_context:dict[str, int] = {k:v.value for k,v in ContextVar._cache.items()}
    for k,v in self.kwargs.items(): ContextVar._cache[k].value = v
  def __exit__(self, *args):
    for k,v in self.old_context.items(): ContextVar._cache[k].value = v

class ContextVar:
  _cache: ClassVar[dict[str, "ContextVar"]] = {}
  value: int
  key: str
  def __init__(self, key, default_value):
    if key in ContextVar._cache: raise RuntimeError(f"attempt to recreate ContextVar {key}")
    ContextVar._cache[key] = self
    self.value, self.key = getenv(key, default_value), key
  def __bool__(self): return bool(self.value)
  def __int__(self): return int(self.value)
  def __ge__(self, x): return self.value >= x
  def __gt__(self, x): return self.value > x
  def __lt__(self, x): return self.value < x

CACHE_FONTS = ContextVar("CACHE_FONTS", 1)
DOWNLOAD_TRIES, DOWNLOAD_TIMEOUT = ContextVar("DOWNLOAD_TRIES", 3), ContextVar("DOWNLOAD_TIMEOUT", 10)

def font_dir() -> Optional[Path]:
  """Directory holding text2im_glyphs_*.png files, if configured."""
  return Path(d) if (d:=getenv("TEXTBITMAP_FONT_DIR", "")) else None

def cache_dir() -> Path: return Path(getenv("TEXTBITMAP_CACHE_DIR", str(Path.home() / ".cache" / "textbitmap")))
