import atexit, io, logging, os, pickle, re, threading, urllib.request, warnings
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, Optional, Protocol, Union
import numpy as np
from textbitmap import image
from textbitmap.errors import UnknownFontError, UnavailableResourceError
from textbitmap.font import container
from textbitmap.font.font import Font, FontSpec, FONTS, DEFAULT_FONT
from textbitmap.font.table import FontTable
from textbitmap.helpers import CACHE_FONTS, DOWNLOAD_TRIES, DOWNLOAD_TIMEOUT, font_dir, cache_dir

"""
Getting from a font name to a FontTable:
- FontCache: process-wide, loads every font at most once even with concurrent callers
- providers: callables returning the glyph container raster of a FontSpec or raising UnavailableResourceError
- stores: byte blobs by key, used to persist decoded fonts between processes
- FontRegistry: ties the above together and falls back to the default font for unknown names
"""

log = logging.getLogger(__name__)

Provider = Callable[[FontSpec], np.ndarray]
NAMESPACE = "textbitmap/text2im"

class Store(Protocol):
    def get(self, key:str) -> Optional[bytes]: ...
    def set(self, key:str, blob:bytes) -> None: ...

class FontCache:
    """Font id -> FontTable. Populated on first use, read-only afterwards, cleared when the process exits."""
    def __init__(self):
        self._tables:Dict[str, FontTable] = {}
        self._locks:Dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def get(self, font_id:str, load:Callable[[], FontTable]) -> FontTable:
        if (table:=self._tables.get(font_id)) is not None: return table
        with self._lock: lock = self._locks.setdefault(font_id, threading.Lock())
        with lock: # callers for other fonts don't wait here
            if (table:=self._tables.get(font_id)) is None:
                table = self._tables[font_id] = load()
        return table

    def clear(self, font_ids:Optional[Iterable[str]]=None):
        with self._lock:
            for k in list(self._tables) if font_ids is None else font_ids: self._tables.pop(k, None)

    def __contains__(self, font_id:str): return font_id in self._tables
    def __len__(self): return len(self._tables)

CACHE = FontCache()
atexit.register(CACHE.clear)

class DirectoryProvider:
    """Reads text2im_glyphs_<Font_Name>.png from a directory."""
    def __init__(self, directory:Union[str, Path]): self.directory = Path(directory)
    def __call__(self, spec:FontSpec) -> np.ndarray:
        path = self.directory / spec.filename
        try: return image.read(path)
        except OSError as e: raise UnavailableResourceError(spec.id, f"can't read {path}: {e}") from e
    def __repr__(self): return f"DirectoryProvider({str(self.directory)!r})"

class URLProvider:
    """
    Downloads the container, trying the archived URL `tries` times before falling back to the original host once.
    """
    ARCHIVE_PREFIX = re.compile(r"^https?://web\.archive\.org/web/\d+(im_)?/")

    def __init__(self, tries:Optional[int]=None, timeout:Optional[float]=None):
        self.tries = int(DOWNLOAD_TRIES) if tries is None else tries
        self.timeout = int(DOWNLOAD_TIMEOUT) if timeout is None else timeout

    def urls(self, spec:FontSpec) -> Iterator[str]:
        yield from [spec.url] * self.tries
        if (direct:=self.ARCHIVE_PREFIX.sub("", spec.url)) != spec.url: yield direct

    def fetch(self, url:str) -> bytes:
        with urllib.request.urlopen(url, timeout=self.timeout) as response: return response.read()

    def __call__(self, spec:FontSpec) -> np.ndarray:
        errors = []
        for i, url in enumerate(self.urls(spec)):
            try: return image.read(io.BytesIO(self.fetch(url)))
            except (OSError, ValueError) as e: # URLError, timeouts, unreadable images and malformed URLs
                log.debug("attempt %d to download %s failed: %s", i + 1, url, e)
                errors.append(f"{url}: {e}")
        raise UnavailableResourceError(spec.id, "; ".join(errors) or "no URL to try")

class ChainProvider:
    def __init__(self, *providers:Provider): self.providers = providers
    def __call__(self, spec:FontSpec) -> np.ndarray:
        errors = []
        for p in self.providers:
            try: return p(spec)
            except UnavailableResourceError as e: errors.append(e.reason)
        raise UnavailableResourceError(spec.id, " | ".join(errors) or "no providers")

class DirectoryStore:
    """One file per key below a directory, key parts separated by '/'."""
    def __init__(self, directory:Union[str, Path]): self.directory = Path(directory)
    def _path(self, key:str) -> Path: return self.directory.joinpath(*key.split("/"))
    def get(self, key:str) -> Optional[bytes]:
        try: return self._path(key).read_bytes()
        except FileNotFoundError: return None
    def set(self, key:str, blob:bytes):
        (path:=self._path(key)).parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(f"{path.name}.{os.getpid()}.{threading.get_ident()}.tmp")
        tmp.write_bytes(blob)
        os.replace(tmp, path)

class FontRegistry:
    def __init__(self, fonts:Iterable[FontSpec]=FONTS, provider:Optional[Provider]=None, store:Optional[Store]=None,
                 cache:Optional[FontCache]=None, default:str=DEFAULT_FONT):
        self.fonts:Dict[str, FontSpec] = {f.id: f for f in fonts}
        if default not in self.fonts: raise UnknownFontError(default)
        self.provider = provider if provider is not None else default_provider()
        self.store, self.default = store, default
        self.cache = cache if cache is not None else FontCache()
        self._stale = set() # ids whose stored copy must not be used

    def resolve(self, font_id:str) -> FontSpec:
        try: return self.fonts[font_id]
        except KeyError: raise UnknownFontError(font_id) from None

    def table(self, font_id:Optional[str]=None) -> FontTable:
        """FontTable for font_id, falling back to the default font with an UnknownFontError warning for unknown ids."""
        try: spec = self.resolve(self.default if font_id is None else font_id)
        except UnknownFontError:
            log.warning("unknown font %r, using %r", font_id, self.default)
            warnings.warn(UnknownFontError(font_id, self.default), stacklevel=2)
            spec = self.fonts[self.default]
        return self.cache.get(spec.id, lambda: FontTable(self.load(spec)))

    def load(self, spec:FontSpec) -> Font:
        key = f"{NAMESPACE}/{spec.id}"
        if self.store is not None and CACHE_FONTS and spec.id not in self._stale and (blob:=self.store.get(key)) is not None:
            try: font = pickle.loads(blob)
            except (pickle.UnpicklingError, EOFError, AttributeError, ImportError, TypeError, ValueError) as e:
                log.warning("ignoring unreadable stored font %s: %s", key, e)
            else:
                if isinstance(font, Font) and font.id == spec.id:
                    log.debug("loaded %s from store", spec.id)
                    return font
                log.warning("ignoring stored font %s, it holds %r", key, font)
        log.debug("acquiring glyph container for %s", spec.id)
        font = container.decode(self.provider(spec), spec.name, spec.url)
        if self.store is not None and CACHE_FONTS: self.store.set(key, pickle.dumps(font))
        self._stale.discard(spec.id)
        return font

    def purge(self):
        """Drop loaded fonts, the next use of each font acquires its container again."""
        self.cache.clear(self.fonts)
        self._stale.update(self.fonts)

def default_provider() -> Provider:
    return ChainProvider(*([DirectoryProvider(d)] if (d:=font_dir()) else []), URLProvider())

_default:Optional[FontRegistry] = None
_default_lock = threading.Lock()

def default_registry() -> FontRegistry:
    """The process-wide registry, built from the environment on first use."""
    global _default
    with _default_lock:
        if _default is None: _default = FontRegistry(provider=default_provider(), store=DirectoryStore(cache_dir()), cache=CACHE)
    return _default
