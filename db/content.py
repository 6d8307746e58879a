import threading
from pathlib import Path
from typing import Optional

from config import load_config
from models.catalog import Catalog
from utils.catalog import load_catalog

_cache: Optional["ContentCache"] = None


class ContentCache:
    """Holds the currently loaded catalog; refresh() re-reads the content directory."""

    def __init__(self, content_dir: Path):
        self.content_dir = Path(content_dir)
        self._lock = threading.Lock()
        self._catalog = Catalog()

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def refresh(self) -> Catalog:
        catalog = load_catalog(self.content_dir)
        with self._lock:
            self._catalog = catalog
        return catalog


def init_content(config: Optional[dict] = None) -> ContentCache:
    global _cache
    config = config or load_config()
    content_dir = Path(config["paths"]["content_dir"])
    content_dir.mkdir(parents=True, exist_ok=True)
    cache = ContentCache(content_dir)
    cache.refresh()
    _cache = cache
    return cache


def get_content() -> ContentCache:
    """FastAPI dependency returning the content cache, loading it on first use."""
    if _cache is None:
        return init_content()
    return _cache
