"""
Build caches for incremental generation

BuildCache tracks content file hashes per category so unchanged categories
are skipped. HashCache maps artifact keys to input hashes for generators
that produce one output per key.
"""

import hashlib
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .config import CACHE_DIR, CACHE_VERSION
from .utils import write_text_if_changed

logger = logging.getLogger(__name__)

CACHE_FILENAME = "build-cache.json"


def file_hash(path: Path) -> str:
    """SHA-256 of a file's bytes"""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            digest.update(chunk)
    return digest.hexdigest()


def aggregate_hash(file_entries: dict) -> str:
    """Stable hash over sorted ``key:hash`` pairs"""
    lines = [f"{key}:{entry['hash']}" for key, entry in sorted(file_entries.items())]
    return hashlib.sha256("\n".join(lines).encode("utf-8")).hexdigest()


class BuildCache:
    """
    Content build cache stored as ``build-cache.json``::

        {
          "version": "1.0.0",
          "files": {"agents/code-reviewer.json": {"hash": "...", "mtime": 1700000000.0}},
          "categories": {"agents": "..."},
          "lastBuild": "2025-10-18T12:00:00+00:00"
        }

    File keys are ``<category>/<relative path>``, so a category owns every key
    under its prefix.
    """

    def __init__(self, cache_dir: Path = CACHE_DIR):
        self.path = Path(cache_dir) / CACHE_FILENAME
        self.data: Optional[dict] = None
        self._dirty = False

    def load(self) -> Optional[dict]:
        """Load the cache; missing, unreadable or stale-version caches load as None"""
        self.data = None
        if not self.path.exists():
            logger.debug(f"No build cache at {self.path}")
            return None
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.debug(f"Ignoring unreadable build cache: {e}")
            return None

        if not isinstance(data, dict) or data.get("version") != CACHE_VERSION:
            logger.debug("Ignoring build cache with unknown version")
            return None

        data.setdefault("files", {})
        data.setdefault("categories", {})
        self.data = data
        return data

    @staticmethod
    def _owned_by(key: str, category: str) -> bool:
        return key.startswith(f"{category}/")

    def needs_rebuild(self, category: str, files: dict) -> bool:
        """
        Check whether a category must be rebuilt.

        Args:
            category: Category id
            files: Mapping of cache key -> current file path

        A file counts as changed only when its mtime differs and its content
        hash differs too, so a touched-but-identical file does not trigger a
        rebuild.
        """
        if self.data is None:
            return True

        cached_files = self.data["files"]
        for key, path in files.items():
            cached = cached_files.get(key)
            if cached is None:
                logger.debug(f"{key}: not in cache")
                return True
            try:
                mtime = Path(path).stat().st_mtime
            except OSError:
                return True
            if mtime != cached.get("mtime"):
                if file_hash(path) != cached.get("hash"):
                    logger.debug(f"{key}: content changed")
                    return True

        # Deleted files
        for key in cached_files:
            if self._owned_by(key, category) and key not in files:
                logger.debug(f"{key}: deleted")
                return True

        return False

    def collect(self, category_files: dict) -> dict:
        """
        Record hashes and mtimes for the given categories.

        Args:
            category_files: Mapping of category -> {cache key: path}

        Returns:
            Mapping of category -> aggregate hash for the collected categories
        """
        if self.data is None:
            self.data = {"version": CACHE_VERSION, "files": {}, "categories": {}, "lastBuild": None}

        cached_files = self.data["files"]
        aggregates = {}
        for category, files in category_files.items():
            entries = {}
            for key, path in files.items():
                path = Path(path)
                try:
                    entries[key] = {"hash": file_hash(path), "mtime": path.stat().st_mtime}
                except OSError as e:
                    logger.warning(f"Could not hash {path}: {e}")

            stale = [k for k in cached_files if self._owned_by(k, category) and k not in entries]
            for key in stale:
                del cached_files[key]
                self._dirty = True

            for key, entry in entries.items():
                if cached_files.get(key) != entry:
                    cached_files[key] = entry
                    self._dirty = True

            aggregates[category] = aggregate_hash(entries)
            if self.data["categories"].get(category) != aggregates[category]:
                self.data["categories"][category] = aggregates[category]
                self._dirty = True

        return aggregates

    def category_hashes(self) -> dict:
        if self.data is None:
            return {}
        return dict(self.data["categories"])

    def save(self) -> bool:
        """Write the cache when any entry changed. Returns True when written."""
        if self.data is None or not self._dirty:
            return False
        self.data["lastBuild"] = datetime.now(timezone.utc).isoformat()
        written = write_text_if_changed(
            self.path, json.dumps(self.data, indent=2, ensure_ascii=False) + "\n"
        )
        self._dirty = False
        return written


class HashCache:
    """Keyed artifact cache ``{key: hash}`` stored as JSON"""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.hashes = self._load()

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"JSON parse error in {self.path}: {e}")
            return {}
        except OSError as e:
            logger.warning(f"Error reading {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    @staticmethod
    def compute_hash(value) -> str:
        if not isinstance(value, str):
            value = json.dumps(value, sort_keys=True, ensure_ascii=False)
        return hashlib.sha256(value.encode("utf-8")).hexdigest()

    def has_changed(self, key: str, value_hash: str) -> bool:
        return self.hashes.get(key) != value_hash

    def set(self, key: str, value_hash: str):
        self.hashes[key] = value_hash

    def save(self) -> bool:
        text = json.dumps(self.hashes, indent=2, sort_keys=True) + "\n"
        return write_text_if_changed(self.path, text)
