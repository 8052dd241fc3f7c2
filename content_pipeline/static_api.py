"""
Static JSON API generation

Pre-generates API responses under public/static-api so they can be served
directly from a CDN.
"""

import json
import logging
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import jsonschema
from jsonschema.exceptions import ValidationError

from .build_cache import HashCache
from .config import (
    CACHE_DIR, CATEGORY_REGISTRY, SITE_DESCRIPTION, SITE_LICENSE, SITE_NAME, SITE_URL,
    SITE_VERSION, STATIC_API_DIR,
)
from .utils import write_text_if_changed

logger = logging.getLogger(__name__)

POPULAR_TAGS_PER_CATEGORY = 20
POPULAR_TAGS_COMBINED = 50

_ITEM_SCHEMA = {
    "type": "object",
    "required": ["slug", "type", "url"],
    "properties": {
        "slug": {"type": "string", "minLength": 1},
        "type": {"type": "string"},
        "url": {"type": "string", "pattern": "^https?://"},
    },
}

_SEARCHABLE_SCHEMA = {
    "type": "object",
    "required": ["title", "description", "tags", "category", "slug", "popularity"],
    "properties": {
        "title": {"type": "string"},
        "name": {"type": "string"},
        "description": {"type": "string"},
        "tags": {"type": "array", "items": {"type": "string"}},
        "category": {"type": "string"},
        "slug": {"type": "string"},
        "popularity": {"type": "number", "minimum": 0},
    },
}

_TAG_COUNT_SCHEMA = {
    "type": "object",
    "required": ["tag", "count"],
    "properties": {"tag": {"type": "string"}, "count": {"type": "integer", "minimum": 1}},
}

RESPONSE_SCHEMAS = {
    "category": {
        "type": "object",
        "required": ["count", "lastUpdated", "generated"],
        "properties": {
            "count": {"type": "integer", "minimum": 0},
            "lastUpdated": {"type": "string"},
            "generated": {"const": "static"},
        },
        "additionalProperties": {"type": "array", "items": _ITEM_SCHEMA},
    },
    "all-configurations": {
        "type": "object",
        "required": ["@context", "@type", "name", "statistics", "data", "endpoints"],
        "properties": {
            "@context": {"const": "https://schema.org"},
            "@type": {"const": "Dataset"},
            "statistics": {
                "type": "object",
                "required": ["totalConfigurations"],
                "additionalProperties": {"type": "integer", "minimum": 0},
            },
            "data": {"type": "object", "additionalProperties": {"type": "array", "items": _ITEM_SCHEMA}},
            "endpoints": {"type": "object", "additionalProperties": {"type": "string"}},
        },
    },
    "search-index": {
        "type": "object",
        "required": ["items", "count", "tags", "popularTags", "generated"],
        "properties": {
            "items": {"type": "array", "items": _SEARCHABLE_SCHEMA},
            "count": {"type": "integer", "minimum": 0},
            "tags": {"type": "array", "items": {"type": "string"}},
            "popularTags": {"type": "array", "items": _TAG_COUNT_SCHEMA},
            "generated": {"const": "static"},
        },
    },
    "health": {
        "type": "object",
        "required": ["status", "version", "counts"],
        "properties": {
            "status": {"enum": ["healthy", "degraded"]},
            "version": {"type": "string"},
            "counts": {
                "type": "object",
                "required": ["total"],
                "additionalProperties": {"type": "integer", "minimum": 0},
            },
        },
    },
}


class StaticAPIError(Exception):
    """Raised when a generated response fails validation"""


def transform_content(items: list, item_type: str, category: str, base_url: str = SITE_URL) -> list:
    """Add ``type`` and ``url`` to every item"""
    return [
        {**item, "type": item_type, "url": f"{base_url}/{category}/{item['slug']}"}
        for item in items
    ]


def to_searchable_items(items: list, category: str) -> list:
    return [
        {
            "title": item.get("title") or item.get("name") or "",
            "name": item.get("name") or "",
            "description": item.get("description", ""),
            "tags": list(item.get("tags") or []),
            "category": item.get("category") or category,
            "popularity": 0,
            "slug": item["slug"],
        }
        for item in items
    ]


def tag_summary(items: list, limit: int) -> tuple:
    """
    Sorted unique tags plus the most used ones.

    Returns:
        (tags, popular_tags) where popular_tags is a list of {tag, count}
        ordered by count descending, then tag name
    """
    counts = Counter()
    for item in items:
        counts.update(set(item.get("tags") or []))
    popular = sorted(counts.items(), key=lambda pair: (-pair[1], pair[0]))[:limit]
    return sorted(counts), [{"tag": tag, "count": count} for tag, count in popular]


def validate_response(kind: str, payload: dict):
    try:
        jsonschema.validate(payload, RESPONSE_SCHEMAS[kind])
    except ValidationError as e:
        path = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise StaticAPIError(f"{kind} response invalid at {path}: {e.message}") from e


class StaticAPIGenerator:
    """Generate static API files from built content"""

    def __init__(
        self,
        content_by_category: dict,
        output_dir: Path = STATIC_API_DIR,
        base_url: str = SITE_URL,
        cache_path: Optional[Path] = None,
    ):
        self.output_dir = Path(output_dir)
        self.base_url = base_url.rstrip("/")
        self.categories = [
            category for category, config in CATEGORY_REGISTRY.items()
            if config["generate_static_api"]
        ]
        self.content = {category: content_by_category.get(category, []) for category in self.categories}
        self.cache = HashCache(cache_path or Path(CACHE_DIR) / "static-api-hashes.json")
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.written = []
        self.skipped = []

    def _emit(self, relative: str, kind: str, payload: dict, force: bool = False):
        """
        Validate and write one response. Timestamps are excluded from the
        change hash so unchanged content is not rewritten.
        """
        content_hash = HashCache.compute_hash(payload)
        path = self.output_dir / relative
        if not force and path.exists() and not self.cache.has_changed(relative, content_hash):
            self.skipped.append(relative)
            return

        stamped = dict(payload)
        if kind == "health":
            stamped["timestamp"] = self.timestamp
        else:
            stamped["lastUpdated"] = self.timestamp
        validate_response(kind, stamped)

        write_text_if_changed(path, json.dumps(stamped, indent=2, ensure_ascii=False) + "\n")
        self.cache.set(relative, content_hash)
        self.written.append(relative)
        logger.info(f"  ✅ Generated {relative}")

    def category_responses(self, force: bool = False):
        logger.info("📦 Generating individual content type APIs...")
        for category in self.categories:
            item_type = CATEGORY_REGISTRY[category]["item_type"]
            items = transform_content(self.content[category], item_type, category, self.base_url)
            self._emit(f"{category}.json", "category", {
                category: items,
                "count": len(items),
                "generated": "static",
            }, force)

    def all_configurations(self, force: bool = False):
        logger.info("📦 Generating all-configurations API...")
        data = {
            category: transform_content(
                self.content[category], CATEGORY_REGISTRY[category]["item_type"], category, self.base_url,
            )
            for category in self.categories
        }
        statistics = {"totalConfigurations": sum(len(items) for items in data.values())}
        statistics.update({category: len(items) for category, items in data.items()})

        self._emit("all-configurations.json", "all-configurations", {
            "@context": "https://schema.org",
            "@type": "Dataset",
            "name": f"{SITE_NAME} - All Configurations",
            "description": SITE_DESCRIPTION,
            "license": SITE_LICENSE,
            "generated": "static",
            "statistics": statistics,
            "data": data,
            "endpoints": {
                category: f"{self.base_url}/api/{category}.json" for category in self.categories
            },
        }, force)

    def search_indexes(self, force: bool = False):
        logger.info("📦 Generating search indexes...")
        all_items = []
        for category in self.categories:
            items = to_searchable_items(self.content[category], category)
            all_items.extend(items)
            tags, popular = tag_summary(items, POPULAR_TAGS_PER_CATEGORY)
            self._emit(f"search-indexes/{category}.json", "search-index", {
                "category": category,
                "items": items,
                "count": len(items),
                "generated": "static",
                "tags": tags,
                "popularTags": popular,
            }, force)

        tags, popular = tag_summary(all_items, POPULAR_TAGS_COMBINED)
        self._emit("search-indexes/combined.json", "search-index", {
            "items": all_items,
            "count": len(all_items),
            "generated": "static",
            "categories": [
                {"category": category, "count": len(self.content[category])}
                for category in self.categories
            ],
            "tags": tags,
            "popularTags": popular,
        }, force)

    def health(self, force: bool = False):
        logger.info("📦 Generating health check endpoint...")
        counts = {category: len(self.content[category]) for category in self.categories}
        counts["total"] = sum(counts.values())
        self._emit("health.json", "health", {
            "status": "healthy",
            "generated": "static",
            "version": SITE_VERSION,
            "counts": counts,
            "features": {"staticGeneration": True, "searchIndexes": True},
        }, force)

    def generate(self, force: bool = False) -> dict:
        """
        Generate every static API file.

        Returns:
            {"written": [...], "skipped": [...]}

        Raises:
            StaticAPIError: when a response fails validation
        """
        self.written, self.skipped = [], []
        self.category_responses(force)
        self.all_configurations(force)
        self.search_indexes(force)
        self.health(force)
        self.cache.save()
        return {"written": list(self.written), "skipped": list(self.skipped)}
