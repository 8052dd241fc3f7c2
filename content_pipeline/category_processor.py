"""
Category processor
Lists, parses and validates the content files of one category
"""

import logging
import re
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional

from .build_cache import BuildCache, file_hash
from .config import GUIDE_SUBCATEGORIES, SAFE_FILENAME_PATTERN, get_category_config
from .content_parser import ContentParser, ContentValidationError

logger = logging.getLogger(__name__)

_SAFE_FILENAME = re.compile(SAFE_FILENAME_PATTERN)


def is_content_filename(name: str) -> bool:
    """Safe JSON filename that is not a dotfile or template"""
    if name.startswith((".", "_")):
        return False
    if "template" in name.lower():
        return False
    return bool(_SAFE_FILENAME.match(name))


def list_content_files(content_dir: Path, category: str) -> list:
    """
    List content files of a category, relative to ``content_dir/category``.

    Guides live in subdirectories and are returned as ``sub/file.json``.
    A missing directory yields an empty list.
    """
    category_dir = Path(content_dir) / category
    if not category_dir.is_dir():
        logger.warning(f"Content directory not found: {category_dir}")
        return []

    if category == "guides":
        files = []
        for sub in GUIDE_SUBCATEGORIES:
            sub_dir = category_dir / sub
            if not sub_dir.is_dir():
                continue
            files.extend(
                f"{sub}/{p.name}" for p in sub_dir.iterdir()
                if p.is_file() and is_content_filename(p.name)
            )
        return sorted(files)

    return sorted(
        p.name for p in category_dir.iterdir()
        if p.is_file() and is_content_filename(p.name)
    )


def content_file_map(content_dir: Path, category: str) -> dict:
    """Cache key -> path for every content file of a category"""
    category_dir = Path(content_dir) / category
    return {
        f"{category}/{name}": category_dir / name
        for name in list_content_files(content_dir, category)
    }


def _result(filename, success, content=None, error=None, from_cache=False, started=None):
    elapsed = (time.perf_counter() - started) * 1000 if started is not None else 0.0
    return {
        "success": success,
        "file": filename,
        "content": content,
        "error": error,
        "from_cache": from_cache,
        "processing_time_ms": round(elapsed, 2),
    }


def process_content_file(
    content_dir: Path,
    category: str,
    filename: str,
    cached_hash: Optional[str] = None,
) -> dict:
    """
    Read and parse one content file. Never raises; failures are reported in
    the result dict.
    """
    started = time.perf_counter()
    category_dir = (Path(content_dir) / category).resolve()
    path = (category_dir / filename).resolve()

    if category_dir not in path.parents:
        return _result(filename, False, error="Path traversal detected", started=started)

    try:
        raw = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        return _result(filename, False, error=f"Read error: {e}", started=started)

    defaults = {}
    if category == "guides" and "/" in filename:
        defaults["subcategory"] = filename.split("/", 1)[0]

    try:
        item = ContentParser.parse(raw, filename, category, defaults=defaults)
    except ContentValidationError as e:
        return _result(filename, False, error="; ".join(e.messages), started=started)
    except ValueError as e:
        return _result(filename, False, error=str(e), started=started)
    except Exception as e:
        logger.debug(f"Unexpected error parsing {category}/{filename}", exc_info=True)
        return _result(filename, False, error=f"Unexpected error: {e}", started=started)

    try:
        from_cache = cached_hash is not None and cached_hash == file_hash(path)
    except OSError:
        from_cache = False
    return _result(filename, True, content=item, from_cache=from_cache, started=started)


def _empty_result(category: str, error: str) -> dict:
    return {
        "category": category,
        "success": False,
        "items": [],
        "metadata": [],
        "metrics": {
            "files_processed": 0,
            "files_valid": 0,
            "files_invalid": 0,
            "processing_time_ms": 0.0,
            "cache_hit_rate": 0.0,
        },
        "errors": [error],
    }


def build_category(
    content_dir: Path,
    category: str,
    cache: Optional[BuildCache] = None,
    max_workers: Optional[int] = None,
) -> dict:
    """
    Build one category: parse every file in thread-pool batches.

    Returns:
        {category, success, items, metadata, metrics, errors}
    """
    started = time.perf_counter()
    try:
        config = get_category_config(category)
        files = list_content_files(content_dir, category)
        cached_files = cache.data["files"] if cache is not None and cache.data else {}

        results = []
        batch_size = config["batch_size"]
        for i in range(0, len(files), batch_size):
            batch = files[i:i + batch_size]
            with ThreadPoolExecutor(max_workers=max_workers or batch_size) as executor:
                futures = {
                    executor.submit(
                        process_content_file, content_dir, category, name,
                        cached_files.get(f"{category}/{name}", {}).get("hash"),
                    ): name
                    for name in batch
                }
                for future in as_completed(futures):
                    results.append(future.result())
    except Exception as e:
        logger.error(f"✗ {category}: build failed: {e}")
        return _empty_result(category, str(e))

    items = []
    errors = []
    cache_hits = 0
    for result in results:
        if result["success"]:
            items.append(result["content"])
            if result["from_cache"]:
                cache_hits += 1
        else:
            errors.append(f"{result['file']}: {result['error']}")
            logger.warning(f"  ⚠ {category}/{result['file']}: {result['error']}")

    items.sort(key=lambda item: item["slug"])
    metadata = [ContentParser.extract_metadata(item, config["metadata_fields"]) for item in items]

    processed = len(results)
    metrics = {
        "files_processed": processed,
        "files_valid": len(items),
        "files_invalid": processed - len(items),
        "processing_time_ms": round((time.perf_counter() - started) * 1000, 2),
        "cache_hit_rate": round(cache_hits / processed, 4) if processed else 0.0,
    }

    return {
        "category": category,
        "success": True,
        "items": items,
        "metadata": metadata,
        "metrics": metrics,
        "errors": errors,
    }
