"""
Incremental content build

Loads the build cache, rebuilds only categories whose files changed, writes
the generated metadata/full modules and the content index, then saves the
cache.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional

from .build_cache import BuildCache
from .category_processor import build_category, content_file_map
from .changelog import parse_changelog, to_full_content, to_metadata
from .codegen import (
    full_content_path, generate_full_content_file, generate_index_file,
    generate_metadata_file, metadata_path, read_generated_array, write_build_output,
)
from .config import (
    CACHE_DIR, CATEGORY_REGISTRY, CHANGELOG_PATH, CONTENT_DIR, GENERATED_DIR,
)

logger = logging.getLogger(__name__)

CHANGELOG_CACHE_KEY = "changelog/CHANGELOG.md"


class ContentBuilder:
    """Build generated content modules from content JSON files"""

    def __init__(
        self,
        content_dir: Path = CONTENT_DIR,
        generated_dir: Path = GENERATED_DIR,
        cache_dir: Path = CACHE_DIR,
        changelog_path: Path = CHANGELOG_PATH,
        categories: Optional[list] = None,
        force: bool = False,
        max_workers: int = 4,
    ):
        self.content_dir = Path(content_dir)
        self.generated_dir = Path(generated_dir)
        self.changelog_path = Path(changelog_path)
        self.categories = categories or list(CATEGORY_REGISTRY.keys())
        self.force = force
        self.max_workers = max_workers
        self.cache = BuildCache(cache_dir)
        self.files_written = 0

    def file_map(self, category: str) -> dict:
        if CATEGORY_REGISTRY[category]["source"] == "changelog":
            if self.changelog_path.exists():
                return {CHANGELOG_CACHE_KEY: self.changelog_path}
            return {}
        return content_file_map(self.content_dir, category)

    def categories_to_rebuild(self, file_maps: dict) -> list:
        rebuild = []
        for category in self.categories:
            if not metadata_path(self.generated_dir, category).exists():
                rebuild.append(category)
            elif not CATEGORY_REGISTRY[category]["enable_cache"]:
                rebuild.append(category)
            elif self.cache.needs_rebuild(category, file_maps[category]):
                rebuild.append(category)
        return rebuild

    def _write(self, path: Path, text: str):
        if write_build_output(path, text):
            self.files_written += 1

    def write_category(self, category: str, metadata: list, items: list):
        self._write(metadata_path(self.generated_dir, category), generate_metadata_file(category, metadata))
        self._write(full_content_path(self.generated_dir, category), generate_full_content_file(category, items))

    def build_changelog(self) -> int:
        """Build changelog modules; parse failures fall back to empty modules"""
        logger.info("📋 Parsing changelog from CHANGELOG.md...")
        try:
            text = self.changelog_path.read_text(encoding="utf-8")
            entries = parse_changelog(text)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            logger.error(f"Failed to parse changelog from {self.changelog_path}: {e}")
            self.write_category("changelog", [], [])
            logger.warning("⚠ Changelog: using empty fallback due to parse error")
            return 0

        self.write_category(
            "changelog",
            [to_metadata(entry) for entry in entries],
            [to_full_content(entry) for entry in entries],
        )
        logger.info(f"✓ Changelog: {len(entries)} entries from CHANGELOG.md")
        return len(entries)

    def existing_count(self, category: str) -> int:
        data = read_generated_array(metadata_path(self.generated_dir, category))
        return len(data) if data is not None else 0

    def run(self) -> dict:
        """
        Run the build.

        Returns:
            Summary dict with rebuilt/skipped categories, content stats,
            valid/invalid totals and the number of files written
        """
        started = time.perf_counter()
        self.files_written = 0

        self.cache.load()
        file_maps = {category: self.file_map(category) for category in self.categories}
        if self.force:
            logger.info("Force rebuild requested, ignoring cache")
            rebuild = list(self.categories)
        else:
            rebuild = self.categories_to_rebuild(file_maps)
        skipped = [c for c in self.categories if c not in rebuild]

        if not rebuild:
            logger.info("✓ All categories up to date")
        else:
            logger.info(f"Rebuilding {len(rebuild)} categories: {', '.join(rebuild)}")

        content_stats = {
            category: self.existing_count(category)
            for category in CATEGORY_REGISTRY if category not in rebuild
        }
        rebuilt_maps = {}
        total_valid = 0
        total_invalid = 0
        failed = []

        json_categories = [c for c in rebuild if CATEGORY_REGISTRY[c]["source"] == "json"]
        results = {}
        if json_categories:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = {
                    executor.submit(build_category, self.content_dir, category, self.cache): category
                    for category in json_categories
                }
                for future in as_completed(futures):
                    result = future.result()
                    results[result["category"]] = result

        for category in rebuild:
            config = CATEGORY_REGISTRY[category]
            if config["source"] == "changelog":
                content_stats[category] = self.build_changelog()
                rebuilt_maps[category] = file_maps[category]
                continue

            result = results[category]
            if not result["success"]:
                failed.append(category)
                content_stats[category] = self.existing_count(category)
                continue

            metrics = result["metrics"]
            total_valid += metrics["files_valid"]
            total_invalid += metrics["files_invalid"]
            self.write_category(category, result["metadata"], result["items"])
            content_stats[category] = len(result["items"])
            rebuilt_maps[category] = file_maps[category]

            status = "✓" if not result["errors"] else "⚠"
            logger.info(
                f"{status} {config['plural_title']}: {metrics['files_valid']} valid, "
                f"{metrics['files_invalid']} invalid ({metrics['processing_time_ms']:.0f}ms, "
                f"cache hit rate {metrics['cache_hit_rate']:.0%})"
            )

        self._write(self.generated_dir / "content.ts", generate_index_file(content_stats))

        self.cache.collect(rebuilt_maps)
        self.cache.save()

        elapsed = time.perf_counter() - started
        logger.info("\n" + "=" * 50)
        logger.info("Build statistics")
        logger.info("=" * 50)
        logger.info(f"  Categories rebuilt: {len(rebuild) - len(failed)}")
        logger.info(f"  Categories skipped: {len(skipped)}")
        logger.info(f"  Valid files:        {total_valid}")
        logger.info(f"  Invalid files:      {total_invalid}")
        logger.info(f"  Files written:      {self.files_written}")
        logger.info(f"  Total items:        {sum(content_stats.values())}")
        logger.info(f"  Time:               {elapsed:.2f}s")

        return {
            "rebuilt": [c for c in rebuild if c not in failed],
            "skipped": skipped,
            "failed": failed,
            "content_stats": content_stats,
            "total_valid": total_valid,
            "total_invalid": total_invalid,
            "files_written": self.files_written,
        }
