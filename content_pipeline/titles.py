"""
Page title verification
Checks that every generated page title fits search result limits
"""

import json
import logging
import re
from pathlib import Path
from typing import Optional

import yaml

from .config import (
    CATEGORY_REGISTRY, MAIN_CONTENT_CATEGORIES, MAX_TITLE_LENGTH, SECTION_PAGES, SITE_NAME,
    TITLE_SEPARATOR, TITLE_WARN_THRESHOLD,
)
from .utils import slug_to_title

logger = logging.getLogger(__name__)

HOME_TITLE = f"{SITE_NAME} - Claude Agents, MCP Servers & Rules"

STATUS_PASS = "pass"
STATUS_WARN = "warn"
STATUS_FAIL = "fail"

_FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)


class EarlyExit(Exception):
    """Raised by a quick-mode collector on the first failing title"""


def title_status(title: str) -> str:
    length = len(title)
    if length > MAX_TITLE_LENGTH:
        return STATUS_FAIL
    if length < TITLE_WARN_THRESHOLD:
        return STATUS_WARN
    return STATUS_PASS


def page_title(kind: str, item: Optional[dict] = None, category: Optional[str] = None, section: str = "") -> str:
    """
    Build the rendered <title> of a page.

    kind is one of home, section, category, content, collection, guide-category or guide.
    """
    if kind == "home":
        return HOME_TITLE
    if kind in ("section", "guide-category"):
        return TITLE_SEPARATOR.join([slug_to_title(section), SITE_NAME])
    if kind == "category":
        return TITLE_SEPARATOR.join([CATEGORY_REGISTRY[category]["plural_title"], SITE_NAME])

    item = item or {}
    name = item.get("seoTitle") or item.get("title") or slug_to_title(item.get("slug", ""))
    if kind == "guide":
        plural = "Guides"
    else:
        plural = CATEGORY_REGISTRY[category]["plural_title"]
    return TITLE_SEPARATOR.join([name, plural, SITE_NAME])


def parse_frontmatter(content: str) -> dict:
    match = _FRONTMATTER_RE.match(content)
    if not match:
        return {}
    try:
        data = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError:
        return {}
    return data if isinstance(data, dict) else {}


def guide_files(sub_dir: Path) -> list:
    """Guide pages of one subdirectory; an .mdx page wins over a .json record of the same name"""
    pages = {}
    for path in sorted(sub_dir.iterdir()):
        if not path.is_file() or path.name.startswith((".", "_")) or path.suffix not in (".mdx", ".json"):
            continue
        if path.stem not in pages or path.suffix == ".mdx":
            pages[path.stem] = path
    return [pages[stem] for stem in sorted(pages)]


def read_guide_record(path: Path) -> Optional[dict]:
    """Title fields of a guide from MDX frontmatter or a JSON record"""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to read guide {path}: {e}")
        return None

    if path.suffix == ".json":
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, RecursionError) as e:
            logger.warning(f"Failed to parse guide {path}: {e}")
            return None
        if not isinstance(data, dict):
            logger.warning(f"Guide {path} is not a JSON object")
            return None
    else:
        data = parse_frontmatter(text)

    return {
        "slug": path.stem,
        "title": data.get("title") if isinstance(data.get("title"), str) else "",
        "seoTitle": data.get("seoTitle") if isinstance(data.get("seoTitle"), str) else None,
    }


class ResultCollector:
    """Collects check results; in quick mode the first failure raises EarlyExit"""

    def __init__(self, quick: bool = False):
        self.quick = quick
        self.results = []

    def add(self, route: str, title: str, page_type: str) -> dict:
        return self._append({
            "route": route,
            "title": title,
            "length": len(title),
            "status": title_status(title),
            "type": page_type,
            "check": "title",
            "message": "",
        })

    def add_check(
        self, route: str, page_type: str, check: str, status: str, message: str = "", value: str = "",
    ) -> dict:
        return self._append({
            "route": route,
            "title": value,
            "length": len(value),
            "status": status,
            "type": page_type,
            "check": check,
            "message": message,
        })

    def _append(self, result: dict) -> dict:
        self.results.append(result)
        if self.quick and result["status"] == STATUS_FAIL:
            raise EarlyExit(result["route"])
        return result

    def by_status(self, status: str) -> list:
        return [r for r in self.results if r["status"] == status]

    @property
    def failures(self) -> list:
        return self.by_status(STATUS_FAIL)

    @property
    def warnings(self) -> list:
        return self.by_status(STATUS_WARN)

    @property
    def passes(self) -> list:
        return self.by_status(STATUS_PASS)

    def by_type(self) -> dict:
        grouped = {}
        for result in self.results:
            grouped.setdefault(result["type"], []).append(result)
        return dict(sorted(grouped.items()))

    def summary(self) -> dict:
        return {
            "totalPages": len(self.results),
            "passes": len(self.passes),
            "warnings": len(self.warnings),
            "failures": len(self.failures),
        }


class TitleVerifier:
    """Walks every page route and records its title"""

    def __init__(self, metadata_by_category: dict, guides_dir: Optional[Path] = None, quick: bool = False):
        self.metadata = metadata_by_category
        self.guides_dir = Path(guides_dir) if guides_dir else None
        self.collector = ResultCollector(quick=quick)

    def verify_home(self):
        self.collector.add("/", page_title("home"), "home")

    def verify_sections(self):
        for section in SECTION_PAGES:
            self.collector.add(f"/{section}", page_title("section", section=section), "section")

    def verify_categories(self):
        for category in MAIN_CONTENT_CATEGORIES:
            self.collector.add(f"/{category}", page_title("category", category=category), "category")
            page_type = "collection" if category == "collections" else "content"
            for item in self.metadata.get(category, []):
                self.collector.add(
                    f"/{category}/{item['slug']}",
                    page_title("content", item, category),
                    page_type,
                )

    def verify_guides(self):
        if not self.guides_dir or not self.guides_dir.is_dir():
            logger.warning(f"Guides directory not found, skipping guide verification: {self.guides_dir}")
            return

        for sub_dir in sorted(p for p in self.guides_dir.iterdir() if p.is_dir()):
            self.collector.add(
                f"/guides/{sub_dir.name}",
                page_title("guide-category", section=sub_dir.name),
                "guide-category",
            )
            for path in guide_files(sub_dir):
                item = read_guide_record(path)
                if item is None:
                    continue
                self.collector.add(f"/guides/{sub_dir.name}/{path.stem}", page_title("guide", item), "guide")

    def run(self) -> ResultCollector:
        try:
            self.verify_home()
            self.verify_sections()
            self.verify_categories()
            self.verify_guides()
        except EarlyExit as e:
            logger.warning(f"Early exit triggered in quick mode at {e}")
        return self.collector


def describe(result: dict) -> str:
    if result["check"] == "title":
        return f"{result['length']} chars | {result['route']}"
    return f"{result['check']} | {result['route']}: {result['message']}"


def log_results(collector: ResultCollector, full: bool = True, limit: int = 10):
    failures = collector.failures
    if failures:
        logger.info(f"\n❌ FAILURES: {len(failures)}")
        for result in failures:
            if result["check"] != "title":
                logger.info(f"   {describe(result)}\n")
                continue
            logger.info(f"   {result['length']} chars | {result['route']}")
            logger.info(f"   \"{result['title']}\"")
            logger.info(f"   OVER BY: {result['length'] - MAX_TITLE_LENGTH} chars\n")

    if full:
        for label, results, icon in (
            ("WARNINGS", collector.warnings, "⚠️ "),
            ("PASSES", collector.passes, "✅"),
        ):
            if not results:
                continue
            logger.info(f"\n{icon} {label}: {len(results)}")
            for result in results[:limit]:
                logger.info(f"   {describe(result)}")
            if len(results) > limit:
                logger.info(f"   ... and {len(results) - limit} more")

        logger.info("\n📈 SUMMARY BY TYPE")
        logger.info("=" * 60)
        for page_type, results in collector.by_type().items():
            counts = {s: sum(1 for r in results if r["status"] == s) for s in (STATUS_PASS, STATUS_WARN, STATUS_FAIL)}
            logger.info(f"{page_type.upper()}: {len(results)} total")
            logger.info(f"   ✅ {counts['pass']} pass | ⚠️  {counts['warn']} warn | ❌ {counts['fail']} fail")

    summary = collector.summary()
    total = summary["totalPages"] or 1
    logger.info("\n" + "=" * 60)
    logger.info(f"📊 OVERALL: {summary['totalPages']} pages verified")
    logger.info(f"   ✅ {summary['passes']} pass ({summary['passes'] / total * 100:.1f}%)")
    logger.info(f"   ⚠️  {summary['warnings']} warn ({summary['warnings'] / total * 100:.1f}%)")
    logger.info(f"   ❌ {summary['failures']} fail ({summary['failures'] / total * 100:.1f}%)")
