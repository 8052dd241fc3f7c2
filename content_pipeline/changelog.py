"""
CHANGELOG.md parser
Turns changelog entries into metadata and guide-compatible content records
"""

import logging
import re
from datetime import datetime

from .utils import slugify

logger = logging.getLogger(__name__)

CHANGE_CATEGORIES = ["Added", "Changed", "Fixed", "Removed", "Deprecated", "Security"]

CATEGORY_HEADINGS = {
    "Added": "✨ Added",
    "Changed": "🔄 Changed",
    "Fixed": "🐛 Fixed",
    "Removed": "🗑️ Removed",
    "Deprecated": "⚠️ Deprecated",
    "Security": "🔒 Security",
}

CHANGELOG_AUTHOR = "ClaudePro Directory"
CHANGELOG_KEYWORDS = ["changelog", "updates", "features", "improvements", "release notes"]

# "## 2025-10-18 - Title" or "## [1.2.0] - 2025-10-18"
_DATED_HEADING = re.compile(r'^##\s+(\d{4}-\d{2}-\d{2})\s+[-–]\s+(.+?)\s*$')
_VERSION_HEADING = re.compile(r'^##\s+\[v?(\d+\.\d+\.\d+[^\]]*)\]\s+[-–]\s+(\d{4}-\d{2}-\d{2})\s*$')
_SUBHEADING = re.compile(r'^###\s+(.+?)\s*$')
_TLDR = re.compile(r'^\*\*TL;DR:?\*\*:?\s*(.+)$')
_LIST_ITEM = re.compile(r'^[-*]\s+(.+)$')


def _validate_date(value: str) -> str:
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError as e:
        raise ValueError(f"Invalid changelog date: {value}") from e
    return value


def _parse_heading(line: str):
    match = _DATED_HEADING.match(line)
    if match:
        return _validate_date(match.group(1)), match.group(2)
    match = _VERSION_HEADING.match(line)
    if match:
        return _validate_date(match.group(2)), f"Version {match.group(1)}"
    return None


def _parse_body(lines: list) -> tuple:
    tldr = ""
    categories = {name: [] for name in CHANGE_CATEGORIES}
    current = None

    for line in lines:
        stripped = line.strip()
        if not tldr:
            match = _TLDR.match(stripped)
            if match:
                tldr = match.group(1).strip()
                continue

        match = _SUBHEADING.match(stripped)
        if match:
            heading = match.group(1).strip()
            current = heading if heading in categories else None
            continue

        if current is None or not stripped:
            continue

        match = _LIST_ITEM.match(stripped)
        if match:
            categories[current].append({"content": match.group(1).strip()})
        elif categories[current] and line.startswith((" ", "\t")):
            # Wrapped list item
            categories[current][-1]["content"] += " " + stripped

    return tldr, categories


def parse_changelog(text: str) -> list:
    """
    Parse changelog markdown into entries, newest first.

    Each entry: {slug, title, date, tldr, categories, content}.
    Headings without a recognised date are ignored.

    Raises:
        ValueError: when a heading carries an impossible date
    """
    entries = []
    current = None
    body = []

    def flush():
        if current is None:
            return
        date, title = current
        tldr, categories = _parse_body(body)
        entries.append({
            "slug": f"{date}-{slugify(title)}",
            "title": title,
            "date": date,
            "tldr": tldr,
            "categories": categories,
            "content": "\n".join(body).strip(),
        })

    for line in text.splitlines():
        if line.startswith("## "):
            flush()
            current = _parse_heading(line)
            body = []
            if current is None:
                logger.debug(f"Skipping changelog heading: {line.strip()}")
            continue
        if current is not None:
            body.append(line)
    flush()

    seen = {}
    for entry in entries:
        count = seen.get(entry["slug"], 0)
        seen[entry["slug"]] = count + 1
        if count:
            entry["slug"] = f"{entry['slug']}-{count + 1}"

    entries.sort(key=lambda e: e["date"], reverse=True)
    return entries


def to_metadata(entry: dict) -> dict:
    return {
        "slug": entry["slug"],
        "title": entry["title"],
        "description": entry["tldr"] or entry["title"],
        "dateAdded": entry["date"],
    }


def build_sections(entry: dict) -> list:
    """TL;DR callout followed by a heading and list per change category"""
    sections = []
    if entry["tldr"]:
        sections.append({
            "type": "callout",
            "variant": "info",
            "title": "TL;DR",
            "content": entry["tldr"],
        })

    for category, items in entry["categories"].items():
        if not items:
            continue
        sections.append({
            "type": "heading",
            "level": "3",
            "content": CATEGORY_HEADINGS.get(category, category),
        })
        sections.append({
            "type": "text",
            "content": "\n".join(f"- {item['content']}" for item in items),
        })
    return sections


def to_full_content(entry: dict) -> dict:
    """Guide-compatible record for the changelog detail page"""
    return {
        "slug": entry["slug"],
        "title": entry["title"],
        "description": entry["tldr"] or entry["title"],
        "author": CHANGELOG_AUTHOR,
        "dateAdded": entry["date"],
        "tags": ["changelog", "updates"],
        "content": entry["content"],
        "category": "guides",
        "subcategory": "use-cases",
        "keywords": list(CHANGELOG_KEYWORDS),
        "source": "claudepro",
        "displayTitle": entry["title"],
        "sections": build_sections(entry),
    }
