"""
Sitemap and robots.txt generation
"""

import logging
import xml.etree.ElementTree as ET
from datetime import date
from pathlib import Path
from typing import Optional

from .config import (
    AI_CRAWLERS, CATEGORY_REGISTRY, DETAIL_PAGE_CATEGORIES, LLMS_TXT_STATIC_PAGES,
    MAIN_CONTENT_CATEGORIES, ROBOTS_DISALLOW, SEO_GUIDE_SUBCATEGORIES, SEO_OUTPUT_DIR, SITE_URL,
    STATIC_PAGES, TOOL_PAGES,
)

logger = logging.getLogger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"


def _url(loc: str, lastmod: str, changefreq: str, priority: float) -> dict:
    return {"loc": loc, "lastmod": lastmod, "changefreq": changefreq, "priority": priority}


def _lastmod(item: dict, default: str) -> str:
    value = item.get("dateAdded") or default
    return str(value).split("T")[0]


def list_guide_files(guides_dir: Path, subcategory: str) -> list:
    """Guide slugs found on disk (``.mdx`` and ``.json``) in one subdirectory"""
    sub_dir = Path(guides_dir) / subcategory
    if not sub_dir.is_dir():
        logger.debug(f"Guide directory not found: {sub_dir}")
        return []
    return sorted({
        p.stem for p in sub_dir.iterdir()
        if p.is_file() and p.suffix in (".mdx", ".json") and not p.name.startswith((".", "_"))
    })


def generate_all_site_urls(
    metadata_by_category: dict,
    base_url: str = SITE_URL,
    guides_dir: Path = SEO_OUTPUT_DIR,
    include_guides: bool = True,
    include_changelog: bool = True,
    include_llms_txt: bool = True,
    include_tools: bool = True,
    today: Optional[str] = None,
) -> list:
    """
    Enumerate every public URL of the site.

    Args:
        metadata_by_category: Category id -> metadata list (slug, category, dateAdded)
        base_url: Site origin without trailing slash
        guides_dir: Directory holding guide subdirectories
        include_*: Toggle optional URL groups

    Returns:
        List of {loc, lastmod, changefreq, priority}
    """
    base_url = base_url.rstrip("/")
    today = today or date.today().isoformat()
    urls = []

    # Home
    urls.append(_url(base_url, today, "daily", 1.0))

    # Category pages
    for category in MAIN_CONTENT_CATEGORIES:
        urls.append(_url(f"{base_url}/{category}", today, "daily", 0.8))

    for path, priority, changefreq in STATIC_PAGES:
        urls.append(_url(f"{base_url}/{path}", today, changefreq, priority))

    if include_tools:
        for page in TOOL_PAGES:
            urls.append(_url(f"{base_url}/{page}", today, "monthly", 0.8))

    if include_llms_txt:
        for page in LLMS_TXT_STATIC_PAGES:
            urls.append(_url(f"{base_url}/{page}/llms.txt", today, "daily", 0.85))
        urls.append(_url(f"{base_url}/llms.txt", today, "daily", 0.9))
        for category in MAIN_CONTENT_CATEGORIES:
            urls.append(_url(f"{base_url}/{category}/llms.txt", today, "daily", 0.85))

    if include_guides:
        for subcategory in SEO_GUIDE_SUBCATEGORIES:
            for slug in list_guide_files(guides_dir, subcategory):
                urls.append(_url(f"{base_url}/guides/{subcategory}/{slug}", today, "monthly", 0.65))
                if include_llms_txt:
                    urls.append(_url(f"{base_url}/guides/{subcategory}/{slug}/llms.txt", today, "weekly", 0.7))

    if include_changelog:
        entries = metadata_by_category.get("changelog") or []
        for entry in entries:
            urls.append(_url(f"{base_url}/changelog/{entry['slug']}", _lastmod(entry, today), "monthly", 0.7))

        latest = _lastmod(entries[0], today) if entries else today
        urls.append(_url(f"{base_url}/changelog/rss.xml", latest, "daily", 0.8))
        urls.append(_url(f"{base_url}/changelog/atom.xml", latest, "daily", 0.8))

        if include_llms_txt:
            urls.append(_url(f"{base_url}/changelog/llms.txt", latest, "daily", 0.85))
            for entry in entries:
                urls.append(_url(
                    f"{base_url}/changelog/{entry['slug']}/llms.txt", _lastmod(entry, today), "weekly", 0.75,
                ))

    # Content items
    items = []
    for category in DETAIL_PAGE_CATEGORIES:
        for item in metadata_by_category.get(category) or []:
            items.append((item.get("category") or category, item))

    for category, item in items:
        urls.append(_url(f"{base_url}/{category}/{item['slug']}", _lastmod(item, today), "weekly", 0.7))
    if include_llms_txt:
        for category, item in items:
            urls.append(_url(
                f"{base_url}/{category}/{item['slug']}/llms.txt", _lastmod(item, today), "daily", 0.75,
            ))

    collections = metadata_by_category.get("collections") or []
    for collection in collections:
        urls.append(_url(
            f"{base_url}/collections/{collection['slug']}", _lastmod(collection, today), "weekly", 0.7,
        ))
    if include_llms_txt:
        for collection in collections:
            urls.append(_url(
                f"{base_url}/collections/{collection['slug']}/llms.txt", _lastmod(collection, today), "weekly", 0.75,
            ))

    # Comparison pages
    if include_guides:
        for slug in list_guide_files(guides_dir, "comparisons"):
            urls.append(_url(f"{base_url}/compare/{slug}", today, "monthly", 0.7))

    return urls


def render_sitemap_xml(urls: list) -> str:
    """Render URLs as a sitemap.xml document"""
    ET.register_namespace("", SITEMAP_NAMESPACE)
    urlset = ET.Element(f"{{{SITEMAP_NAMESPACE}}}urlset")
    for url in urls:
        node = ET.SubElement(urlset, f"{{{SITEMAP_NAMESPACE}}}url")
        ET.SubElement(node, f"{{{SITEMAP_NAMESPACE}}}loc").text = url["loc"]
        ET.SubElement(node, f"{{{SITEMAP_NAMESPACE}}}lastmod").text = url["lastmod"]
        ET.SubElement(node, f"{{{SITEMAP_NAMESPACE}}}changefreq").text = url["changefreq"]
        ET.SubElement(node, f"{{{SITEMAP_NAMESPACE}}}priority").text = f"{url['priority']:.2f}".rstrip("0").rstrip(".")

    ET.indent(urlset, space="  ")
    body = ET.tostring(urlset, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"


def render_robots_txt(base_url: str = SITE_URL, categories: Optional[list] = None) -> str:
    """robots.txt with general rules, AI crawler allowances and the sitemap location"""
    base_url = base_url.rstrip("/")
    categories = categories or [c for c in CATEGORY_REGISTRY if c != "changelog"]

    allow = ["/", "/api/", "/llms.txt", "/*/llms.txt", "/*/*/llms.txt", "/trending", "/tools", "/community"]
    allow += [f"/{category}" for category in categories]

    lines = ["# robots.txt", "", "User-agent: *"]
    lines += [f"Allow: {path}" for path in allow]
    lines += [f"Disallow: {path}" for path in ROBOTS_DISALLOW]
    lines.append("")

    lines.append("# AI crawlers")
    for crawler in AI_CRAWLERS:
        lines.append(f"User-agent: {crawler}")
        lines.append("Allow: /")
        lines.append("Allow: /llms.txt")
        lines += [f"Disallow: {path}" for path in ROBOTS_DISALLOW]
        lines.append("")

    lines.append(f"Sitemap: {base_url}/sitemap.xml")
    lines.append(f"Host: {base_url}")
    return "\n".join(lines) + "\n"


def url_statistics(urls: list) -> dict:
    """Counts by priority band and change frequency"""
    return {
        "total": len(urls),
        "critical": sum(1 for u in urls if u["priority"] >= 0.9),
        "high": sum(1 for u in urls if 0.7 <= u["priority"] < 0.9),
        "medium": sum(1 for u in urls if 0.5 <= u["priority"] < 0.7),
        "low": sum(1 for u in urls if u["priority"] < 0.5),
        "daily": sum(1 for u in urls if u["changefreq"] == "daily"),
        "weekly": sum(1 for u in urls if u["changefreq"] == "weekly"),
        "monthly": sum(1 for u in urls if u["changefreq"] == "monthly"),
        "llms_txt": sum(1 for u in urls if u["loc"].endswith("/llms.txt")),
    }


def log_url_statistics(urls: list):
    stats = url_statistics(urls)
    logger.info(f"URL generation complete: {stats['total']} URLs")
    logger.info(
        f"  priority: {stats['critical']} critical, {stats['high']} high, "
        f"{stats['medium']} medium, {stats['low']} low"
    )
    logger.info(
        f"  changefreq: {stats['daily']} daily, {stats['weekly']} weekly, {stats['monthly']} monthly"
    )
    logger.info(f"  llms.txt: {stats['llms_txt']}")
