"""
SEO metadata validation
Description and keyword limits for content pages, plus heading and
structured-data checks for guide MDX files
"""

import logging
import re
from pathlib import Path
from typing import Optional

from .config import (
    DESCRIPTION_MAX_LENGTH, DESCRIPTION_MIN_LENGTH, KEYWORD_MAX_LENGTH, KEYWORDS_MAX, KEYWORDS_MIN,
    MAIN_CONTENT_CATEGORIES,
)
from .titles import STATUS_FAIL, STATUS_PASS, STATUS_WARN, EarlyExit, ResultCollector, parse_frontmatter

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r'\b(undefined|null|lorem ipsum|TODO|FIXME|placeholder)\b', re.IGNORECASE)
H1_RE = re.compile(r'^# [^#]')
CODE_PROP_OPEN_RE = re.compile(r'code[:=]\s*[{`]?`')

FAQ_PAGE_MARKERS = (
    'itemType="https://schema.org/FAQPage"',
    '"@type": "FAQPage"',
    '"@type":"FAQPage"',
)


def description_issues(description) -> list:
    """(status, message) pairs for a meta description"""
    if not isinstance(description, str) or not description.strip():
        return [(STATUS_FAIL, "Description is missing")]

    issues = []
    length = len(description)
    if length < DESCRIPTION_MIN_LENGTH:
        issues.append((STATUS_FAIL, f"Description too short ({length} chars)"))
    elif length > DESCRIPTION_MAX_LENGTH:
        issues.append((STATUS_FAIL, f"Description too long ({length} chars)"))
    if PLACEHOLDER_RE.search(description):
        issues.append((STATUS_FAIL, "Description contains placeholder text"))
    return issues


def keyword_issues(keywords) -> list:
    """(status, message) pairs for a keyword list; problems are warnings"""
    if not isinstance(keywords, list):
        return [(STATUS_WARN, "Keywords must be a list")]

    issues = []
    if len(keywords) < KEYWORDS_MIN:
        issues.append((STATUS_WARN, f"Too few keywords ({len(keywords)})"))
    elif len(keywords) > KEYWORDS_MAX:
        issues.append((STATUS_WARN, f"Too many keywords ({len(keywords)})"))
    for keyword in keywords:
        if len(str(keyword)) > KEYWORD_MAX_LENGTH:
            issues.append((STATUS_WARN, f"Keyword too long: \"{keyword}\" ({len(str(keyword))} chars)"))
    return issues


def _count_faq_schemas(schemas) -> int:
    if isinstance(schemas, dict):
        schemas = list(schemas.values())
    if not isinstance(schemas, list):
        return 0
    return sum(1 for schema in schemas if isinstance(schema, dict) and schema.get("@type") == "FAQPage")


def analyze_mdx(text: str) -> dict:
    """
    Scan an MDX page for H1 headings and FAQPage declarations.

    Frontmatter, fenced code blocks and template-literal ``code`` props are
    skipped so shell comments are not mistaken for headings.

    Returns:
        Dict with frontmatter, h1_lines and faq_page_count
    """
    frontmatter = parse_frontmatter(text)
    h1_lines = []
    faq_page_count = _count_faq_schemas(frontmatter.get("schemas"))

    in_frontmatter = False
    in_code_block = False
    in_code_prop = False
    for number, line in enumerate(text.splitlines(), 1):
        stripped = line.strip()
        if stripped == "---" and (number == 1 or in_frontmatter):
            in_frontmatter = number == 1
            continue
        if in_frontmatter:
            continue

        if in_code_prop:
            if stripped.endswith("`") or re.search(r'`[\s,}]', line):
                in_code_prop = False
            continue
        if CODE_PROP_OPEN_RE.search(line):
            in_code_prop = True
            continue

        if stripped.startswith("```"):
            in_code_block = not in_code_block
            continue
        if in_code_block:
            continue

        if H1_RE.match(line):
            h1_lines.append(number)
        if any(marker in line for marker in FAQ_PAGE_MARKERS):
            faq_page_count += 1

    return {"frontmatter": frontmatter, "h1_lines": h1_lines, "faq_page_count": faq_page_count}


def structure_issues(analysis: dict) -> list:
    issues = []
    h1_lines = analysis["h1_lines"]
    if not h1_lines:
        issues.append((STATUS_FAIL, "No H1 heading found"))
    elif len(h1_lines) > 1:
        lines = ", ".join(str(n) for n in h1_lines)
        issues.append((STATUS_FAIL, f"Multiple H1 headings ({len(h1_lines)}) on lines {lines}"))
    if analysis["faq_page_count"] > 1:
        issues.append((STATUS_FAIL, f"Multiple FAQPage schemas ({analysis['faq_page_count']})"))
    return issues


class SEOValidator:
    """Runs description, keyword and MDX structure checks over every page"""

    def __init__(self, metadata_by_category: dict, guides_dir: Optional[Path] = None, quick: bool = False):
        self.metadata = metadata_by_category
        self.guides_dir = Path(guides_dir) if guides_dir else None
        self.collector = ResultCollector(quick=quick)

    def _record(self, route: str, page_type: str, check: str, issues: list, value: str = ""):
        if not issues:
            self.collector.add_check(route, page_type, check, STATUS_PASS, value=value)
        for status, message in issues:
            self.collector.add_check(route, page_type, check, status, message, value=value)

    def validate_content(self):
        for category in MAIN_CONTENT_CATEGORIES:
            for item in self.metadata.get(category, []):
                route = f"/{category}/{item['slug']}"
                description = item.get("seoDescription") or item.get("description")
                self._record(route, "content", "description", description_issues(description), str(description or ""))
                if "keywords" in item:
                    self._record(route, "content", "keywords", keyword_issues(item["keywords"]))

    def validate_guides(self):
        if not self.guides_dir or not self.guides_dir.is_dir():
            logger.warning(f"Guides directory not found, skipping MDX validation: {self.guides_dir}")
            return

        for path in sorted(self.guides_dir.rglob("*.mdx")):
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Failed to read guide {path}: {e}")
                continue

            route = "/guides/" + path.relative_to(self.guides_dir).with_suffix("").as_posix()
            analysis = analyze_mdx(text)
            frontmatter = analysis["frontmatter"]
            description = frontmatter.get("seoDescription") or frontmatter.get("description")

            self._record(route, "guide", "structure", structure_issues(analysis))
            self._record(route, "guide", "description", description_issues(description), str(description or ""))
            if "keywords" in frontmatter:
                self._record(route, "guide", "keywords", keyword_issues(frontmatter["keywords"]))

    def run(self) -> ResultCollector:
        try:
            self.validate_content()
            self.validate_guides()
        except EarlyExit as e:
            logger.warning(f"Early exit triggered in quick mode at {e}")
        return self.collector
