"""
SEO page generator
Renders collection, workflow and category landing pages as MDX
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

import yaml

from ..category_processor import list_content_files
from ..config import CONTENT_DIR, SEO_OUTPUT_DIR, SITE_URL
from ..utils import slug_to_title, slugify, write_text_if_changed
from . import templates
from .seo_utils import (
    create_article_schema, create_breadcrumb_schema, create_faq_schema, create_howto_schema,
    generate_long_tail_keywords, generate_standard_faqs, render_frontmatter,
)

logger = logging.getLogger(__name__)

DEFINITIONS_PATH = Path(__file__).resolve().parent / "collections.yaml"

RELATED_CATEGORIES = {
    "hooks": ["commands", "agents"],
    "commands": ["agents", "hooks"],
    "agents": ["rules", "commands"],
    "mcp": ["agents", "hooks"],
    "rules": ["agents", "commands"],
}


def load_definitions(path: Path = DEFINITIONS_PATH) -> dict:
    """Load SEO page definitions keyed by content category"""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of categories")
    return data


def _lower_tags(item: dict) -> list:
    return [str(tag).lower() for tag in item.get("tags") or []]


def matching_collection_items(definition: dict, items: list, type_field: Optional[str] = None) -> list:
    """Items tagged with a definition tag, or mentioning its keyword"""
    tags = {tag.lower() for tag in definition.get("tags", [])}
    keyword = definition["keyword"].lower()
    matched = []
    for item in items:
        if tags.intersection(_lower_tags(item)):
            matched.append(item)
        elif keyword in str(item.get("description") or "").lower():
            matched.append(item)
        elif keyword in str(item.get("title") or "").lower():
            matched.append(item)
        elif type_field and keyword in str(item.get(type_field) or "").lower():
            matched.append(item)
    return matched


def matching_workflow_items(definition: dict, items: list, type_field: Optional[str] = None) -> list:
    terms = [term.lower() for term in definition.get("match_terms", [])]
    matched = []
    for item in items:
        haystacks = _lower_tags(item) + [str(item.get("title") or "").lower()]
        if type_field:
            haystacks.append(str(item.get(type_field) or "").lower())
        if any(term in text for term in terms for text in haystacks):
            matched.append(item)
    return matched


def matching_bucket_items(definition: dict, items: list) -> list:
    tags = {tag.lower() for tag in definition.get("tags", [])}
    return [item for item in items if tags.intersection(_lower_tags(item))]


def _seo_config(category: str, definition: dict, examples: list) -> dict:
    return {
        "category": category,
        "title": definition["title"],
        "description": definition.get("description", definition["title"]),
        "keyword": definition.get("keyword", definition["title"].lower()),
        "tags": definition.get("tags", definition.get("match_terms", [])),
        "related_categories": RELATED_CATEGORIES.get(category, []),
        "examples": examples,
    }


def _frontmatter(page: dict, seo_config: dict, breadcrumbs: list, today: str, howto: Optional[dict] = None) -> str:
    keywords = generate_long_tail_keywords(seo_config)
    schemas = {
        "article": create_article_schema(page, keywords, today),
        "faq": create_faq_schema(generate_standard_faqs(seo_config)),
    }
    if howto:
        schemas["howto"] = howto
    schemas["breadcrumb"] = create_breadcrumb_schema(breadcrumbs)
    return render_frontmatter({
        "title": page["title"],
        "description": page["description"],
        "keywords": keywords,
        "dateUpdated": today,
        "schemas": schemas,
    })


def collection_filename(category: str, definition: dict) -> str:
    return f"{category}-{slugify(definition['keyword'])}.mdx"


def workflow_filename(category: str, definition: dict) -> str:
    return f"{category}-{slugify(definition['title'])}.mdx"


def bucket_filename(category: str, definition: dict) -> str:
    return f"{category}-for-{slugify(definition['name'])}.mdx"


def generate_collection_page(
    definition: dict,
    items: list,
    category: str,
    min_matches: int = 1,
    type_field: Optional[str] = None,
    base_url: str = SITE_URL,
    today: Optional[str] = None,
) -> Optional[str]:
    """
    Render a collection landing page.

    Returns:
        MDX text, or None when fewer than ``min_matches`` items match
    """
    matched = matching_collection_items(definition, items, type_field)
    if not matched or len(matched) < min_matches:
        return None

    today = today or date.today().isoformat()
    label = slug_to_title(category) if category != "mcp" else "MCP Servers"
    url = f"{base_url}/guides/collections/{collection_filename(category, definition)[:-4]}"
    examples = [
        {
            "title": item.get("title") or item["slug"],
            "description": item.get("description", ""),
            "prompt": f"Use {item.get('title') or item['slug']} for {definition['keyword']} in Claude Code.",
        }
        for item in matched[:3]
    ]
    seo_config = _seo_config(category, definition, examples)
    page = {
        "title": f"{definition['title']} - Claude {label}",
        "description": f"{definition['description']} Discover {label.lower()} for {definition['keyword']}.",
        "url": url,
        "keyword": definition["keyword"],
        "word_count": 2000,
    }
    breadcrumbs = [
        ("Home", base_url),
        ("Guides", f"{base_url}/guides"),
        ("Collections", f"{base_url}/guides/collections"),
        (definition["title"], url),
    ]

    use_cases = "\n".join(f"- **{uc}**" for uc in definition.get("use_cases", []))
    capabilities = "\n".join(f"- {cap}" for cap in definition.get("capabilities", []))
    recommended = ", ".join(f"[{item['slug']}](/{category}/{item['slug']})" for item in matched[:2])
    scenarios = "\n\n".join(
        f"### {s['title']}\n{s['description']}\n\n**Recommended:** {recommended}"
        for s in definition.get("scenarios", [])
    )

    body = [
        templates.intro_section(seo_config),
        "",
        "\n".join(f"- [{item.get('title') or item['slug']}](/{category}/{item['slug']})" for item in matched[:5]),
        "",
    ]
    if use_cases:
        body += ["## Use Cases", "", use_cases, ""]
    if capabilities:
        body += ["## Capabilities", "", capabilities, ""]
    if scenarios:
        body += ["## Implementation Scenarios", "", scenarios, ""]
    body += [
        templates.item_list_section(f"Available {definition['title']}", matched, category),
        "",
        templates.code_examples_section(seo_config),
        "",
        templates.setup_guide_section(seo_config),
        "",
        templates.troubleshooting_section(seo_config),
        "",
        templates.faq_section(seo_config),
        "",
        templates.internal_resources_section(seo_config),
        "",
        "---",
        "",
        f"*[Browse all {label.lower()}](/{category}) or [submit your own](/submit)*",
    ]
    return _frontmatter(page, seo_config, breadcrumbs, today) + "\n" + "\n".join(body) + "\n"


def generate_workflow_guide(
    definition: dict,
    items: list,
    category: str,
    min_matches: int = 1,
    type_field: Optional[str] = None,
    base_url: str = SITE_URL,
    today: Optional[str] = None,
) -> Optional[str]:
    """
    Render a multi-phase workflow guide.

    Returns:
        MDX text, or None when fewer than ``min_matches`` items match
    """
    matched = matching_workflow_items(definition, items, type_field)
    if not matched or len(matched) < min_matches:
        return None

    today = today or date.today().isoformat()
    url = f"{base_url}/guides/workflows/{workflow_filename(category, definition)[:-4]}"
    phases = definition.get("phases", [])
    examples = [
        {
            "title": f"{phase['name']} Phase",
            "description": f"{phase['name']} with {category}",
            "prompt": f"Run the {phase['name'].lower()} phase of the {definition['title'].lower()} workflow.",
        }
        for phase in phases[:3]
    ]
    seo_config = _seo_config(category, definition, examples)
    page = {
        "title": f"{definition['title']} - Claude Workflow",
        "description": f"{definition['description']}. Step-by-step guide with the {category} that support it.",
        "url": url,
        "keyword": seo_config["keyword"],
        "word_count": 2500,
    }
    howto = create_howto_schema(definition["title"], definition["description"], [
        {
            "name": f"{phase['name']}: {step}",
            "text": f"In the {phase['name'].lower()} phase, {step[:1].lower() + step[1:]}.",
            "url": f"{url}#phase-{index}",
        }
        for index, phase in enumerate(phases, 1)
        for step in phase.get("steps", [])
    ])
    breadcrumbs = [
        ("Home", base_url),
        ("Guides", f"{base_url}/guides"),
        ("Workflows", f"{base_url}/guides/workflows"),
        (definition["title"], url),
    ]

    phase_blocks = []
    for index, phase in enumerate(phases, 1):
        steps = "\n".join(f"{n}. {step}" for n, step in enumerate(phase.get("steps", []), 1))
        phase_blocks.append(f"### Phase {index}: {phase['name']} {{#phase-{index}}}\n\n{steps}")

    triggers = ", ".join(definition.get("triggers", []))
    body = [
        templates.intro_section(seo_config),
        "",
        "\n".join(f"- [{item.get('title') or item['slug']}](/{category}/{item['slug']})" for item in matched[:5]),
        "",
        "## Workflow Overview",
        "",
        f"**Objective:** {definition.get('goal', definition['description'])}",
    ]
    if triggers:
        body.append(f"**Triggers:** {triggers}")
    body += [
        "",
        "## Implementation Guide",
        "",
        "\n\n".join(phase_blocks),
        "",
        templates.item_list_section("Required Configuration", matched, category),
        "",
        templates.code_examples_section(seo_config),
        "",
        templates.troubleshooting_section(seo_config),
        "",
        templates.faq_section(seo_config),
        "",
        templates.internal_resources_section(seo_config),
        "",
        "---",
        "",
        "*[More workflows](/guides/workflows) or [join the community](/community)*",
    ]
    return _frontmatter(page, seo_config, breadcrumbs, today, howto) + "\n" + "\n".join(body) + "\n"


def generate_category_page(
    definition: dict,
    items: list,
    category: str,
    base_url: str = SITE_URL,
    today: Optional[str] = None,
) -> Optional[str]:
    """Tag bucket page; None when no item carries one of the bucket's tags"""
    matched = matching_bucket_items(definition, items)
    if not matched:
        return None

    today = today or date.today().isoformat()
    label = "MCP Servers" if category == "mcp" else slug_to_title(category)
    url = f"{base_url}/guides/categories/{bucket_filename(category, definition)[:-4]}"
    page_definition = {
        "title": f"{label} for {definition['title']}",
        "description": f"Claude {label.lower()} for {definition['title'].lower()} work.",
        "keyword": definition["name"],
        "tags": definition.get("tags", []),
    }
    seo_config = _seo_config(category, page_definition, [])
    page = {
        "title": f"Best Claude {label} for {definition['title']}",
        "description": page_definition["description"],
        "url": url,
        "keyword": definition["name"],
        "word_count": 1200,
    }
    breadcrumbs = [
        ("Home", base_url),
        ("Guides", f"{base_url}/guides"),
        ("Categories", f"{base_url}/guides/categories"),
        (page_definition["title"], url),
    ]
    body = [
        templates.intro_section(seo_config),
        "",
        templates.item_list_section(page_definition["title"], matched, category),
        "",
        templates.setup_guide_section(seo_config),
        "",
        templates.faq_section(seo_config),
    ]
    return _frontmatter(page, seo_config, breadcrumbs, today) + "\n" + "\n".join(body) + "\n"


def load_category_items(content_dir: Path, category: str) -> list:
    """Raw content records of a category; unparseable files are skipped with a warning"""
    items = []
    for name in list_content_files(content_dir, category):
        path = Path(content_dir) / category / name
        try:
            with open(path, encoding="utf-8") as f:
                item = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not parse {path}: {e}")
            continue
        if not isinstance(item, dict):
            continue
        item.setdefault("slug", slugify(path.stem))
        item.setdefault("title", slug_to_title(item["slug"]))
        items.append(item)
    return items


class SEOGenerator:
    """Generate SEO pages for every category with definitions"""

    def __init__(
        self,
        content_dir: Path = CONTENT_DIR,
        output_dir: Path = SEO_OUTPUT_DIR,
        definitions_path: Path = DEFINITIONS_PATH,
        base_url: str = SITE_URL,
        today: Optional[str] = None,
    ):
        self.content_dir = Path(content_dir)
        self.output_dir = Path(output_dir)
        self.definitions = load_definitions(definitions_path)
        self.base_url = base_url.rstrip("/")
        self.today = today

    def _write(self, kind: str, filename: str, text: Optional[str]) -> bool:
        if text is None:
            logger.debug(f"  skipped {kind}/{filename}: not enough matching items")
            return False
        write_text_if_changed(self.output_dir / kind / filename, text)
        logger.info(f"  ✅ Generated: {kind}/{filename}")
        return True

    def generate_category(self, category: str) -> int:
        definitions = self.definitions.get(category) or {}
        items = load_category_items(self.content_dir, category)
        logger.info(f"📦 Loaded {len(items)} {category}")

        min_matches = definitions.get("min_matches", 1)
        type_field = definitions.get("type_field")
        generated = 0

        for definition in definitions.get("collections", []):
            text = generate_collection_page(
                definition, items, category, min_matches, type_field, self.base_url, self.today,
            )
            generated += self._write("collections", collection_filename(category, definition), text)

        for definition in definitions.get("workflows", []):
            text = generate_workflow_guide(
                definition, items, category, min_matches, type_field, self.base_url, self.today,
            )
            generated += self._write("workflows", workflow_filename(category, definition), text)

        for definition in definitions.get("categories", []):
            text = generate_category_page(definition, items, category, self.base_url, self.today)
            generated += self._write("categories", bucket_filename(category, definition), text)

        return generated

    def run(self, categories: Optional[list] = None) -> int:
        """Generate pages; returns the number of pages produced"""
        categories = categories or list(self.definitions.keys())
        total = 0
        for category in categories:
            if category not in self.definitions:
                logger.warning(f"No SEO definitions for {category}")
                continue
            logger.info(f"🚀 Generating SEO content for {category}...")
            total += self.generate_category(category)
        logger.info(f"\n🎉 Generated {total} SEO pages")
        return total
