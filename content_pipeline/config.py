"""
Pipeline configuration
"""

import os
from pathlib import Path

# Paths
ROOT_DIR = Path(os.environ.get("DIRECTORY_ROOT", Path(__file__).resolve().parent.parent))
CONTENT_DIR = ROOT_DIR / "content"
GENERATED_DIR = ROOT_DIR / "generated"
PUBLIC_DIR = ROOT_DIR / "public"
STATIC_API_DIR = PUBLIC_DIR / "static-api"
CACHE_DIR = ROOT_DIR / ".build-cache"
CHANGELOG_PATH = ROOT_DIR / "CHANGELOG.md"
SEO_OUTPUT_DIR = CONTENT_DIR / "guides"
SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"

# Site settings
SITE_NAME = "Claude Pro Directory"
SITE_URL = os.environ.get("SITE_URL", "https://claudepro.directory").rstrip("/")
SITE_DESCRIPTION = (
    "Community-curated directory of Claude agents, MCP servers, rules, "
    "commands, hooks, statuslines, collections and skills."
)
SITE_LICENSE = "MIT"
SITE_VERSION = "1.0.0"

# Build limits
MAX_CONTENT_FILE_SIZE = 1024 * 1024  # 1MB
SAFE_FILENAME_PATTERN = r'^[a-zA-Z0-9\-_]+\.json$'
DEFAULT_BATCH_SIZE = 10
CACHE_VERSION = "1.0.0"

# Fields kept in list-view metadata modules
METADATA_FIELDS = [
    "slug", "title", "seoTitle", "displayTitle", "description", "author",
    "tags", "category", "dateAdded", "source",
]

# Guide subdirectories scanned by the content build
GUIDE_SUBCATEGORIES = ["tutorials", "comparisons", "workflows", "use-cases", "troubleshooting"]

# Guide subdirectories scanned for sitemap entries (adds generated SEO pages)
SEO_GUIDE_SUBCATEGORIES = [
    "use-cases", "tutorials", "collections", "categories",
    "workflows", "comparisons", "troubleshooting",
]


def _category(
    plural_title, title, type_name, schema, item_type, display_name,
    source="json", generate_static_api=True, batch_size=DEFAULT_BATCH_SIZE,
):
    return {
        "plural_title": plural_title,
        "title": title,
        "type_name": type_name,
        "schema": schema,
        "item_type": item_type,
        "display_name": display_name,
        "source": source,
        "generate_static_api": generate_static_api,
        "batch_size": batch_size,
        "enable_cache": True,
        "metadata_fields": list(METADATA_FIELDS),
    }


# Category registry, in build and navigation order
CATEGORY_REGISTRY = {
    "agents": _category("AI Agents", "AI Agent", "AgentContent", "agent", "agent", "agent"),
    "mcp": _category("MCP Servers", "MCP Server", "McpContent", "mcp", "mcp", "MCP server"),
    "rules": _category("Rules", "Rule", "RuleContent", "rule", "rule", "rule"),
    "commands": _category("Commands", "Command", "CommandContent", "command", "command", "command"),
    "hooks": _category("Hooks", "Hook", "HookContent", "hook", "hook", "hook"),
    "statuslines": _category(
        "Statuslines", "Statusline", "StatuslineContent", "statusline", "statusline", "statusline",
    ),
    "collections": _category(
        "Collections", "Collection", "CollectionContent", "collection", "collection", "collection",
    ),
    "skills": _category("Skills", "Skill", "SkillContent", "skill", "skill", "skill"),
    "guides": _category(
        "Guides", "Guide", "GuideContent", "guide", "guide", "guide", generate_static_api=False,
    ),
    "changelog": _category(
        "Changelog", "Changelog Entry", "GuideContent", "guide", "changelog", "changelog entry",
        source="changelog", generate_static_api=False,
    ),
}

# Categories rendered as /<category>/<slug> detail pages
DETAIL_PAGE_CATEGORIES = [
    "rules", "mcp", "agents", "commands", "hooks", "statuslines", "skills",
]

# Categories with their own index page
MAIN_CONTENT_CATEGORIES = [
    "agents", "mcp", "rules", "commands", "hooks", "statuslines", "collections", "skills",
]

# SEO settings
MAX_TITLE_LENGTH = 60  # Google truncates at ~60 chars
TITLE_WARN_THRESHOLD = 55
TITLE_SEPARATOR = " - "
DESCRIPTION_MIN_LENGTH = 150
DESCRIPTION_MAX_LENGTH = 160
KEYWORDS_MIN = 3
KEYWORDS_MAX = 10
KEYWORD_MAX_LENGTH = 30

# Top-level static pages (path, priority, changefreq)
STATIC_PAGES = [
    ("jobs", 0.6, "weekly"),
    ("community", 0.6, "weekly"),
    ("trending", 0.6, "weekly"),
    ("submit", 0.6, "weekly"),
    ("partner", 0.6, "weekly"),
    ("guides", 0.6, "weekly"),
    ("companies", 0.6, "weekly"),
    ("board", 0.5, "daily"),
    ("api-docs", 0.9, "weekly"),
    ("changelog", 0.85, "daily"),
]

# Static sections whose titles are verified
SECTION_PAGES = [
    "guides", "collections", "community", "jobs", "partner", "submit", "trending", "api-docs",
]

TOOL_PAGES = ["tools/config-recommender"]
LLMS_TXT_STATIC_PAGES = ["api-docs", "guides", "tools/config-recommender"]

# Crawlers explicitly allowed in robots.txt
AI_CRAWLERS = [
    "GPTBot", "OAI-SearchBot", "ChatGPT-User", "PerplexityBot", "ClaudeBot", "Google-Extended",
]
ROBOTS_DISALLOW = ["/admin", "/private", "/account", "/api/internal"]

# Hosted backend (edge functions)
SUPABASE_URL = os.environ.get("SUPABASE_URL", "").rstrip("/")
SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")
EDGE_PACKAGE_PATH = "/functions/v1/public-api/content/generate-package"
EDGE_README_PATH = "/functions/v1/data-api/content/sitewide"
EDGE_TIMEOUT = 30
EDGE_MAX_RETRIES = 3
EDGE_CONCURRENCY = 5
PACKAGE_CATEGORIES = ["mcp", "skills"]


def get_category_ids() -> list:
    return list(CATEGORY_REGISTRY.keys())


def get_category_config(category: str) -> dict:
    try:
        return CATEGORY_REGISTRY[category]
    except KeyError:
        raise ValueError(f"Unknown category: {category}") from None
