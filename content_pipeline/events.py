"""
Analytics event taxonomy
Derives event names from the category registry and renders generated/events.ts
"""

import json

from .config import CATEGORY_REGISTRY

# Per-category event families: (key prefix, config category, description template)
CATEGORY_EVENT_FAMILIES = [
    ("CONTENT_VIEW", "CONTENT", "User views {name} detail page"),
    ("RELATED_CLICK_FROM", "CONTENT", "User clicks related content from {name} detail page"),
    ("RELATED_VIEW_ON", "CONTENT", "Related content viewed on {name} detail page"),
    ("SEARCH", "INTERACTION", "User searches within {name} section"),
    ("COPY_CODE", "INTERACTION", "User copies code from {name} detail page"),
    ("COPY_MARKDOWN", "INTERACTION", "User copies {name} as markdown"),
    ("DOWNLOAD_MARKDOWN", "INTERACTION", "User downloads {name} as markdown file"),
]

# Static events: (key, description, category, sample rate)
STATIC_EVENTS = [
    ("RELATED_CONTENT_IMPRESSION", "Related content items shown to user", "CONTENT", 0.5),
    ("CAROUSEL_NAVIGATION", "User navigates carousel", "CONTENT", None),
    ("CONTENT_JOURNEY", "User navigates between content", "JOURNEY", None),
    ("SESSION_START", "New user session starts", "JOURNEY", None),
    ("SESSION_DEPTH", "Session engagement metrics", "JOURNEY", None),
    ("PERFORMANCE_METRIC", "Performance measurement (Core Web Vitals)", "PERFORMANCE", 0.2),
    ("CACHE_PERFORMANCE", "Cache hit/miss metrics", "PERFORMANCE", 0.1),
    ("API_LATENCY", "API response times", "PERFORMANCE", 0.1),
    ("PAGE_LOAD_TIME", "Page load performance", "PERFORMANCE", None),
    ("ALGORITHM_PERFORMANCE", "Content algorithm effectiveness", "CONTENT", None),
    ("SEARCH_GLOBAL", "User performs global search across all content types", "INTERACTION", None),
    ("FILTER_APPLIED", "User applies filter", "NAVIGATION", None),
    ("DOWNLOAD_RESOURCE", "User downloads resource", "INTERACTION", None),
    ("SHARE_CONTENT", "User shares content", "INTERACTION", None),
    ("FEEDBACK_SUBMITTED", "User submits feedback", "INTERACTION", None),
    ("EMAIL_MODAL_SHOWN", "Email capture modal displayed to user", "INTERACTION", None),
    ("EMAIL_MODAL_DISMISSED", "User dismissed email capture modal", "INTERACTION", None),
    ("EMAIL_SUBSCRIBED_FOOTER", "User subscribed via sticky footer bar", "INTERACTION", None),
    ("EMAIL_SUBSCRIBED_INLINE", "User subscribed via inline CTA", "INTERACTION", None),
    ("EMAIL_SUBSCRIBED_POST_COPY", "User subscribed via post-copy modal", "INTERACTION", None),
    ("EMAIL_SUBSCRIBED_HOMEPAGE", "User subscribed from homepage", "INTERACTION", None),
    ("EMAIL_SUBSCRIBED_MODAL", "User subscribed via modal", "INTERACTION", None),
    ("EMAIL_SUBSCRIBED_CONTENT_PAGE", "User subscribed from content detail page", "INTERACTION", None),
    ("PWA_INSTALLABLE", "PWA install prompt available to user", "INTERACTION", None),
    ("PWA_PROMPT_ACCEPTED", "User accepted PWA install prompt", "INTERACTION", None),
    ("PWA_PROMPT_DISMISSED", "User dismissed PWA install prompt", "INTERACTION", None),
    ("PWA_INSTALLED", "PWA successfully installed to home screen", "INTERACTION", None),
    ("PWA_LAUNCHED", "App launched in standalone mode (from home screen)", "INTERACTION", None),
    ("ERROR_OCCURRED", "Error occurred", "ERROR", None),
    ("NOT_FOUND", "404 page accessed", "ERROR", None),
    ("API_ERROR", "API error occurred", "ERROR", None),
    ("MCP_INSTALLED", "MCP server installed", "FEATURE", None),
    ("AGENT_ACTIVATED", "Agent activated", "FEATURE", None),
    ("COMMAND_EXECUTED", "Command executed", "FEATURE", None),
    ("RULE_APPLIED", "Rule applied", "FEATURE", None),
    ("HOOK_TRIGGERED", "Hook triggered", "FEATURE", None),
    ("TAB_SWITCHED", "Tab switched", "NAVIGATION", None),
    ("FILTER_TOGGLED", "Filter toggled", "NAVIGATION", None),
    ("SORT_CHANGED", "Sort order changed", "NAVIGATION", None),
    ("PAGINATION_CLICKED", "Pagination used", "NAVIGATION", None),
    ("PERSONALIZATION_AFFINITY_CALCULATED", "User affinity score calculated", "PERSONALIZATION", 0.1),
    ("PERSONALIZATION_RECOMMENDATION_SHOWN", "Personalized recommendation displayed", "PERSONALIZATION", None),
    ("PERSONALIZATION_RECOMMENDATION_CLICKED", "User clicked personalized recommendation", "PERSONALIZATION", None),
    ("PERSONALIZATION_SIMILAR_CONFIG_CLICKED", "User clicked similar config suggestion", "PERSONALIZATION", None),
    ("PERSONALIZATION_FOR_YOU_VIEWED", "User viewed For You feed", "PERSONALIZATION", None),
    ("PERSONALIZATION_USAGE_RECOMMENDATION_SHOWN", "Usage-based recommendation displayed", "PERSONALIZATION", None),
]

EVENT_CATEGORIES = [
    "CONTENT", "JOURNEY", "PERFORMANCE", "INTERACTION", "ERROR", "FEATURE", "NAVIGATION", "PERSONALIZATION",
]


def category_suffix(category: str) -> str:
    """Singular event suffix: agents -> agent, statuslines -> statusline, mcp -> mcp"""
    if category == "statuslines":
        return "statusline"
    if category == "mcp":
        return "mcp"
    return category[:-1] if category.endswith("s") else category


def build_event_taxonomy(categories=None) -> dict:
    """
    Event key -> {name, description, category, enabled[, sampleRate]}.

    Search events use the full category id (SEARCH_AGENTS); every other
    family uses the singular suffix (CONTENT_VIEW_AGENT).
    """
    categories = categories or list(CATEGORY_REGISTRY.keys())
    events = {}

    for prefix, event_category, template in CATEGORY_EVENT_FAMILIES:
        for category in categories:
            if prefix == "SEARCH":
                suffix = category
            else:
                suffix = category_suffix(category)
            key = f"{prefix}_{suffix.upper()}"
            display_name = CATEGORY_REGISTRY[category]["display_name"]
            events[key] = {
                "name": f"{prefix.lower()}_{suffix}",
                "description": template.format(name=display_name),
                "category": event_category,
                "enabled": True,
            }

    for key, description, event_category, sample_rate in STATIC_EVENTS:
        config = {
            "name": key.lower(),
            "description": description,
            "category": event_category,
            "enabled": True,
        }
        if sample_rate is not None:
            config["sampleRate"] = sample_rate
        events[key] = config

    return events


def render_events_module(events: dict) -> str:
    """TypeScript module with EVENTS, EventName and a lazy getEventConfig()"""
    event_lines = "\n".join(f"  {key}: '{config['name']}'," for key, config in events.items())

    configs = {}
    for config in events.values():
        entry = {k: v for k, v in config.items() if k != "name"}
        configs[config["name"]] = entry
    config_json = json.dumps(configs, indent=2, ensure_ascii=False)
    category_union = " | ".join(f"'{c}'" for c in EVENT_CATEGORIES)

    return f"""/**
 * Auto-generated analytics events
 *
 * DO NOT EDIT MANUALLY
 * @see scripts/generate_events.py
 */

export const EVENTS = {{
{event_lines}
}} as const;

export type EventName = (typeof EVENTS)[keyof typeof EVENTS];

export interface EventConfig {{
  description: string;
  category: {category_union};
  enabled: boolean;
  sampleRate?: number;
  debugOnly?: boolean;
}}

let _eventConfigCache: Record<EventName, EventConfig> | null = null;

function buildEventConfig(): Record<EventName, EventConfig> {{
  return {config_json} as Record<EventName, EventConfig>;
}}

export function getEventConfig(): Record<EventName, EventConfig> {{
  if (!_eventConfigCache) {{
    _eventConfigCache = buildEventConfig();
  }}
  return _eventConfigCache;
}}
"""
