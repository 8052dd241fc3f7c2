"""
Reusable MDX content sections for SEO pages
"""

from .seo_utils import generate_internal_links, generate_standard_faqs


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def intro_section(config: dict) -> str:
    title = config["title"]
    category = config["category"]
    keyword = config["keyword"]
    return f"""\
# {title}

{config['description']}

This guide collects the {category} from the directory that help with {keyword}, explains when to
use each one and shows how to set them up.

## Table of Contents
- [Quick Recommendations](#quick-recommendations)
- [Setup Guide](#setup-guide)
- [Troubleshooting](#troubleshooting)
- [Frequently Asked Questions](#frequently-asked-questions)

## Why {_capitalize(category)} Matter for {title}

- **Domain focus**: guidance tuned to {keyword}
- **Consistent output**: the same conventions in every session
- **Less setup**: skip repeating context at the start of each conversation

## Quick Recommendations"""


def setup_guide_section(config: dict) -> str:
    category = config["category"]
    return f"""\
## Setup Guide

1. Open the detail page of the {category} you want to use and copy its configuration.
2. Add it to your Claude Code settings (`.claude/` in your project) or Claude Desktop configuration.
3. Restart the session so the configuration is loaded.
4. Test with a small {config['keyword']} task before relying on it."""


def code_examples_section(config: dict) -> str:
    category = config["category"]
    examples = config.get("examples", [])
    lines = ["## Examples", ""]
    for example in examples:
        lines.append(f"### {example['title']}")
        lines.append(example["description"])
        lines.append("")
        lines.append("```text")
        lines.append(example["prompt"])
        lines.append("```")
        lines.append("")
    if not examples:
        lines.append(f"See the individual {category} pages for configuration examples.")
    return "\n".join(lines).rstrip()


def troubleshooting_section(config: dict) -> str:
    category = config["category"]
    keyword = config["keyword"]
    return f"""\
## Troubleshooting

#### {_capitalize(category)} not activating
Load the configuration at the start of a session, not mid-conversation, and restart Claude
Desktop after editing its configuration file.

#### Generic responses despite configuration
Check the configuration for JSON syntax errors and make sure it was saved in the right location.

#### Conflicts between {category}
Review overlapping instructions and keep only the {category} relevant to your {keyword} work."""


def faq_section(config: dict, custom_faqs: list = None) -> str:
    faqs = generate_standard_faqs(config) + list(custom_faqs or [])
    blocks = [f"### {faq['question']}\n{faq['answer']}" for faq in faqs]
    return "## Frequently Asked Questions\n\n" + "\n\n".join(blocks)


def internal_resources_section(config: dict) -> str:
    links = generate_internal_links(config)

    def render(group):
        return "\n".join(f"- **[{link['title']}]({link['url']})** - {link['description']}" for link in group)

    sections = ["## Internal Resources & Next Steps", "", "### Essential Reading", render(links["essential"])]
    if links["related"]:
        sections += ["", "### Related Categories", render(links["related"])]
    sections += ["", "### Community", render(links["community"])]
    return "\n".join(sections)


def item_list_section(heading: str, items: list, category: str) -> str:
    lines = [f"## {heading}", ""]
    for index, item in enumerate(items, 1):
        title = item.get("title") or item["slug"]
        lines.append(f"### {index}. [{title}](/{category}/{item['slug']})")
        lines.append(item.get("description", ""))
        if item.get("tags"):
            lines.append("")
            lines.append(f"**Tags:** {', '.join(item['tags'])}")
        lines.append("")
    return "\n".join(lines).rstrip()
