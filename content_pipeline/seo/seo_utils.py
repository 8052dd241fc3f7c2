"""
SEO helpers shared by the page generators: keywords, JSON-LD schemas,
FAQs, internal links and MDX frontmatter.
"""

import yaml

from ..config import SITE_NAME, SITE_URL


def generate_long_tail_keywords(config: dict, limit: int = 15) -> list:
    """Keyword phrases derived from the page keyword, category and tags"""
    keyword = config["keyword"].lower()
    category = config["category"]
    candidates = [
        f"claude {keyword}",
        f"claude {category} for {keyword}",
        f"best claude {category} {keyword}",
        f"{keyword} {category}",
        f"claude code {keyword}",
        f"{keyword} automation with claude",
        f"how to use claude for {keyword}",
        f"{config['title'].lower()}",
    ]
    candidates += [f"claude {tag.replace('-', ' ')}" for tag in config.get("tags", [])]

    keywords = []
    for phrase in candidates:
        phrase = " ".join(phrase.split())
        if phrase not in keywords:
            keywords.append(phrase)
    return keywords[:limit]


def generate_standard_faqs(config: dict) -> list:
    category = config["category"]
    keyword = config["keyword"]
    return [
        {
            "question": f"What are Claude {category} and why do they matter?",
            "answer": (
                f"Claude {category} are reusable configurations that tailor Claude to tasks like "
                f"{keyword}. They set context and expectations up front so responses stay consistent."
            ),
        },
        {
            "question": f"How long does it take to set up Claude {category} for {keyword}?",
            "answer": (
                "Most setups take a few minutes: copy the configuration from the directory and add it "
                "to your Claude Code or Claude Desktop settings."
            ),
        },
        {
            "question": f"Can I use multiple {keyword} {category} together?",
            "answer": (
                f"Yes. Complementary {category} can be combined; keep the set small and avoid "
                "overlapping instructions."
            ),
        },
    ]


def create_article_schema(page: dict, keywords: list, date_updated: str) -> dict:
    return {
        "@context": "https://schema.org",
        "@type": "Article",
        "headline": page["title"],
        "description": page["description"],
        "url": page["url"],
        "keywords": ", ".join(keywords),
        "dateModified": date_updated,
        "wordCount": page.get("word_count", 0),
        "author": {"@type": "Organization", "name": SITE_NAME, "url": SITE_URL},
        "publisher": {"@type": "Organization", "name": SITE_NAME, "url": SITE_URL},
        "about": page["keyword"],
    }


def create_faq_schema(faqs: list) -> dict:
    return {
        "@context": "https://schema.org",
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": faq["question"],
                "acceptedAnswer": {"@type": "Answer", "text": faq["answer"]},
            }
            for faq in faqs
        ],
    }


def create_breadcrumb_schema(items: list) -> dict:
    """items: list of (name, url)"""
    return {
        "@context": "https://schema.org",
        "@type": "BreadcrumbList",
        "itemListElement": [
            {"@type": "ListItem", "position": i, "name": name, "item": url}
            for i, (name, url) in enumerate(items, 1)
        ],
    }


def create_howto_schema(name: str, description: str, steps: list) -> dict:
    """steps: list of {name, text, url}"""
    return {
        "@context": "https://schema.org",
        "@type": "HowTo",
        "name": name,
        "description": description,
        "step": [
            {"@type": "HowToStep", "position": i, **step}
            for i, step in enumerate(steps, 1)
        ],
    }


def generate_internal_links(config: dict) -> dict:
    category = config["category"]
    related = config.get("related_categories", [])
    return {
        "essential": [
            {
                "title": f"Browse all {category}",
                "url": f"/{category}",
                "description": f"Every {category} configuration in the directory",
            },
            {
                "title": "Tutorial guides",
                "url": "/guides/tutorials",
                "description": "Step-by-step setup walkthroughs",
            },
        ],
        "related": [
            {
                "title": name.title(),
                "url": f"/{name}",
                "description": f"Pair {category} with {name}",
            }
            for name in related
        ],
        "community": [
            {"title": "Submit a configuration", "url": "/submit", "description": "Share your own setup"},
            {"title": "Community", "url": "/community", "description": "Discuss and get help"},
        ],
    }


def render_frontmatter(data: dict) -> str:
    """YAML frontmatter block for an MDX page"""
    body = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False, width=1000)
    return f"---\n{body}---\n"
