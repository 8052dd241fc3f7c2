"""
In-memory search over content metadata
Linear scans with substring, token and fuzzy matching
"""

import re
from typing import Optional

SORT_OPTIONS = ("relevance", "newest", "alphabetical")

# Field weights
TITLE_EXACT = 100
TITLE_PHRASE = 50
TITLE_TOKEN = 10
TAG_EXACT = 8
TAG_PARTIAL = 4
SLUG_TOKEN = 3
DESCRIPTION_TOKEN = 2
FUZZY_TITLE = 1


def tokenize(text: str) -> list:
    return [t for t in re.split(r'[\s,]+', text.lower().strip()) if t]


def fuzzy_match(query: str, text: str) -> bool:
    """True when the query's characters appear in order within text"""
    query = query.lower().replace(" ", "")
    if not query:
        return True
    it = iter(text.lower())
    return all(char in it for char in query)


def score_item(item: dict, query: str) -> int:
    """
    Relevance score of an item for a query. 0 means no match.

    Every query token must appear in some field; failing that, a fuzzy
    subsequence match on the title still counts with the lowest weight.
    """
    query = query.lower().strip()
    if not query:
        return 0

    title = str(item.get("title") or "").lower()
    description = str(item.get("description") or "").lower()
    slug = str(item.get("slug") or "").lower()
    tags = [str(t).lower() for t in item.get("tags") or []]

    score = 0
    if title == query:
        score += TITLE_EXACT
    elif query in title:
        score += TITLE_PHRASE

    for token in tokenize(query):
        token_score = 0
        if token in title:
            token_score += TITLE_TOKEN
        if token in tags:
            token_score += TAG_EXACT
        elif any(token in tag for tag in tags):
            token_score += TAG_PARTIAL
        if token in slug:
            token_score += SLUG_TOKEN
        if token in description:
            token_score += DESCRIPTION_TOKEN
        if not token_score:
            return FUZZY_TITLE if fuzzy_match(query, title) else 0
        score += token_score

    return score


def matches_filters(
    item: dict,
    category: Optional[str] = None,
    tags: Optional[list] = None,
    author: Optional[str] = None,
) -> bool:
    if category and item.get("category") != category:
        return False
    if author and str(item.get("author") or "").lower() != author.lower():
        return False
    if tags:
        item_tags = {str(t).lower() for t in item.get("tags") or []}
        if not all(tag.lower() in item_tags for tag in tags):
            return False
    return True


def search_content(
    items: list,
    query: str = "",
    category: Optional[str] = None,
    tags: Optional[list] = None,
    author: Optional[str] = None,
    sort: str = "relevance",
    limit: Optional[int] = None,
) -> list:
    """
    Filter and rank metadata items.

    Args:
        items: Metadata dicts (title, description, tags, slug, category, ...)
        query: Free-text query; empty matches everything
        category: Only items of this category
        tags: Items must carry all of these tags
        author: Case-insensitive author filter
        sort: relevance, newest or alphabetical
        limit: Maximum number of results

    Returns:
        Matching items, sorted
    """
    if sort not in SORT_OPTIONS:
        raise ValueError(f"Unknown sort: {sort} (expected one of {', '.join(SORT_OPTIONS)})")

    scored = []
    for item in items:
        if not matches_filters(item, category, tags, author):
            continue
        score = score_item(item, query) if query.strip() else 0
        if query.strip() and not score:
            continue
        scored.append((score, item))

    def title_key(item):
        return str(item.get("title") or item.get("slug") or "").lower()

    if sort == "relevance":
        scored.sort(key=lambda pair: (-pair[0], title_key(pair[1])))
    elif sort == "newest":
        scored.sort(key=lambda pair: title_key(pair[1]))
        scored.sort(key=lambda pair: str(pair[1].get("dateAdded") or ""), reverse=True)
    else:
        scored.sort(key=lambda pair: title_key(pair[1]))

    results = [item for _, item in scored]
    return results[:limit] if limit is not None else results
