"""Tests for in-memory content search."""

import pytest

ITEMS = [
    {"slug": "code-reviewer", "title": "Code Reviewer", "description": "Reviews pull requests",
     "tags": ["review", "quality"], "category": "agents", "author": "alice", "dateAdded": "2025-01-01"},
    {"slug": "postgres-mcp", "title": "Postgres MCP", "description": "Query databases from Claude",
     "tags": ["database", "sql"], "category": "mcp", "author": "bob", "dateAdded": "2025-03-01"},
    {"slug": "review-hook", "title": "Review Hook", "description": "Runs a review after edits",
     "tags": ["review"], "category": "hooks", "author": "alice", "dateAdded": "2025-02-01"},
]


class TestScoring:
    """Relevance scoring."""

    def test_exact_title_beats_partial(self):
        from content_pipeline.search import score_item

        assert score_item(ITEMS[0], "code reviewer") > score_item(ITEMS[2], "code reviewer")

    def test_all_tokens_must_match(self):
        from content_pipeline.search import score_item

        assert score_item(ITEMS[1], "postgres kubernetes") == 0

    def test_fuzzy_title_fallback(self):
        from content_pipeline.search import FUZZY_TITLE, fuzzy_match, score_item

        assert fuzzy_match("pgmcp", "postgres mcp")
        assert score_item(ITEMS[1], "pgmcp") == FUZZY_TITLE

    def test_empty_query_scores_zero(self):
        from content_pipeline.search import score_item

        assert score_item(ITEMS[0], "  ") == 0


class TestSearchContent:
    """Filtering and sorting."""

    def test_query_ranks_results(self):
        from content_pipeline.search import search_content

        results = search_content(ITEMS, "review")

        assert [r["slug"] for r in results] == ["code-reviewer", "review-hook"]

    def test_filters(self):
        from content_pipeline.search import search_content

        assert [r["slug"] for r in search_content(ITEMS, category="mcp")] == ["postgres-mcp"]
        assert len(search_content(ITEMS, author="ALICE")) == 2
        assert [r["slug"] for r in search_content(ITEMS, tags=["review", "quality"])] == ["code-reviewer"]

    def test_sort_newest_and_limit(self):
        from content_pipeline.search import search_content

        results = search_content(ITEMS, sort="newest", limit=2)

        assert [r["slug"] for r in results] == ["postgres-mcp", "review-hook"]

    def test_sort_alphabetical(self):
        from content_pipeline.search import search_content

        results = search_content(ITEMS, sort="alphabetical")

        assert [r["title"] for r in results] == ["Code Reviewer", "Postgres MCP", "Review Hook"]

    def test_unknown_sort(self):
        from content_pipeline.search import search_content

        with pytest.raises(ValueError):
            search_content(ITEMS, sort="random")
