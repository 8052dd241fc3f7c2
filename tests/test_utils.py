"""Tests for content_pipeline.utils."""

import pytest


class TestSlugs:
    """Slug and title helpers."""

    def test_slugify_normalizes(self):
        """Names become lowercase hyphenated slugs."""
        from content_pipeline.utils import slugify

        assert slugify("Code Reviewer") == "code-reviewer"
        assert slugify("GitHub_MCP") == "github-mcp"
        assert slugify("  --Weird!!Name-- ") == "weird-name"

    def test_slugify_empty_is_unknown(self):
        """Empty or symbol-only input falls back to 'unknown'."""
        from content_pipeline.utils import slugify

        assert slugify("") == "unknown"
        assert slugify("!!!") == "unknown"

    def test_slugify_max_length(self):
        """Slugs are capped at 64 chars without a trailing hyphen."""
        from content_pipeline.utils import slugify

        slug = slugify("word " * 40)
        assert len(slug) <= 64
        assert not slug.endswith("-")

    def test_slug_from_filename(self):
        """Directory and .json extension are dropped."""
        from content_pipeline.utils import slug_from_filename

        assert slug_from_filename("tutorials/Foo_Bar.json") == "foo-bar"

    def test_slug_to_title(self):
        from content_pipeline.utils import slug_to_title

        assert slug_to_title("foo-bar") == "Foo Bar"

    def test_display_title_keeps_acronyms(self):
        """Known acronyms stay upper-case, mixed-case words are preserved."""
        from content_pipeline.utils import display_title

        assert display_title("mcp server for sql") == "MCP Server For SQL"
        assert display_title("GitHub api helper") == "GitHub API Helper"


class TestCodegenNames:
    """Variable and type names used in generated modules."""

    @pytest.mark.parametrize("category,var_name,singular", [
        ("agents", "agents", "Agent"),
        ("statuslines", "statuslines", "Statusline"),
        ("mcp", "mcp", "Mcp"),
    ])
    def test_names(self, category, var_name, singular):
        from content_pipeline.utils import capitalized_singular, to_var_name

        assert to_var_name(category) == var_name
        assert capitalized_singular(category) == singular

    def test_kebab_to_camel(self):
        from content_pipeline.utils import to_var_name

        assert to_var_name("use-cases") == "useCases"


class TestTextHelpers:
    """Hashing and atomic writes."""

    def test_hashes_are_stable(self):
        from content_pipeline.utils import short_hash

        assert short_hash("x") == short_hash("x")
        assert len(short_hash("x")) == 8

    def test_write_text_if_changed(self, tmp_path):
        """Identical content is not rewritten."""
        from content_pipeline.utils import write_text_if_changed

        path = tmp_path / "nested" / "out.txt"
        assert write_text_if_changed(path, "hello") is True
        assert write_text_if_changed(path, "hello") is False
        assert write_text_if_changed(path, "world") is True
        assert path.read_text() == "world"
        assert [p.name for p in path.parent.iterdir()] == ["out.txt"]
