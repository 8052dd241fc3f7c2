"""Tests for CHANGELOG.md parsing."""

import pytest


class TestParseChangelog:
    """Entry extraction."""

    def test_entries_newest_first(self, changelog_path):
        from content_pipeline.changelog import parse_changelog

        entries = parse_changelog(changelog_path.read_text())

        assert [e["slug"] for e in entries] == ["2025-10-18-faster-builds", "2025-09-01-version-1-1-0"]
        assert entries[1]["title"] == "Version 1.1.0"

    def test_tldr_and_categories(self, changelog_path):
        from content_pipeline.changelog import parse_changelog

        entry = parse_changelog(changelog_path.read_text())[0]

        assert entry["tldr"] == "Incremental builds skip unchanged categories."
        assert [i["content"] for i in entry["categories"]["Added"]] == [
            "Build cache for content categories",
            "Static API hashing so unchanged files are not rewritten",
        ]
        assert len(entry["categories"]["Fixed"]) == 1
        assert entry["categories"]["Removed"] == []

    def test_duplicate_slugs_get_suffix(self):
        from content_pipeline.changelog import parse_changelog

        text = "## 2025-01-01 - Fixes\n- a\n\n## 2025-01-01 - Fixes\n- b\n"
        slugs = sorted(e["slug"] for e in parse_changelog(text))

        assert slugs == ["2025-01-01-fixes", "2025-01-01-fixes-2"]

    def test_undated_headings_ignored(self):
        from content_pipeline.changelog import parse_changelog

        assert parse_changelog("## Unreleased\n- work in progress\n") == []

    def test_invalid_date_raises(self):
        from content_pipeline.changelog import parse_changelog

        with pytest.raises(ValueError):
            parse_changelog("## 2025-02-30 - Nope\n")


class TestRecords:
    """Metadata and guide-compatible records."""

    def test_metadata_uses_tldr(self, changelog_path):
        from content_pipeline.changelog import parse_changelog, to_metadata

        entries = parse_changelog(changelog_path.read_text())

        assert to_metadata(entries[0])["description"] == "Incremental builds skip unchanged categories."
        assert to_metadata(entries[1])["description"] == "Version 1.1.0"

    def test_full_content_sections(self, changelog_path):
        from content_pipeline.changelog import parse_changelog, to_full_content

        record = to_full_content(parse_changelog(changelog_path.read_text())[0])
        types = [s["type"] for s in record["sections"]]

        assert record["category"] == "guides"
        assert record["dateAdded"] == "2025-10-18"
        assert types == ["callout", "heading", "text", "heading", "text"]
        assert record["sections"][1]["content"] == "✨ Added"
