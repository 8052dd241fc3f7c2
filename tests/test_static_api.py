"""Tests for static API generation."""

import json

import pytest


def sample_content():
    return {
        "agents": [
            {"slug": "code-reviewer", "title": "Code Reviewer", "description": "Reviews code",
             "tags": ["review", "quality"], "category": "agents"},
            {"slug": "backend-architect", "title": "Backend Architect", "description": "APIs",
             "tags": ["backend", "review"], "category": "agents"},
        ],
        "hooks": [
            {"slug": "validate-input", "title": "Validate Input", "description": "Validates",
             "tags": ["validation"], "category": "hooks"},
        ],
    }


class TestHelpers:
    """Pure transformation helpers."""

    def test_transform_content_adds_type_and_url(self):
        from content_pipeline.static_api import transform_content

        items = transform_content([{"slug": "x"}], "agent", "agents", "https://example.com")

        assert items == [{"slug": "x", "type": "agent", "url": "https://example.com/agents/x"}]

    def test_tag_summary(self):
        from content_pipeline.static_api import tag_summary

        tags, popular = tag_summary(sample_content()["agents"], 2)

        assert tags == ["backend", "quality", "review"]
        assert popular == [{"tag": "review", "count": 2}, {"tag": "backend", "count": 1}]

    def test_validate_response_rejects_bad_payload(self):
        from content_pipeline.static_api import StaticAPIError, validate_response

        with pytest.raises(StaticAPIError):
            validate_response("health", {"status": "on fire", "version": "1", "counts": {"total": 0}})


class TestGenerator:
    """StaticAPIGenerator output."""

    def make(self, tmp_path, content=None):
        from content_pipeline.static_api import StaticAPIGenerator

        return StaticAPIGenerator(
            sample_content() if content is None else content,
            output_dir=tmp_path / "static-api",
            base_url="https://example.com",
            cache_path=tmp_path / "hashes.json",
        )

    def test_writes_all_files(self, tmp_path):
        result = self.make(tmp_path).generate()
        out = tmp_path / "static-api"

        assert "agents.json" in result["written"]
        assert "search-indexes/combined.json" in result["written"]
        assert (out / "health.json").exists()

        agents = json.loads((out / "agents.json").read_text())
        assert agents["count"] == 2
        assert agents["agents"][0]["url"] == "https://example.com/agents/code-reviewer"
        assert "lastUpdated" in agents

        combined = json.loads((out / "search-indexes" / "combined.json").read_text())
        assert combined["count"] == 3

        health = json.loads((out / "health.json").read_text())
        assert health["counts"]["total"] == 3

    def test_guides_have_no_static_api(self, tmp_path):
        self.make(tmp_path).generate()

        assert not (tmp_path / "static-api" / "guides.json").exists()
        assert not (tmp_path / "static-api" / "changelog.json").exists()

    def test_unchanged_rerun_skips_everything(self, tmp_path):
        """Timestamps alone do not cause rewrites."""
        first = self.make(tmp_path).generate()
        second = self.make(tmp_path).generate()

        assert second["written"] == []
        assert sorted(second["skipped"]) == sorted(first["written"])

    def test_changed_category_rewrites_dependents_only(self, tmp_path):
        self.make(tmp_path).generate()
        content = sample_content()
        content["hooks"].append({"slug": "notify", "title": "Notify", "description": "d",
                                 "tags": [], "category": "hooks"})

        result = self.make(tmp_path, content).generate()

        assert "hooks.json" in result["written"]
        assert "agents.json" not in result["written"]
        assert "search-indexes/agents.json" not in result["written"]

    def test_force_rewrites(self, tmp_path):
        self.make(tmp_path).generate()
        result = self.make(tmp_path).generate(force=True)

        assert result["skipped"] == []
