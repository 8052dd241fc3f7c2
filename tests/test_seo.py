"""Tests for SEO page generation."""

import yaml

HOOK = {
    "slug": "validate-input",
    "title": "Validate Input",
    "description": "Validates tool input before execution.",
    "tags": ["pre-tool-use", "validation"],
    "hookType": "PreToolUse",
}


def frontmatter(text):
    _, block, _ = text.split("---\n", 2)
    return yaml.safe_load(block)


def hook_definitions():
    from content_pipeline.seo.generator import load_definitions

    return load_definitions()["hooks"]


class TestDefinitions:

    def test_every_definition_is_complete(self):
        from content_pipeline.seo.generator import load_definitions

        for category, definitions in load_definitions().items():
            for definition in definitions.get("collections", []):
                assert {"title", "description", "keyword", "tags"} <= set(definition), category
            for definition in definitions.get("workflows", []):
                assert definition["phases"], definition["title"]
                assert definition["match_terms"], definition["title"]


class TestCollectionPage:

    def test_matching_page(self):
        from content_pipeline.seo.generator import generate_collection_page

        definition = hook_definitions()["collections"][0]
        text = generate_collection_page(definition, [HOOK], "hooks", type_field="hookType",
                                        base_url="https://example.com", today="2025-10-20")
        meta = frontmatter(text)

        assert meta["title"] == "Pre-Tool Use Hooks - Claude Hooks"
        assert meta["dateUpdated"] == "2025-10-20"
        assert len(meta["keywords"]) <= 15
        assert set(meta["schemas"]) == {"article", "faq", "breadcrumb"}
        assert meta["schemas"]["article"]["url"] == "https://example.com/guides/collections/hooks-pre-tool"
        assert "[Validate Input](/hooks/validate-input)" in text
        assert "## Frequently Asked Questions" in text

    def test_zero_matches_returns_none(self):
        from content_pipeline.seo.generator import generate_collection_page

        definition = hook_definitions()["collections"][3]  # notifications
        assert generate_collection_page(definition, [HOOK], "hooks", type_field="hookType") is None
        assert generate_collection_page(definition, [], "hooks") is None

    def test_min_matches(self):
        from content_pipeline.seo.generator import generate_collection_page

        definition = hook_definitions()["collections"][0]
        assert generate_collection_page(definition, [HOOK], "hooks", min_matches=2) is None

    def test_keyword_in_description_matches(self):
        from content_pipeline.seo.generator import matching_collection_items

        definition = {"title": "Security", "keyword": "security", "tags": []}
        item = {"slug": "x", "title": "X", "description": "Adds security checks", "tags": []}

        assert matching_collection_items(definition, [item]) == [item]


class TestWorkflowGuide:

    def test_howto_schema(self):
        from content_pipeline.seo.generator import generate_workflow_guide

        definition = hook_definitions()["workflows"][0]
        text = generate_workflow_guide(definition, [HOOK], "hooks", type_field="hookType", today="2025-10-20")
        meta = frontmatter(text)

        steps = meta["schemas"]["howto"]["step"]
        assert meta["schemas"]["howto"]["@type"] == "HowTo"
        assert len(steps) == sum(len(p["steps"]) for p in definition["phases"])
        assert steps[0]["position"] == 1
        assert "### Phase 1: Pre-execution Validation" in text

    def test_no_match_returns_none(self):
        from content_pipeline.seo.generator import generate_workflow_guide

        definition = hook_definitions()["workflows"][1]  # session management
        assert generate_workflow_guide(definition, [HOOK], "hooks", type_field="hookType") is None


class TestCategoryPage:

    def test_bucket_page(self):
        from content_pipeline.seo.generator import generate_category_page

        definition = {"name": "data", "title": "Data", "tags": ["database"]}
        items = [{"slug": "postgres", "title": "Postgres", "description": "DB", "tags": ["database"]}]

        text = generate_category_page(definition, items, "mcp", today="2025-10-20")

        assert frontmatter(text)["title"] == "Best Claude MCP Servers for Data"
        assert generate_category_page(definition, [], "mcp") is None


class TestSEOGenerator:

    def test_run_over_content_tree(self, tmp_path, content_dir):
        """Only definitions with enough matching items produce pages."""
        from content_pipeline.seo.generator import SEOGenerator

        output = tmp_path / "guides"
        generated = SEOGenerator(content_dir, output_dir=output, today="2025-10-20").run()

        assert generated == 3
        assert (output / "collections" / "hooks-pre-tool.mdx").exists()
        assert (output / "workflows" / "hooks-complete-tool-validation-pipeline.mdx").exists()
        assert (output / "workflows" / "agents-full-stack-feature-delivery.mdx").exists()
        assert not (output / "collections" / "agents-review.mdx").exists()

    def test_rerun_is_stable(self, tmp_path, content_dir):
        from content_pipeline.seo.generator import SEOGenerator

        output = tmp_path / "guides"
        SEOGenerator(content_dir, output_dir=output, today="2025-10-20").run(["hooks"])
        page = output / "collections" / "hooks-pre-tool.mdx"
        first = page.read_text()
        mtime = page.stat().st_mtime_ns

        SEOGenerator(content_dir, output_dir=output, today="2025-10-20").run(["hooks"])

        assert page.read_text() == first
        assert page.stat().st_mtime_ns == mtime

    def test_unknown_category_skipped(self, tmp_path, content_dir):
        from content_pipeline.seo.generator import SEOGenerator

        assert SEOGenerator(content_dir, output_dir=tmp_path).run(["skills"]) == 0
