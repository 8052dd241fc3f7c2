"""Tests for description, keyword and MDX structure checks."""

import pytest

GOOD_DESCRIPTION = "D" * 155

PAGE = """---
title: Setting Up Hooks
description: {description}
keywords: [hooks, setup, claude]
---
# Setting Up Hooks

Intro text.

```bash
# a shell comment, not a heading
echo ok
```

## Next Steps
"""


def write_guide(root, relative, text):
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestDescriptionAndKeywords:

    @pytest.mark.parametrize("length,failed", [(149, True), (150, False), (160, False), (161, True)])
    def test_description_length(self, length, failed):
        from content_pipeline.seo_validation import description_issues

        assert bool(description_issues("d" * length)) is failed

    def test_missing_and_placeholder_descriptions_fail(self):
        from content_pipeline.seo_validation import description_issues

        assert description_issues(None) == [("fail", "Description is missing")]
        messages = [m for _, m in description_issues("TODO " + "x" * 150)]
        assert "Description contains placeholder text" in messages

    def test_keyword_problems_are_warnings(self):
        from content_pipeline.seo_validation import keyword_issues

        assert keyword_issues(["a", "b", "c"]) == []
        assert keyword_issues(["a"]) == [("warn", "Too few keywords (1)")]
        assert keyword_issues([f"k{i}" for i in range(11)]) == [("warn", "Too many keywords (11)")]
        issues = keyword_issues(["a", "b", "x" * 31])
        assert [status for status, _ in issues] == ["warn"]
        assert "Keyword too long" in issues[0][1]


class TestMdxStructure:

    def test_single_h1_outside_code_blocks(self):
        from content_pipeline.seo_validation import analyze_mdx, structure_issues

        analysis = analyze_mdx(PAGE.format(description=GOOD_DESCRIPTION))

        assert analysis["h1_lines"] == [6]
        assert structure_issues(analysis) == []

    def test_missing_and_multiple_h1(self):
        from content_pipeline.seo_validation import analyze_mdx, structure_issues

        missing = analyze_mdx("---\ntitle: X\n---\n## Only H2\n")
        multiple = analyze_mdx("# One\n\n# Two\n")

        assert structure_issues(missing) == [("fail", "No H1 heading found")]
        assert structure_issues(multiple)[0][1].startswith("Multiple H1 headings (2)")

    def test_h1_inside_code_prop_ignored(self):
        from content_pipeline.seo_validation import analyze_mdx

        text = "# Title\n\n<CodeBlock code={`\n# not a heading\nrun\n`} />\n"

        assert analyze_mdx(text)["h1_lines"] == [1]

    def test_duplicate_faq_page_schema(self):
        from content_pipeline.seo_validation import analyze_mdx, structure_issues

        text = (
            "---\nschemas:\n  faq:\n    '@type': FAQPage\n---\n# Title\n\n"
            '<div itemScope itemType="https://schema.org/FAQPage">\n'
        )
        analysis = analyze_mdx(text)

        assert analysis["faq_page_count"] == 2
        assert structure_issues(analysis) == [("fail", "Multiple FAQPage schemas (2)")]

    def test_generated_collection_page_passes_structure(self):
        from content_pipeline.seo.generator import generate_collection_page, load_definitions
        from content_pipeline.seo_validation import analyze_mdx, structure_issues

        hook = {
            "slug": "validate-input",
            "title": "Validate Input",
            "description": "Validates tool input before execution.",
            "tags": ["pre-tool-use", "validation"],
            "hookType": "PreToolUse",
        }
        definition = load_definitions()["hooks"]["collections"][0]
        text = generate_collection_page(definition, [hook], "hooks", type_field="hookType")
        analysis = analyze_mdx(text)

        assert len(analysis["h1_lines"]) == 1
        assert analysis["faq_page_count"] == 1
        assert structure_issues(analysis) == []


class TestSEOValidator:

    def test_content_and_guides(self, tmp_path):
        from content_pipeline.seo_validation import SEOValidator

        metadata = {
            "agents": [
                {"slug": "good", "description": GOOD_DESCRIPTION},
                {"slug": "short", "description": "Too short."},
            ],
        }
        write_guide(tmp_path, "tutorials/setup.mdx", PAGE.format(description=GOOD_DESCRIPTION))
        write_guide(tmp_path, "collections/broken.mdx", "---\ntitle: X\n---\nNo heading\n")

        collector = SEOValidator(metadata, guides_dir=tmp_path).run()
        failing = sorted((r["route"], r["check"]) for r in collector.failures)

        assert failing == [
            ("/agents/short", "description"),
            ("/guides/collections/broken", "description"),
            ("/guides/collections/broken", "structure"),
        ]
        assert all(r["status"] == "pass" for r in collector.results if r["route"] == "/guides/tutorials/setup")

    def test_quick_mode_stops_at_first_failure(self, tmp_path):
        from content_pipeline.seo_validation import SEOValidator

        metadata = {"agents": [{"slug": "a", "description": "short"}, {"slug": "b", "description": "short"}]}
        collector = SEOValidator(metadata, quick=True).run()

        assert len(collector.failures) == 1
        assert collector.results[-1]["route"] == "/agents/a"
