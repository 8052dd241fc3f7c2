"""Tests for the incremental content build."""

from conftest import make_item, write_item


def make_builder(tmp_path, content_dir, changelog_path=None, **kwargs):
    from content_pipeline.content_builder import ContentBuilder

    return ContentBuilder(
        content_dir=content_dir,
        generated_dir=tmp_path / "generated",
        cache_dir=tmp_path / "cache",
        changelog_path=changelog_path or tmp_path / "missing-CHANGELOG.md",
        **kwargs,
    )


class TestContentBuilder:
    """End-to-end builds over a small content tree."""

    def test_first_build_writes_modules(self, tmp_path, content_dir, changelog_path):
        from content_pipeline.codegen import metadata_path, read_generated_array

        summary = make_builder(tmp_path, content_dir, changelog_path).run()
        generated = tmp_path / "generated"

        assert summary["failed"] == []
        assert summary["total_valid"] == 4
        assert summary["total_invalid"] == 1
        assert summary["content_stats"]["agents"] == 2
        assert summary["content_stats"]["hooks"] == 1
        assert summary["content_stats"]["skills"] == 0
        assert summary["content_stats"]["changelog"] == 2
        assert (generated / "content.ts").exists()
        assert (generated / "agents-full.ts").exists()

        metadata = read_generated_array(metadata_path(generated, "agents"))
        assert len(metadata) == 2

    def test_unchanged_rerun_writes_nothing(self, tmp_path, content_dir, changelog_path):
        """A second build over identical input rebuilds and rewrites nothing."""
        make_builder(tmp_path, content_dir, changelog_path).run()
        cache_file = tmp_path / "cache" / "build-cache.json"
        cache_before = cache_file.read_text()

        summary = make_builder(tmp_path, content_dir, changelog_path).run()

        assert summary["rebuilt"] == []
        assert summary["files_written"] == 0
        assert summary["content_stats"]["agents"] == 2
        assert cache_file.read_text() == cache_before

    def test_one_changed_file_rebuilds_one_category(self, tmp_path, content_dir, changelog_path):
        from content_pipeline.build_cache import BuildCache

        make_builder(tmp_path, content_dir, changelog_path).run()
        before = BuildCache(tmp_path / "cache")
        before.load()
        hashes_before = before.category_hashes()

        write_item(content_dir / "hooks", "notify.json", {
            "title": "Notify",
            "description": "Sends a desktop notification.",
            "author": "bob",
            "dateAdded": "2025-04-01",
            "tags": ["notification"],
            "hookType": "Notification",
        })
        summary = make_builder(tmp_path, content_dir, changelog_path).run()

        after = BuildCache(tmp_path / "cache")
        after.load()
        hashes_after = after.category_hashes()

        assert summary["rebuilt"] == ["hooks"]
        assert summary["content_stats"]["hooks"] == 2
        assert summary["content_stats"]["agents"] == 2
        changed = [c for c in hashes_after if hashes_after[c] != hashes_before.get(c)]
        assert changed == ["hooks"]

    def test_force_rebuilds_everything(self, tmp_path, content_dir):
        from content_pipeline.config import CATEGORY_REGISTRY

        make_builder(tmp_path, content_dir).run()
        summary = make_builder(tmp_path, content_dir, force=True).run()

        assert sorted(summary["rebuilt"]) == sorted(CATEGORY_REGISTRY)
        assert summary["files_written"] == 0

    def test_broken_changelog_falls_back_to_empty(self, tmp_path, content_dir):
        path = tmp_path / "CHANGELOG.md"
        path.write_text("## 2025-13-45 - Impossible Date\n- entry\n")

        summary = make_builder(tmp_path, content_dir, path, categories=["changelog"]).run()

        assert summary["content_stats"]["changelog"] == 0
        assert (tmp_path / "generated" / "changelog-metadata.ts").exists()

    def test_only_selected_categories(self, tmp_path, content_dir):
        summary = make_builder(tmp_path, content_dir, categories=["hooks"]).run()

        assert summary["rebuilt"] == ["hooks"]
        assert not (tmp_path / "generated" / "agents-metadata.ts").exists()
        assert summary["content_stats"]["agents"] == 0

    def test_invalid_content_counted_not_fatal(self, tmp_path):
        write_item(tmp_path / "content" / "agents", "ok.json", make_item())
        write_item(tmp_path / "content" / "agents", "bad.json", make_item(description="x"))

        summary = make_builder(tmp_path, tmp_path / "content", categories=["agents"]).run()

        assert summary["failed"] == []
        assert summary["total_valid"] == 1
        assert summary["total_invalid"] == 1
