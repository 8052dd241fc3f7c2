"""Tests for the analytics event taxonomy."""


class TestEventTaxonomy:

    def test_category_events(self):
        from content_pipeline.events import build_event_taxonomy

        events = build_event_taxonomy(["agents", "mcp", "statuslines"])

        assert events["CONTENT_VIEW_AGENT"]["name"] == "content_view_agent"
        assert events["CONTENT_VIEW_MCP"]["description"] == "User views MCP server detail page"
        assert events["COPY_CODE_STATUSLINE"]["category"] == "INTERACTION"
        assert events["SEARCH_AGENTS"]["name"] == "search_agents"

    def test_every_registry_category_covered(self):
        from content_pipeline.config import CATEGORY_REGISTRY
        from content_pipeline.events import CATEGORY_EVENT_FAMILIES, STATIC_EVENTS, build_event_taxonomy

        events = build_event_taxonomy()

        assert len(events) == len(CATEGORY_EVENT_FAMILIES) * len(CATEGORY_REGISTRY) + len(STATIC_EVENTS)

    def test_sample_rates(self):
        from content_pipeline.events import build_event_taxonomy

        events = build_event_taxonomy(["agents"])

        assert events["PERFORMANCE_METRIC"]["sampleRate"] == 0.2
        assert "sampleRate" not in events["SESSION_START"]

    def test_names_lowercase_and_unique(self):
        from content_pipeline.events import build_event_taxonomy

        names = [e["name"] for e in build_event_taxonomy().values()]

        assert all(name == name.lower() for name in names)
        assert len(names) == len(set(names))

    def test_render_module(self):
        from content_pipeline.events import build_event_taxonomy, render_events_module

        text = render_events_module(build_event_taxonomy(["hooks"]))

        assert "CONTENT_VIEW_HOOK: 'content_view_hook'," in text
        assert "} as const;" in text
        assert '"content_view_hook": {' in text
        assert "export function getEventConfig()" in text
