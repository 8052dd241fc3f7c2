"""Tests for the edge function client. HTTP is stubbed."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer


def response(status, payload=None):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = status < 400
    resp.content = b"{}" if payload is not None else b""
    resp.json.return_value = payload
    resp.text = "error body"
    return resp


def make_client():
    from content_pipeline.edge_client import EdgeClient

    return EdgeClient(base_url="https://project.supabase.co/", api_key="service-key", backoff=0)


class TestEdgeClient:

    def test_requires_configuration(self):
        from content_pipeline.edge_client import EdgeClient

        with pytest.raises(ValueError):
            EdgeClient(base_url="", api_key="")

    def test_bearer_auth(self):
        client = make_client()

        assert client.session.headers["Authorization"] == "Bearer service-key"
        assert client.base_url == "https://project.supabase.co"

    def test_generate_package(self):
        from content_pipeline.config import EDGE_PACKAGE_PATH

        client = make_client()
        with patch.object(client.session, "request", return_value=response(200, {"ok": True})) as request:
            assert client.generate_package("mcp", "postgres") == {"ok": True}

        method, url = request.call_args[0]
        assert method == "POST"
        assert url == f"https://project.supabase.co{EDGE_PACKAGE_PATH}"
        assert request.call_args[1]["json"] == {"category": "mcp", "slug": "postgres"}

    def test_retries_rate_limit_then_succeeds(self):
        client = make_client()
        with patch.object(client.session, "request", side_effect=[response(429), response(200, {"ok": 1})]) as request:
            assert client.generate_package("mcp", "x") == {"ok": 1}
        assert request.call_count == 2

    def test_gives_up_after_retries(self):
        from content_pipeline.edge_client import EdgeFunctionError

        client = make_client()
        with patch.object(client.session, "request", return_value=response(503)) as request:
            with pytest.raises(EdgeFunctionError) as exc:
                client.generate_package("mcp", "x")
        assert request.call_count == client.retries
        assert exc.value.status == 503

    def test_client_error_not_retried(self):
        from content_pipeline.edge_client import EdgeFunctionError

        client = make_client()
        with patch.object(client.session, "request", return_value=response(404, {})) as request:
            with pytest.raises(EdgeFunctionError):
                client.generate_package("mcp", "missing")
        assert request.call_count == 1

    def test_generate_readme(self):
        from content_pipeline.edge_client import EdgeFunctionError

        client = make_client()
        with patch.object(client.session, "request", return_value=response(200, {"readme": "# Directory"})):
            assert client.generate_readme() == "# Directory"
        with patch.object(client.session, "request", return_value=response(200, {})):
            with pytest.raises(EdgeFunctionError):
                client.generate_readme()


class TestGeneratePackages:

    ITEMS = [
        {"category": "mcp", "slug": "postgres", "title": "Postgres"},
        {"category": "skills", "slug": "pdf", "title": "PDF"},
    ]

    @pytest.mark.asyncio
    async def test_unchanged_packages_skipped(self, tmp_path):
        client = make_client()
        cache_path = tmp_path / "package-hashes.json"

        with patch.object(client, "_post_package", new=AsyncMock(return_value={})) as post:
            first = await client.generate_packages(self.ITEMS, cache_path=cache_path)
            second = await client.generate_packages(self.ITEMS, cache_path=cache_path)

        assert first == {"generated": 2, "skipped": 0, "failed": 0}
        assert second == {"generated": 0, "skipped": 2, "failed": 0}
        assert post.await_count == 2

    @pytest.mark.asyncio
    async def test_changed_item_regenerated(self, tmp_path):
        client = make_client()
        cache_path = tmp_path / "package-hashes.json"

        with patch.object(client, "_post_package", new=AsyncMock(return_value={})):
            await client.generate_packages(self.ITEMS, cache_path=cache_path)
            changed = [dict(self.ITEMS[0], title="Postgres v2"), self.ITEMS[1]]
            stats = await client.generate_packages(changed, cache_path=cache_path)

        assert stats == {"generated": 1, "skipped": 1, "failed": 0}

    @pytest.mark.asyncio
    async def test_failures_are_retried_next_run(self, tmp_path):
        from content_pipeline.edge_client import EdgeFunctionError

        client = make_client()
        cache_path = tmp_path / "package-hashes.json"

        async def flaky(session, semaphore, item):
            if item["slug"] == "pdf":
                raise EdgeFunctionError("/generate", "boom")
            return {}

        with patch.object(client, "_post_package", new=flaky):
            stats = await client.generate_packages(self.ITEMS, cache_path=cache_path)
        assert stats == {"generated": 1, "skipped": 0, "failed": 1}

        with patch.object(client, "_post_package", new=AsyncMock(return_value={})) as post:
            stats = await client.generate_packages(self.ITEMS, cache_path=cache_path)
        assert stats == {"generated": 1, "skipped": 1, "failed": 0}
        assert post.await_count == 1


class FakeEdgeFunction:
    """Local package endpoint answering with a scripted list of statuses."""

    def __init__(self, statuses, delay=0):
        self.statuses = list(statuses)
        self.delay = delay
        self.calls = []
        self.headers = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.server = None

    async def handle(self, request):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            self.calls.append(await request.json())
            self.headers.append(request.headers.get("Authorization"))
            if self.delay:
                await asyncio.sleep(self.delay)
            status = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
            return web.json_response({"ok": status < 400}, status=status)
        finally:
            self.in_flight -= 1

    async def __aenter__(self):
        from content_pipeline.config import EDGE_PACKAGE_PATH

        app = web.Application()
        app.router.add_post(EDGE_PACKAGE_PATH, self.handle)
        self.server = TestServer(app)
        await self.server.start_server()
        return self

    async def __aexit__(self, *exc):
        await self.server.close()

    def client(self):
        from content_pipeline.edge_client import EdgeClient

        return EdgeClient(base_url=str(self.server.make_url("/")), api_key="service-key", backoff=0)


class TestPackageRequests:
    """generate_packages against a real aiohttp session."""

    ITEM = {"category": "mcp", "slug": "postgres", "title": "Postgres"}

    @pytest.mark.asyncio
    async def test_rate_limit_then_success(self, tmp_path):
        async with FakeEdgeFunction([429, 200]) as edge:
            stats = await edge.client().generate_packages([self.ITEM], cache_path=tmp_path / "hashes.json")

        assert stats == {"generated": 1, "skipped": 0, "failed": 0}
        assert edge.calls == [{"category": "mcp", "slug": "postgres"}] * 2
        assert edge.headers == ["Bearer service-key"] * 2

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self, tmp_path):
        async with FakeEdgeFunction([400]) as edge:
            stats = await edge.client().generate_packages([self.ITEM], cache_path=tmp_path / "hashes.json")

        assert stats == {"generated": 0, "skipped": 0, "failed": 1}
        assert len(edge.calls) == 1

    @pytest.mark.asyncio
    async def test_retries_exhausted(self, tmp_path):
        async with FakeEdgeFunction([503]) as edge:
            client = edge.client()
            stats = await client.generate_packages([self.ITEM], cache_path=tmp_path / "hashes.json")

        assert stats == {"generated": 0, "skipped": 0, "failed": 1}
        assert len(edge.calls) == client.retries

    @pytest.mark.asyncio
    async def test_concurrency_limited_by_semaphore(self, tmp_path):
        items = [dict(self.ITEM, slug=f"server-{i}") for i in range(4)]

        async with FakeEdgeFunction([200], delay=0.02) as edge:
            stats = await edge.client().generate_packages(
                items, cache_path=tmp_path / "hashes.json", concurrency=2,
            )

        assert stats["generated"] == 4
        assert edge.max_in_flight <= 2
