"""
Edge function client
Triggers package and README generation on the hosted backend
"""

import asyncio
import logging
import time
from pathlib import Path
from typing import Optional

import aiohttp
import requests

from .build_cache import HashCache
from .config import (
    CACHE_DIR, EDGE_CONCURRENCY, EDGE_MAX_RETRIES, EDGE_PACKAGE_PATH, EDGE_README_PATH,
    EDGE_TIMEOUT, SUPABASE_SERVICE_ROLE_KEY, SUPABASE_URL,
)

logger = logging.getLogger(__name__)

RETRY_STATUSES = {429, 500, 502, 503, 504}


class EdgeFunctionError(Exception):
    """An edge function call failed after all retries"""

    def __init__(self, path: str, message: str, status: Optional[int] = None):
        self.path = path
        self.status = status
        super().__init__(f"{path}: {message}")


def package_key(category: str, slug: str) -> str:
    return f"package:{category}/{slug}"


class EdgeClient:
    """Calls content-generation edge functions with the service role key"""

    def __init__(
        self,
        base_url: str = SUPABASE_URL,
        api_key: str = SUPABASE_SERVICE_ROLE_KEY,
        timeout: int = EDGE_TIMEOUT,
        retries: int = EDGE_MAX_RETRIES,
        backoff: float = 2.0,
    ):
        if not base_url or not api_key:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retries = retries
        self.backoff = backoff
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "User-Agent": "Claude-Pro-Directory-Build/1.0",
        }
        self.session = requests.Session()
        self.session.headers.update(self.headers)

    def _request(self, method: str, path: str, **kwargs) -> dict:
        """Make request with retry on rate limiting and server errors"""
        url = f"{self.base_url}{path}"
        last_error = "no attempts made"
        status = None

        for attempt in range(self.retries):
            try:
                response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            except requests.RequestException as e:
                last_error = str(e)
                logger.warning(f"Request to {path} failed (attempt {attempt + 1}): {e}")
            else:
                status = response.status_code
                if status not in RETRY_STATUSES:
                    if not response.ok:
                        raise EdgeFunctionError(path, f"HTTP {status}: {response.text[:200]}", status)
                    return response.json() if response.content else {}
                last_error = f"HTTP {status}"
                logger.warning(f"{path} returned {status} (attempt {attempt + 1})")

            if attempt < self.retries - 1:
                time.sleep(self.backoff * (attempt + 1))

        raise EdgeFunctionError(path, last_error, status)

    def generate_package(self, category: str, slug: str) -> dict:
        return self._request("POST", EDGE_PACKAGE_PATH, json={"category": category, "slug": slug})

    def generate_readme(self) -> str:
        """Fetch the sitewide README rendered by the backend"""
        data = self._request("GET", EDGE_README_PATH, params={"format": "readme"})
        readme = data.get("readme") if isinstance(data, dict) else None
        if not isinstance(readme, str):
            raise EdgeFunctionError(EDGE_README_PATH, "response has no readme field")
        return readme

    async def _post_package(
        self,
        session: aiohttp.ClientSession,
        semaphore: asyncio.Semaphore,
        item: dict,
    ) -> dict:
        url = f"{self.base_url}{EDGE_PACKAGE_PATH}"
        payload = {"category": item["category"], "slug": item["slug"]}
        async with semaphore:
            for attempt in range(self.retries):
                try:
                    async with session.post(url, json=payload) as resp:
                        if resp.status in RETRY_STATUSES:
                            logger.warning(f"{item['slug']}: HTTP {resp.status} (attempt {attempt + 1})")
                        elif resp.status >= 400:
                            raise EdgeFunctionError(EDGE_PACKAGE_PATH, f"HTTP {resp.status}", resp.status)
                        else:
                            return await resp.json(content_type=None) or {}
                except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                    logger.warning(f"{item['slug']}: {e} (attempt {attempt + 1})")
                if attempt < self.retries - 1:
                    await asyncio.sleep(self.backoff * (2 ** attempt))
        raise EdgeFunctionError(EDGE_PACKAGE_PATH, f"{item['category']}/{item['slug']} failed after retries")

    async def generate_packages(
        self,
        items: list,
        cache_path: Path = CACHE_DIR / "package-hashes.json",
        concurrency: int = EDGE_CONCURRENCY,
        force: bool = False,
    ) -> dict:
        """
        Generate packages for every item whose content hash changed.

        Args:
            items: content records with at least category and slug
            cache_path: JSON file of previously generated package hashes
            concurrency: maximum requests in flight

        Returns:
            Stats dict with generated, skipped and failed counts
        """
        hashes = HashCache(cache_path)
        pending = []
        for item in items:
            value_hash = HashCache.compute_hash(item)
            if force or hashes.has_changed(package_key(item["category"], item["slug"]), value_hash):
                pending.append((item, value_hash))

        stats = {"generated": 0, "skipped": len(items) - len(pending), "failed": 0}
        if not pending:
            logger.info("💡 Content hashes match - no packages regenerated")
            return stats

        logger.info(f"⚡ Generating {len(pending)} packages ({concurrency} concurrent)...")
        semaphore = asyncio.Semaphore(concurrency)
        connector = aiohttp.TCPConnector(limit=concurrency * 2)
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        async with aiohttp.ClientSession(connector=connector, headers=self.headers, timeout=timeout) as session:
            tasks = [self._post_package(session, semaphore, item) for item, _ in pending]
            results = await asyncio.gather(*tasks, return_exceptions=True)

        for (item, value_hash), result in zip(pending, results):
            if isinstance(result, Exception):
                stats["failed"] += 1
                logger.error(f"  ✗ {item['category']}/{item['slug']}: {result}")
                continue
            stats["generated"] += 1
            hashes.set(package_key(item["category"], item["slug"]), value_hash)
            logger.info(f"  ✓ {item['category']}/{item['slug']}")

        hashes.save()
        logger.info(
            f"Progress: ✅ {stats['generated']} generated | "
            f"⏭️ {stats['skipped']} skipped | "
            f"❌ {stats['failed']} errors"
        )
        return stats
