"""
Service worker generation
Renders public/service-worker.js with a cache version tied to the content hashes
"""

import json
import logging
from pathlib import Path

from .build_cache import HashCache
from .config import CACHE_DIR, MAIN_CONTENT_CATEGORIES, PUBLIC_DIR
from .utils import short_hash, write_text_if_changed

logger = logging.getLogger(__name__)

CACHE_PREFIX = "claudepro"
CACHE_KINDS = ["static", "dynamic", "api"]
HASH_KEY = "service-worker"

CORE_ROUTES = ["/", "/offline", "/manifest.webmanifest", "/guides", "/trending", "/submit"]


def precache_routes(categories=None) -> list:
    categories = categories or MAIN_CONTENT_CATEGORIES
    return CORE_ROUTES + [f"/{category}" for category in categories]


def cache_version(category_hashes: dict) -> str:
    """Short version string; changes whenever any category hash changes"""
    if not category_hashes:
        return "v0"
    return "v" + short_hash(json.dumps(category_hashes, sort_keys=True))


def cache_names(version: str) -> dict:
    return {kind: f"{CACHE_PREFIX}-{kind}-{version}" for kind in CACHE_KINDS}


def render_service_worker(version: str, routes: list) -> str:
    names = cache_names(version)
    return f"""/**
 * Auto-generated service worker
 *
 * DO NOT EDIT MANUALLY
 * @see scripts/generate_service_worker.py
 */

const CACHE_VERSION = '{version}';
const STATIC_CACHE = '{names['static']}';
const DYNAMIC_CACHE = '{names['dynamic']}';
const API_CACHE = '{names['api']}';
const PRECACHE_URLS = {json.dumps(routes, indent=2)};
const VALID_CACHES = [STATIC_CACHE, DYNAMIC_CACHE, API_CACHE];

self.addEventListener('install', (event) => {{
  event.waitUntil(
    caches.open(STATIC_CACHE).then((cache) => cache.addAll(PRECACHE_URLS)).then(() => self.skipWaiting())
  );
}});

self.addEventListener('activate', (event) => {{
  event.waitUntil(
    caches
      .keys()
      .then((names) =>
        Promise.all(
          names
            .filter((name) => name.startsWith('{CACHE_PREFIX}-') && !VALID_CACHES.includes(name))
            .map((name) => caches.delete(name))
        )
      )
      .then(() => self.clients.claim())
  );
}});

self.addEventListener('fetch', (event) => {{
  const request = event.request;
  if (request.method !== 'GET') return;

  const url = new URL(request.url);
  if (url.origin !== self.location.origin) return;

  if (url.pathname.startsWith('/static-api/')) {{
    event.respondWith(networkFirst(request, API_CACHE));
    return;
  }}
  if (PRECACHE_URLS.includes(url.pathname)) {{
    event.respondWith(cacheFirst(request, STATIC_CACHE));
    return;
  }}
  event.respondWith(networkFirst(request, DYNAMIC_CACHE));
}});

async function cacheFirst(request, cacheName) {{
  const cached = await caches.match(request);
  if (cached) return cached;
  const response = await fetch(request);
  if (response.ok) {{
    const cache = await caches.open(cacheName);
    cache.put(request, response.clone());
  }}
  return response;
}}

async function networkFirst(request, cacheName) {{
  try {{
    const response = await fetch(request);
    if (response.ok) {{
      const cache = await caches.open(cacheName);
      cache.put(request, response.clone());
    }}
    return response;
  }} catch (err) {{
    const cached = await caches.match(request);
    return cached || caches.match('/offline');
  }}
}}
"""


def generate_service_worker(
    category_hashes: dict,
    output_path: Path = PUBLIC_DIR / "service-worker.js",
    cache_path: Path = CACHE_DIR / "service-worker-hash.json",
    force: bool = False,
) -> bool:
    """
    Write the service worker unless its cache version is unchanged.

    Returns:
        True when the file was written
    """
    output_path = Path(output_path)
    version = cache_version(category_hashes)
    hashes = HashCache(cache_path)

    if not force and output_path.exists() and not hashes.has_changed(HASH_KEY, version):
        logger.info(f"⏭  Service worker unchanged ({version})")
        return False

    write_text_if_changed(output_path, render_service_worker(version, precache_routes()))
    hashes.set(HASH_KEY, version)
    hashes.save()
    logger.info(f"✅ Service worker written with cache version {version}")
    return True
