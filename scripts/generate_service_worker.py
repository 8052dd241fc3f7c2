#!/usr/bin/env python3
"""
Generate public/service-worker.js from the current build cache
"""

import logging
import os
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from content_pipeline.build_cache import BuildCache
from content_pipeline.config import CACHE_DIR, PUBLIC_DIR
from content_pipeline.service_worker import generate_service_worker

logger = logging.getLogger(__name__)


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Generate the service worker')
    parser.add_argument('--cache-dir', default=str(CACHE_DIR), help='Build cache directory')
    parser.add_argument('--output', default=str(Path(PUBLIC_DIR) / 'service-worker.js'), help='Output file path')
    parser.add_argument('--force', action='store_true', help='Rewrite even if the version is unchanged')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')

    cache = BuildCache(args.cache_dir)
    if cache.load() is None:
        logger.warning("⚠ No build cache found; run build_content.py first")

    try:
        generate_service_worker(
            cache.category_hashes(),
            output_path=Path(args.output),
            cache_path=Path(args.cache_dir) / 'service-worker-hash.json',
            force=args.force,
        )
    except OSError as e:
        logger.error(f"❌ Could not write service worker: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
