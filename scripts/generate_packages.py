#!/usr/bin/env python3
"""
Trigger package generation for changed MCP servers and skills
"""

import asyncio
import logging
import os
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from content_pipeline.codegen import load_all_full_content
from content_pipeline.config import CACHE_DIR, EDGE_CONCURRENCY, GENERATED_DIR, PACKAGE_CATEGORIES
from content_pipeline.edge_client import EdgeClient

logger = logging.getLogger(__name__)


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Generate downloadable packages via edge functions')
    parser.add_argument('--generated-dir', default=str(GENERATED_DIR), help='Generated modules directory')
    parser.add_argument('--category', action='append', choices=PACKAGE_CATEGORIES,
                        help='Only this category (repeatable)')
    parser.add_argument('--concurrency', type=int, default=EDGE_CONCURRENCY, help='Requests in flight')
    parser.add_argument('--force', action='store_true', help='Regenerate unchanged packages')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')

    categories = args.category or PACKAGE_CATEGORIES
    content = load_all_full_content(args.generated_dir, categories)
    items = [
        {**item, 'category': category}
        for category in categories
        for item in content[category]
    ]
    logger.info(f"📦 {len(items)} items in {', '.join(categories)}")

    try:
        client = EdgeClient()
    except ValueError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    stats = asyncio.run(client.generate_packages(
        items,
        cache_path=Path(CACHE_DIR) / 'package-hashes.json',
        concurrency=args.concurrency,
        force=args.force,
    ))
    if stats['failed']:
        sys.exit(1)


if __name__ == '__main__':
    main()
