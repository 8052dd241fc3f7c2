#!/usr/bin/env python3
"""
Search built content from the command line
"""

import json
import logging
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from content_pipeline.codegen import load_all_metadata
from content_pipeline.config import GENERATED_DIR, MAIN_CONTENT_CATEGORIES
from content_pipeline.search import SORT_OPTIONS, search_content

logger = logging.getLogger(__name__)


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Search directory content')
    parser.add_argument('query', nargs='?', default='', help='Search text')
    parser.add_argument('--category', choices=MAIN_CONTENT_CATEGORIES, help='Restrict to one category')
    parser.add_argument('--tag', action='append', help='Require tag (repeatable)')
    parser.add_argument('--author', help='Filter by author')
    parser.add_argument('--sort', default='relevance', choices=SORT_OPTIONS, help='Result order')
    parser.add_argument('--limit', type=int, default=20, help='Maximum results')
    parser.add_argument('--json', action='store_true', help='Print results as JSON')
    parser.add_argument('--generated-dir', default=str(GENERATED_DIR), help='Generated modules directory')

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format='%(message)s')

    metadata = load_all_metadata(args.generated_dir, MAIN_CONTENT_CATEGORIES)
    items = [
        {**item, 'category': item.get('category') or category}
        for category, category_items in metadata.items()
        for item in category_items
    ]

    results = search_content(
        items, args.query, category=args.category, tags=args.tag,
        author=args.author, sort=args.sort, limit=args.limit,
    )

    if args.json:
        print(json.dumps(results, indent=2, ensure_ascii=False))
        return

    logger.info(f"🔍 {len(results)} results for '{args.query}'")
    for item in results:
        logger.info(f"  [{item['category']}] {item.get('title', item['slug'])} - /{item['category']}/{item['slug']}")


if __name__ == '__main__':
    main()
