#!/usr/bin/env python3
"""
Build generated content modules
Validates content/<category>/*.json and writes generated/<category>-metadata.ts,
generated/<category>-full.ts and generated/content.ts
"""

import logging
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from content_pipeline.config import CACHE_DIR, CHANGELOG_PATH, CONTENT_DIR, GENERATED_DIR, get_category_ids
from content_pipeline.content_builder import ContentBuilder

logger = logging.getLogger(__name__)


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Build generated content modules')
    parser.add_argument('--content-dir', default=str(CONTENT_DIR), help='Content source directory')
    parser.add_argument('--generated-dir', default=str(GENERATED_DIR), help='Output directory for modules')
    parser.add_argument('--cache-dir', default=str(CACHE_DIR), help='Build cache directory')
    parser.add_argument('--changelog', default=str(CHANGELOG_PATH), help='CHANGELOG.md path')
    parser.add_argument('--category', action='append', choices=get_category_ids(),
                        help='Only build this category (repeatable)')
    parser.add_argument('--force', action='store_true', help='Ignore the build cache')
    parser.add_argument('--workers', type=int, default=4, help='Parallel category builds')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')

    builder = ContentBuilder(
        content_dir=args.content_dir,
        generated_dir=args.generated_dir,
        cache_dir=args.cache_dir,
        changelog_path=args.changelog,
        categories=args.category,
        force=args.force,
        max_workers=args.workers,
    )

    try:
        summary = builder.run()
    except OSError as e:
        logger.error(f"❌ Build failed: {e}")
        sys.exit(1)

    if summary['failed']:
        logger.error(f"❌ Failed categories: {', '.join(summary['failed'])}")
        sys.exit(1)

    logger.info("✅ Content build complete")


if __name__ == '__main__':
    main()
