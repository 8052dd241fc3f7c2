#!/usr/bin/env python3
"""
Generate static JSON APIs
Reads the built full-content modules and writes public/static-api/*.json
"""

import logging
import os
import sys
import time

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from content_pipeline.codegen import load_all_full_content
from content_pipeline.config import GENERATED_DIR, SITE_URL, STATIC_API_DIR
from content_pipeline.static_api import StaticAPIError, StaticAPIGenerator

logger = logging.getLogger(__name__)


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Generate static API files')
    parser.add_argument('--generated-dir', default=str(GENERATED_DIR), help='Generated modules directory')
    parser.add_argument('--output', default=str(STATIC_API_DIR), help='Static API output directory')
    parser.add_argument('--base-url', default=SITE_URL, help='Site origin for item URLs')
    parser.add_argument('--force', action='store_true', help='Rewrite unchanged files')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')

    started = time.time()
    logger.info("🚀 Starting static API generation...")

    content = load_all_full_content(args.generated_dir)
    generator = StaticAPIGenerator(content, output_dir=args.output, base_url=args.base_url)

    try:
        result = generator.generate(force=args.force)
    except (StaticAPIError, OSError) as e:
        logger.error(f"❌ Static API generation failed: {e}")
        sys.exit(1)

    logger.info("\n" + "=" * 60)
    logger.info(f"✨ Static API generation completed in {time.time() - started:.2f}s")
    logger.info(f"  Written: {len(result['written'])}")
    logger.info(f"  Unchanged: {len(result['skipped'])}")
    logger.info(f"📁 Files saved to: {args.output}")


if __name__ == '__main__':
    main()
