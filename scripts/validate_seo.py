#!/usr/bin/env python3
"""
Validate SEO metadata and guide MDX structure

Checks content and guide descriptions, keyword lists, a single H1 per
guide page and at most one FAQPage schema per page.

Exit codes:
  0 - No failures (warnings allowed)
  1 - One or more checks failed
  2 - Script error
"""

import logging
import os
import sys
import time

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from content_pipeline.codegen import load_all_metadata
from content_pipeline.config import GENERATED_DIR, SEO_OUTPUT_DIR
from content_pipeline.seo_validation import SEOValidator
from content_pipeline.titles import log_results

logger = logging.getLogger(__name__)


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Validate SEO metadata and MDX structure')
    parser.add_argument('--quick', action='store_true', help='Stop at the first failure, summary only')
    parser.add_argument('--generated-dir', default=str(GENERATED_DIR), help='Generated modules directory')
    parser.add_argument('--guides-dir', default=str(SEO_OUTPUT_DIR), help='Guides directory')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')

    logger.info("🔍 SEO Validation")
    logger.info("=" * 60)

    started = time.time()
    try:
        metadata = load_all_metadata(args.generated_dir)
        collector = SEOValidator(metadata, guides_dir=args.guides_dir, quick=args.quick).run()
    except Exception as e:
        logger.error(f"SEO validation script failed: {e}")
        sys.exit(2)

    log_results(collector, full=not args.quick)
    logger.info(f"   Completed in {time.time() - started:.2f}s")

    if collector.failures:
        logger.warning(f"\n⚠️  {len(collector.failures)} SEO checks failed. Please review.")
        sys.exit(1)
    logger.info("\n✨ All SEO checks passed!")
    sys.exit(0)


if __name__ == '__main__':
    main()
