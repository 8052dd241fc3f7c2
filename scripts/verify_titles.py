#!/usr/bin/env python3
"""
Verify page titles against search result length limits

Exit codes:
  0 - All titles pass
  1 - One or more titles are too long
  2 - Script error
"""

import logging
import os
import sys
import time

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from content_pipeline.codegen import load_all_metadata
from content_pipeline.config import GENERATED_DIR, MAX_TITLE_LENGTH, SEO_OUTPUT_DIR
from content_pipeline.titles import TitleVerifier, log_results

logger = logging.getLogger(__name__)


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Verify page title lengths')
    parser.add_argument('--quick', action='store_true', help='Stop at the first failure, summary only')
    parser.add_argument('--generated-dir', default=str(GENERATED_DIR), help='Generated modules directory')
    parser.add_argument('--guides-dir', default=str(SEO_OUTPUT_DIR), help='Guides directory')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')

    mode = 'quick' if args.quick else 'full'
    logger.info(f"🔍 Title Verification ({mode} mode)")
    logger.info("=" * 60)

    started = time.time()
    try:
        metadata = load_all_metadata(args.generated_dir)
        collector = TitleVerifier(metadata, guides_dir=args.guides_dir, quick=args.quick).run()
    except Exception as e:
        logger.error(f"Title verification script failed: {e}")
        sys.exit(2)

    log_results(collector, full=not args.quick)
    logger.info(f"   Completed in {time.time() - started:.2f}s")

    if collector.failures:
        logger.warning(f"\n⚠️  Some page titles exceed {MAX_TITLE_LENGTH} characters. Please review.")
        sys.exit(1)
    logger.info("\n✨ All page titles meet SEO requirements!")
    sys.exit(0)


if __name__ == '__main__':
    main()
