#!/usr/bin/env python3
"""
Generate SEO guide pages (collections, workflows, category buckets)
"""

import logging
import os
import sys

import yaml

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from content_pipeline.config import CONTENT_DIR, SEO_OUTPUT_DIR, SITE_URL
from content_pipeline.seo.generator import DEFINITIONS_PATH, SEOGenerator

logger = logging.getLogger(__name__)


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Generate SEO guide pages')
    parser.add_argument('categories', nargs='*', help='Categories to generate (default: all defined)')
    parser.add_argument('--content-dir', default=str(CONTENT_DIR), help='Content source directory')
    parser.add_argument('--output', default=str(SEO_OUTPUT_DIR), help='Guides output directory')
    parser.add_argument('--definitions', default=str(DEFINITIONS_PATH), help='YAML page definitions')
    parser.add_argument('--base-url', default=SITE_URL, help='Site origin')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')

    try:
        generator = SEOGenerator(
            content_dir=args.content_dir,
            output_dir=args.output,
            definitions_path=args.definitions,
            base_url=args.base_url,
        )
        generator.run(args.categories or None)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"❌ SEO generation failed: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
