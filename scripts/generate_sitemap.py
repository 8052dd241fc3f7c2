#!/usr/bin/env python3
"""
Generate sitemap.xml and robots.txt
"""

import logging
import os
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from content_pipeline.codegen import load_all_metadata
from content_pipeline.config import GENERATED_DIR, PUBLIC_DIR, SEO_OUTPUT_DIR, SITE_URL
from content_pipeline.sitemap import generate_all_site_urls, log_url_statistics, render_robots_txt, render_sitemap_xml
from content_pipeline.utils import write_text_if_changed

logger = logging.getLogger(__name__)


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Generate sitemap.xml and robots.txt')
    parser.add_argument('--generated-dir', default=str(GENERATED_DIR), help='Generated modules directory')
    parser.add_argument('--guides-dir', default=str(SEO_OUTPUT_DIR), help='Guides directory')
    parser.add_argument('--output', default=str(PUBLIC_DIR), help='Output directory')
    parser.add_argument('--base-url', default=SITE_URL, help='Site origin')
    parser.add_argument('--no-guides', action='store_true', help='Skip guide pages')
    parser.add_argument('--no-llms-txt', action='store_true', help='Skip llms.txt routes')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')

    metadata = load_all_metadata(args.generated_dir)
    urls = generate_all_site_urls(
        metadata,
        base_url=args.base_url.rstrip('/'),
        guides_dir=Path(args.guides_dir),
        include_guides=not args.no_guides,
        include_llms_txt=not args.no_llms_txt,
    )

    output = Path(args.output)
    try:
        write_text_if_changed(output / 'sitemap.xml', render_sitemap_xml(urls))
        write_text_if_changed(output / 'robots.txt', render_robots_txt(args.base_url.rstrip('/')))
    except OSError as e:
        logger.error(f"❌ Could not write sitemap: {e}")
        sys.exit(1)

    log_url_statistics(urls)
    logger.info(f"✅ Sitemap generated with {len(urls)} URLs")


if __name__ == '__main__':
    main()
