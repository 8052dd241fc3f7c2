#!/usr/bin/env python3
"""
Generate the OpenAPI document for the static API
"""

import json
import logging
import os
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from content_pipeline.config import PUBLIC_DIR, SITE_URL
from content_pipeline.openapi import build_openapi_document
from content_pipeline.utils import write_text_if_changed

logger = logging.getLogger(__name__)


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Generate openapi.json')
    parser.add_argument('--output', default=str(Path(PUBLIC_DIR) / 'openapi.json'), help='Output file path')
    parser.add_argument('--base-url', default=SITE_URL, help='Server URL')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')

    document = build_openapi_document(base_url=args.base_url.rstrip('/'))
    try:
        write_text_if_changed(Path(args.output), json.dumps(document, indent=2, ensure_ascii=False) + '\n')
    except OSError as e:
        logger.error(f"❌ Could not write {args.output}: {e}")
        sys.exit(1)

    logger.info(f"✅ OpenAPI document with {len(document['paths'])} paths -> {args.output}")


if __name__ == '__main__':
    main()
