#!/usr/bin/env python3
"""
Regenerate README.md from the sitewide content endpoint
"""

import logging
import os
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from content_pipeline.config import ROOT_DIR
from content_pipeline.edge_client import EdgeClient, EdgeFunctionError
from content_pipeline.utils import write_text_if_changed

logger = logging.getLogger(__name__)


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Regenerate README.md')
    parser.add_argument('--output', default=str(Path(ROOT_DIR) / 'README.md'), help='Output file path')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')

    try:
        readme = EdgeClient().generate_readme()
        written = write_text_if_changed(Path(args.output), readme)
    except (ValueError, EdgeFunctionError, OSError) as e:
        logger.error(f"❌ README generation failed: {e}")
        sys.exit(1)

    logger.info(f"✅ README {'updated' if written else 'unchanged'}: {args.output}")


if __name__ == '__main__':
    main()
