#!/usr/bin/env python3
"""
Generate the analytics event taxonomy
Writes generated/events.ts from the category registry
"""

import logging
import os
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from content_pipeline.config import GENERATED_DIR
from content_pipeline.events import build_event_taxonomy, render_events_module
from content_pipeline.utils import write_text_if_changed

logger = logging.getLogger(__name__)


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Generate analytics event names')
    parser.add_argument('--output', default=str(Path(GENERATED_DIR) / 'events.ts'), help='Output file path')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')

    events = build_event_taxonomy()
    try:
        written = write_text_if_changed(Path(args.output), render_events_module(events))
    except OSError as e:
        logger.error(f"❌ Could not write {args.output}: {e}")
        sys.exit(1)

    if written:
        logger.info(f"✅ Generated {len(events)} events -> {args.output}")
    else:
        logger.info(f"✓ {args.output} up to date ({len(events)} events)")


if __name__ == '__main__':
    main()
