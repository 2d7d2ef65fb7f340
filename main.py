#!/usr/bin/env python3
"""
Tailwind v3 to v4 Migration Tool
Main entry point for the application.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from core.merger import convert
from utils import file_utils

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description='Convert a Tailwind v3 config and stylesheet into Tailwind v4 CSS')
    ap.add_argument('--config', help='tailwind.config.{ts,js}; looked up in --root when omitted')
    ap.add_argument('--css', help='Stylesheet containing the Tailwind directives; looked up in --root when omitted')
    ap.add_argument('--root', default='.', help='Project directory used to find the config file and stylesheet')
    ap.add_argument('-o', '--output', help='Write the converted CSS here instead of stdout')
    ap.add_argument('--json', action='store_true', help='Print css, warnings and errors as JSON')
    ap.add_argument('--log-level', default='WARNING',
                    choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return ap


def main(argv=None) -> int:
    """Main execution function."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='[%(levelname)s] %(name)s: %(message)s')

    config_path = Path(args.config) if args.config else file_utils.find_config_file(args.root)
    if config_path is None:
        logger.error(f"No Tailwind config file found in {file_utils.normalize_path(args.root)}")
        return 2
    try:
        css_path = Path(args.css) if args.css else file_utils.find_entry_stylesheet(args.root)
        if css_path is None:
            logger.error(f"No stylesheet with Tailwind directives found in {file_utils.normalize_path(args.root)}")
            return 2
        config_source = file_utils.read_file_content(config_path)
        css_source = file_utils.read_file_content(css_path)
    except OSError as e:
        logger.error(f"Could not read input: {e}")
        return 2

    logger.info(f"Converting {config_path} and {css_path}")
    result = convert(config_source, css_source)
    for error in result.errors:
        logger.error(error)
    logger.info(f"Conversion finished with {len(result.warnings)} warning(s)")

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    elif result.ok:
        if args.output:
            file_utils.write_file_content(args.output, result.css)
            logger.info(f"Wrote {args.output}")
        else:
            sys.stdout.write(result.css)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
