#!/usr/bin/env python3
"""
Parse every roster PDF in a directory and write duties/logs JSON per file.

Usage:
    python -m scripts.process_rosters rosters/
    python -m scripts.process_rosters rosters/ --output out/ --csv
"""

import argparse
from dataclasses import replace
import logging
import sys

from core.parameters import ParserConfig
from parsers.batch_processor import process_directory

PRESETS = {
    'default': ParserConfig.default_config,
    'strict': ParserConfig.strict_config,
    'lenient': ParserConfig.lenient_config,
}


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Extract duty records from crew roster PDFs',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Parse all PDFs in rosters/, results in rosters/output/
  python -m scripts.process_rosters rosters/

  # Custom output directory plus CSV tables
  python -m scripts.process_rosters rosters/ --output parsed/ --csv
        """
    )
    parser.add_argument('directory', type=str, help='Directory containing roster PDFs')
    parser.add_argument('--output', type=str, default=None,
                        help='Output directory (default: <directory>/output)')
    parser.add_argument('--csv', action='store_true', help='Also write <name>_duties.csv')
    parser.add_argument('--preset', choices=sorted(PRESETS), default='default',
                        help='Parser configuration preset')
    parser.add_argument('--max-fragments', type=int, default=None,
                        help='Abort a document yielding more fragments than this')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    return parser


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    config = PRESETS[args.preset]()
    if args.max_fragments is not None:
        config = replace(config, max_fragments=args.max_fragments)

    reports = process_directory(args.directory, args.output, config=config, write_csv=args.csv)

    failed = [r for r in reports if not r.ok]
    print(f"Processed {len(reports)} file(s): {len(reports) - len(failed)} ok, {len(failed)} failed")
    for report in failed:
        print(f"  {report.source.name}: {report.error}")
    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
