"""Main CLI entry point for the citation engine."""

import argparse
import logging
import sys
from typing import Optional

from .commands import (
    check_suite,
    enumerate_combos,
    extract_labels_command,
    format_template,
    lint_template,
)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the citation CLI."""
    # Logging flags shared by every subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    common.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error log output'
    )
    common.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='warn',
        help='Set log level'
    )

    parser = argparse.ArgumentParser(
        prog='citation',
        description='Citation template engine'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Format command
    format_parser = subparsers.add_parser('format', parents=[common], help='Render a template')
    format_parser.add_argument(
        'template',
        type=str,
        help='Template text'
    )
    _add_value_arguments(format_parser)
    format_parser.add_argument(
        '--fold',
        action='append',
        default=[],
        metavar='PIECE',
        help='Piece for the next [*] fold token (can be specified multiple times)'
    )

    # Lint command
    lint_parser = subparsers.add_parser('lint', parents=[common], help='Check template structure')
    lint_parser.add_argument(
        'template',
        type=str,
        help='Template text'
    )
    lint_parser.add_argument(
        '--fold',
        action='append',
        default=[],
        metavar='PIECE',
        help='Piece for the next [*] fold token (can be specified multiple times)'
    )
    lint_parser.add_argument(
        '--markers',
        action='store_true',
        help='Print positional markers instead of messages'
    )
    lint_parser.add_argument(
        '--args',
        type=int,
        metavar='N',
        help='Declared argument count; warns when %%s count differs (implies --markers)'
    )

    # Labels command
    labels_parser = subparsers.add_parser('labels', parents=[common], help='Extract argument labels')
    labels_parser.add_argument(
        'spec',
        type=str,
        help='Bracket shorthand, e.g. "[Author]. [Title]."'
    )

    # Combos command
    combos_parser = subparsers.add_parser(
        'combos',
        parents=[common],
        help='Render every non-empty subset of arguments'
    )
    combos_parser.add_argument(
        'template',
        type=str,
        help='Template text'
    )
    combos_parser.add_argument(
        '--label',
        action='append',
        default=[],
        metavar='NAME',
        help='Argument label (can be specified multiple times)'
    )
    combos_parser.add_argument(
        '--spec',
        type=str,
        help='Bracket shorthand to take labels from'
    )
    _add_value_arguments(combos_parser)
    combos_parser.add_argument(
        '--select',
        action='append',
        type=int,
        metavar='INDEX',
        help='Argument index to vary (default: all)'
    )
    combos_parser.add_argument(
        '--max-combinations',
        type=int,
        default=4096,
        help='Maximum number of rows to render'
    )

    # Check command
    check_parser = subparsers.add_parser('check', parents=[common], help='Run a style suite')
    check_parser.add_argument(
        'suite',
        type=str,
        help='Path to style suite YAML file'
    )
    check_parser.add_argument(
        '--template',
        type=str,
        dest='only',
        help='Only run cases of this template'
    )
    check_parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print got/want for passing cases too'
    )

    return parser


def _add_value_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--value',
        action='append',
        default=[],
        metavar='VALUE',
        help='Positional field value (can be specified multiple times)'
    )
    parser.add_argument(
        '--null',
        action='append',
        type=int,
        default=[],
        metavar='INDEX',
        help='Treat the value at INDEX as null'
    )
    parser.add_argument(
        '--values-file',
        type=str,
        help='Path to JSON/YAML list of field values'
    )


def setup_logging(args: argparse.Namespace) -> None:
    """Configure logging from the shared flags."""
    level_name = 'warning' if args.log_level == 'warn' else args.log_level
    log_level = getattr(logging, level_name.upper())
    if args.debug:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logging.getLogger('citation_engine').setLevel(log_level)


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    setup_logging(parsed_args)

    if parsed_args.command == 'format':
        return format_template(parsed_args)
    elif parsed_args.command == 'lint':
        return lint_template(parsed_args)
    elif parsed_args.command == 'labels':
        return extract_labels_command(parsed_args)
    elif parsed_args.command == 'combos':
        return enumerate_combos(parsed_args)
    elif parsed_args.command == 'check':
        return check_suite(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
