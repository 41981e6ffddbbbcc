#!/usr/bin/env python3
"""
CLI Router for the Hair Advisor.

Modular command architecture for report parsing, advice and history.
"""

import argparse
import logging
import sys
from typing import Optional, List

from .commands import get_command, COMMANDS
from .core.config import get_config_manager
from .core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

LANGUAGE_CHOICES = ['en', 'fr', 'ar']


class CLIRouter:
    """
    CLI router for hair advisor commands.

    Command structure:
    - python run.py report parse --file report.txt --json
    - python run.py advice analyze --image up=https://... --user-id 42
    - python run.py history list --user-id 42 --days 30
    """

    def __init__(self, container=None):
        """Initialize CLI router."""
        self.container = container
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the main argument parser."""
        parser = argparse.ArgumentParser(
            description="Hair Advisor: multilingual hair analysis reports",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_examples_text()
        )

        subparsers = parser.add_subparsers(
            dest='command',
            help='Available commands',
            metavar='{command}'
        )

        self._add_report_parser(subparsers)
        self._add_advice_parser(subparsers)
        self._add_history_parser(subparsers)

        return parser

    def _add_report_parser(self, subparsers):
        """Add report command parser."""
        report_parser = subparsers.add_parser(
            'report',
            help='Parse analysis reports and inspect lookup tables'
        )

        report_subparsers = report_parser.add_subparsers(
            dest='subcommand',
            help='Report operations',
            metavar='{parse,icon,color}'
        )

        parse_parser = report_subparsers.add_parser('parse', help='Parse a report into structured fields')
        parse_parser.add_argument('--file', default=None, help='Report text file (default: stdin)')
        parse_parser.add_argument('--language', choices=LANGUAGE_CHOICES, default=None, help='Report language (default: detect)')
        parse_parser.add_argument('--json', action='store_true', help='Print the result as JSON')

        icon_parser = report_subparsers.add_parser('icon', help='Resolve icon hint tokens')
        icon_parser.add_argument('tokens', nargs='+', help='Icon hint tokens (emoji, English or Arabic keywords)')

        color_parser = report_subparsers.add_parser('color', help='Look up a color phrase in the taxonomy')
        color_parser.add_argument('phrase', nargs='+', help='Color phrase, e.g. "dark brown"')

    def _add_advice_parser(self, subparsers):
        """Add advice command parser."""
        advice_parser = subparsers.add_parser(
            'advice',
            help='Request analyses, answers and routines from the AI service'
        )

        advice_subparsers = advice_parser.add_subparsers(
            dest='subcommand',
            help='Advice operations',
            metavar='{analyze,ask,routine}'
        )

        analyze_parser = advice_subparsers.add_parser('analyze', help='Analyze hair images')
        analyze_parser.add_argument('--image', action='append', metavar='VIEW=URL', help='Image reference, repeatable (views: up, back, left, right)')
        analyze_parser.add_argument('--user-id', default=None, help='Store the analysis for this user')
        analyze_parser.add_argument('--language', choices=LANGUAGE_CHOICES, default=None, help='Report language (default: DEFAULT_LANGUAGE)')
        analyze_parser.add_argument('--no-save', action='store_true', help='Do not store the analysis')

        ask_parser = advice_subparsers.add_parser('ask', help='Ask the hair advisor a question')
        ask_parser.add_argument('--question', required=True, help='Question text')
        ask_parser.add_argument('--image-url', default=None, help='Optional hair image to analyze with the question')
        ask_parser.add_argument('--language', choices=LANGUAGE_CHOICES, default=None, help='Prompt language')

        routine_parser = advice_subparsers.add_parser('routine', help='Generate a care routine from an analysis')
        routine_parser.add_argument('--file', default=None, help='Analysis report file (default: stdin)')
        routine_parser.add_argument('--language', choices=LANGUAGE_CHOICES, default=None, help='Prompt language')

    def _add_history_parser(self, subparsers):
        """Add history command parser."""
        history_parser = subparsers.add_parser(
            'history',
            help='Stored analysis history'
        )

        history_subparsers = history_parser.add_subparsers(
            dest='subcommand',
            help='History operations',
            metavar='{list,show,delete}'
        )

        list_parser = history_subparsers.add_parser('list', help="List a user's analyses")
        list_parser.add_argument('--user-id', required=True, help='User identifier')
        list_parser.add_argument('--days', type=int, default=None, help='Days to look back (default: HISTORY_DAYS)')

        show_parser = history_subparsers.add_parser('show', help='Show one analysis')
        show_parser.add_argument('--id', type=int, required=True, help='Analysis ID')
        show_parser.add_argument('--json', action='store_true', help='Print the record as JSON')

        delete_parser = history_subparsers.add_parser('delete', help='Delete one analysis')
        delete_parser.add_argument('--id', type=int, required=True, help='Analysis ID')

    def _get_examples_text(self) -> str:
        """Get examples text for help."""
        return """
Examples:
  # Parse a saved report
  python run.py report parse --file report.txt
  python run.py report parse --file rapport.txt --language fr --json

  # Ask the AI service
  python run.py advice analyze --image up=https://example.com/up.jpg --user-id 42
  python run.py advice ask --question "How often should I wash oily hair?"
  python run.py advice routine --file report.txt

  # History
  python run.py history list --user-id 42
  python run.py history show --id 7
"""

    def route_command(self, args: Optional[List[str]] = None) -> int:
        """
        Route command to appropriate handler.

        Args:
            args: Command line arguments (uses sys.argv if None)

        Returns:
            Exit code
        """
        try:
            if args is None:
                args = sys.argv[1:]

            parsed_args = self.parser.parse_args(args)

            if not parsed_args.command:
                self.parser.print_help()
                return 1

            return self._handle_command(parsed_args)

        except SystemExit as e:
            # argparse calls sys.exit() on error or help
            return e.code if e.code is not None else 0

    def _handle_command(self, args: argparse.Namespace) -> int:
        """Handle command structure."""
        logger.debug(f"Handling command: {args.command}")

        if args.command not in COMMANDS:
            available = ', '.join(COMMANDS.keys())
            logger.error(f"Unknown command '{args.command}'. Available: {available}")
            return 1

        subcommand = getattr(args, 'subcommand', None)
        if not subcommand:
            logger.error(f"No subcommand specified for '{args.command}'")
            self.parser.parse_args([args.command, '--help'])  # Show help
            return 1

        command = get_command(args.command, self.container)
        return command.execute(subcommand, args)


def main(args: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        get_config_manager().update_logging()
    except ConfigurationError as e:
        logger.error(e.message)
        return 1

    router = CLIRouter()
    return router.route_command(args)


if __name__ == '__main__':
    sys.exit(main())
