#!/usr/bin/env python3
"""
Report command endpoints: parse saved report text and inspect lookups.
"""

import json
import logging
from argparse import Namespace

from .base import BaseCommand
from ..core.formatters import format_analysis_result
from ..core.parsing.color_taxonomy import DEFAULT_COLOR_HEX, lookup_color
from ..core.parsing.icon_hints import resolve_icon_hint

logger = logging.getLogger(__name__)


class ReportCommand(BaseCommand):
    """Parse analysis reports and inspect the color and icon tables."""

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute report subcommand."""
        try:
            if subcommand == "parse":
                return self.parse(args)
            elif subcommand == "icon":
                return self.icon(args)
            elif subcommand == "color":
                return self.color(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except (Exception, KeyboardInterrupt) as e:
            return self.handle_error(e, f"report {subcommand}")

    def parse(self, args: Namespace) -> int:
        """Parse a report from a file (or stdin) and print the structured result."""
        text = self.read_text(getattr(args, 'file', None))
        result = self.report_parser.parse(text, getattr(args, 'language', None))

        if getattr(args, 'json', False):
            print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        else:
            print(format_analysis_result(result))
        return 0

    def icon(self, args: Namespace) -> int:
        """Resolve icon hint tokens."""
        for token in args.tokens:
            resolution = resolve_icon_hint(token)
            print(f"{token}\t{resolution.kind}\t{resolution.icon}")
        return 0

    def color(self, args: Namespace) -> int:
        """Look up a color phrase in the taxonomy."""
        phrase = " ".join(args.phrase)
        entry = lookup_color(phrase)
        if entry is None:
            print(f"'{phrase}' is not in the color taxonomy (default hex {DEFAULT_COLOR_HEX})")
            return 1

        print(f"{entry.canonical_name}\t{entry.hex}\t{entry.reference_note}")
        return 0
