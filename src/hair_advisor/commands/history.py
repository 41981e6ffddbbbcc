#!/usr/bin/env python3
"""
History command endpoints for stored analyses.
"""

import json
import logging
from argparse import Namespace

from .base import BaseCommand
from ..core.formatters import format_analysis_result, format_records, format_timestamp

logger = logging.getLogger(__name__)


class HistoryCommand(BaseCommand):
    """Browse and manage stored analyses."""

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute history subcommand."""
        try:
            if subcommand == "list":
                return self.list(args)
            elif subcommand == "show":
                return self.show(args)
            elif subcommand == "delete":
                return self.delete(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except (Exception, KeyboardInterrupt) as e:
            return self.handle_error(e, f"history {subcommand}")

    def list(self, args: Namespace) -> int:
        """List a user's recent analyses."""
        days = getattr(args, 'days', None) or self.config.app.history_days
        records = self.analysis_service.get_user_analyses(args.user_id, days=days)

        print(f"\n=== Analyses for {args.user_id} (last {days} days) ===")
        print(format_records(records, self.config.app.display_timezone))
        return 0

    def show(self, args: Namespace) -> int:
        """Show one stored analysis, re-parsed."""
        record = self.analysis_service.get_analysis(args.id)
        if record is None:
            print(f"❌ Analysis #{args.id} not found")
            return 1

        result = record.parse(self.report_parser)
        if getattr(args, 'json', False):
            payload = record.to_dict()
            payload['analysis'] = result.to_dict()
            print(json.dumps(payload, ensure_ascii=False, indent=2))
            return 0

        print(f"Analysis #{record.id} for {record.user_id} at "
              f"{format_timestamp(record.created_at, self.config.app.display_timezone)}")
        for view, url in sorted(record.image_references.items()):
            print(f"  🖼️ {view}: {url}")
        print(format_analysis_result(result))
        return 0

    def delete(self, args: Namespace) -> int:
        """Delete one stored analysis."""
        if self.analysis_service.delete_analysis(args.id):
            print(f"✅ Deleted analysis #{args.id}")
            return 0

        print(f"❌ Analysis #{args.id} not found")
        return 1
