#!/usr/bin/env python3
"""
Advice command endpoints: request analyses, answers and routines from the
text-generation service.
"""

import logging
from argparse import Namespace
from typing import Dict, List, Optional

from .base import BaseCommand
from ..core.formatters import format_analysis_result, format_routine
from ..core.json_validator import validate_routine
from ..core.prompts import (
    IMAGE_VIEWS,
    build_hair_analysis_prompt,
    build_question_prompt,
    build_routine_prompt,
)

logger = logging.getLogger(__name__)


def parse_image_references(values: Optional[List[str]]) -> Dict[str, str]:
    """
    Turn ``VIEW=URL`` arguments into an image reference mapping.

    Raises:
        ValueError: If an argument is malformed or names an unknown view
    """
    references: Dict[str, str] = {}
    for value in values or []:
        view, sep, url = value.partition('=')
        view = view.strip().lower()
        url = url.strip()
        if not sep or not view or not url:
            raise ValueError(f"Invalid image reference '{value}', expected VIEW=URL")
        if view not in IMAGE_VIEWS:
            raise ValueError(f"Unknown image view '{view}'. Available: {', '.join(IMAGE_VIEWS)}")
        references[view] = url
    return references


class AdviceCommand(BaseCommand):
    """Request hair analyses, advisor answers and care routines."""

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute advice subcommand."""
        try:
            if subcommand == "analyze":
                return self.analyze(args)
            elif subcommand == "ask":
                return self.ask(args)
            elif subcommand == "routine":
                return self.routine(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except (Exception, KeyboardInterrupt) as e:
            return self.handle_error(e, f"advice {subcommand}")

    def _language(self, args: Namespace) -> str:
        return getattr(args, 'language', None) or self.config.app.default_language

    def analyze(self, args: Namespace) -> int:
        """Run a full hair analysis for a set of images."""
        image_references = parse_image_references(getattr(args, 'image', None))
        if not image_references:
            raise ValueError("At least one --image VIEW=URL is required")

        language = self._language(args)
        prompt = build_hair_analysis_prompt(image_references, language)

        print(f"🔍 Analyzing {len(image_references)} image(s)...")
        advice = self.create_advice_client().get_advice(prompt)
        if not advice.success:
            print(f"❌ Analysis request failed: {advice.error}")
            return 1

        result = self.report_parser.parse(advice.data, language)
        print(format_analysis_result(result))

        user_id = getattr(args, 'user_id', None)
        if user_id and not getattr(args, 'no_save', False):
            analysis_id = self.analysis_service.save_analysis(user_id, advice.data, image_references)
            print(f"💾 Saved analysis #{analysis_id}")
        return 0

    def ask(self, args: Namespace) -> int:
        """Ask the hair advisor a free-form question."""
        question = (getattr(args, 'question', None) or '').strip()
        if not question:
            raise ValueError("--question must not be empty")

        prompt = build_question_prompt(question, self._language(args), getattr(args, 'image_url', None))
        advice = self.create_advice_client().get_advice(prompt)
        if not advice.success:
            print(f"❌ Advisor request failed: {advice.error}")
            return 1

        print(advice.data.strip())
        return 0

    def routine(self, args: Namespace) -> int:
        """Generate a care routine from a saved analysis report."""
        analysis_text = self.read_text(getattr(args, 'file', None))
        if not analysis_text.strip():
            raise ValueError("Analysis text is empty")

        prompt = build_routine_prompt(analysis_text, self._language(args))
        advice = self.create_advice_client().get_advice(prompt)
        if not advice.success:
            print(f"❌ Routine request failed: {advice.error}")
            return 1

        print(format_routine(validate_routine(advice.data)))
        return 0
