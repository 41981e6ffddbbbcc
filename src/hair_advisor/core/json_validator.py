#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
JSON validation for generated hair care routines.

Validates LLM routine output against the expected shape with fallback
mechanisms.
"""

import json
import logging
import re
from typing import Any, Dict, List

from .exceptions import RoutineValidationError
from .models.routine import Routine, RoutineStep
from .text_sanitizer import preprocess_llm_response

logger = logging.getLogger(__name__)

FALLBACK_ROUTINE_TITLE = "Basic Hair Care Routine"
DEFAULT_STEP_TITLE = "Step {number}"

FALLBACK_STEPS = (
    ("Gentle cleansing", "Wash your hair with a mild, sulfate-free shampoo two to three times a week."),
    ("Conditioning", "Apply conditioner to the lengths and ends, then rinse with lukewarm water."),
    ("Protection", "Limit heat styling and protect your hair from strong sun."),
)

_TRAILING_COMMA_RE = re.compile(r',\s*([}\]])')
_UNQUOTED_KEY_RE = re.compile(r'([{,]\s*)([A-Za-z_][A-Za-z0-9_]*)(\s*:)')


class RoutineValidator:
    """Validates routine JSON output with fallbacks."""

    @staticmethod
    def validate_and_parse(raw_output: str) -> Routine:
        """
        Validate and parse LLM routine output.

        Args:
            raw_output: Raw string output from LLM

        Returns:
            Parsed Routine, or the fallback routine when nothing usable was found
        """
        try:
            data = RoutineValidator._load(raw_output)
        except RoutineValidationError as e:
            logger.error(f"Routine JSON could not be recovered: {e}")
            return fallback_routine()

        if not isinstance(data, dict):
            logger.error(f"Routine JSON is a {type(data).__name__}, expected an object")
            return fallback_routine()

        return RoutineValidator._validate_routine_schema(data)

    @staticmethod
    def _load(raw_output: str) -> Any:
        if not raw_output or not raw_output.strip():
            raise RoutineValidationError("Empty output")

        # Step 1: normalize quotes and line endings
        processed_output = preprocess_llm_response(raw_output)

        # Step 2: the model often returns pure JSON
        try:
            data = json.loads(processed_output.strip())
            logger.info("Successfully parsed LLM output as JSON")
            return data
        except json.JSONDecodeError:
            pass

        # Step 3: extract JSON from mixed or fenced output
        json_str = RoutineValidator._extract_json(processed_output)
        try:
            data = json.loads(json_str)
            logger.info("Successfully parsed extracted JSON")
            return data
        except json.JSONDecodeError as e:
            logger.warning(f"Extracted JSON did not parse: {e}")
            logger.debug(f"First 300 chars: {repr(json_str[:300])}")

        # Step 4: repair
        return RoutineValidator._repair_json(json_str)

    @staticmethod
    def _extract_json(raw_output: str) -> str:
        """Extract the outermost JSON object from mixed text output."""
        text = raw_output.replace('```json', '').replace('```', '')

        start_idx = text.find('{')
        end_idx = text.rfind('}')
        if start_idx != -1 and end_idx > start_idx:
            return text[start_idx:end_idx + 1].strip()

        # Fallback: assume entire output is JSON
        return text.strip()

    @staticmethod
    def _repair_json(broken_json: str) -> Any:
        """Attempt to repair common JSON syntax errors."""
        logger.warning(f"Attempting JSON repair ({len(broken_json)} chars)")

        repaired = _TRAILING_COMMA_RE.sub(r'\1', broken_json)
        repaired = _UNQUOTED_KEY_RE.sub(r'\1"\2"\3', repaired)
        # Raw newlines are only legal between tokens, which json ignores anyway
        repaired = repaired.replace('\r', ' ').replace('\n', ' ')

        try:
            result = json.loads(repaired)
        except json.JSONDecodeError as e:
            raise RoutineValidationError(
                f"JSON repair failed at position {e.pos}",
                context={'length': len(broken_json)}
            ) from e

        logger.warning("JSON repair successful")
        return result

    @staticmethod
    def _validate_routine_schema(data: Dict[str, Any]) -> Routine:
        title = data.get('title')
        if not isinstance(title, str) or not title.strip():
            logger.warning("Missing routine title, using default")
            title = FALLBACK_ROUTINE_TITLE

        raw_steps = data.get('steps')
        if not isinstance(raw_steps, list):
            logger.warning("Steps field is not a list, converting")
            raw_steps = []

        steps: List[RoutineStep] = []
        for item in raw_steps:
            step = RoutineValidator._validate_step_schema(item, len(steps) + 1)
            if step is not None:
                steps.append(step)

        return Routine(title=title.strip(), steps=steps)

    @staticmethod
    def _validate_step_schema(item: Any, number: int):
        """Validate one step; plain strings become descriptions."""
        if isinstance(item, str):
            return RoutineStep(title=DEFAULT_STEP_TITLE.format(number=number), description=item) if item.strip() else None
        if not isinstance(item, dict):
            return None

        title = item.get('title')
        description = item.get('description')
        if not isinstance(title, str) or not title.strip():
            title = DEFAULT_STEP_TITLE.format(number=number)
        if not isinstance(description, str):
            description = ""
        return RoutineStep(title=title, description=description)


def fallback_routine() -> Routine:
    """Routine returned when the model output cannot be used."""
    return Routine(
        title=FALLBACK_ROUTINE_TITLE,
        steps=[RoutineStep(title=t, description=d) for t, d in FALLBACK_STEPS],
        is_fallback=True,
    )


def validate_routine(raw_output: str) -> Routine:
    """
    Convenience function for validating routine output.

    Args:
        raw_output: Raw LLM output string

    Returns:
        Validated Routine
    """
    return RoutineValidator.validate_and_parse(raw_output)
