#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Report parser for free-text hair analysis reports.

Turns one natural-language report (English, French or Arabic) returned by
the text-generation service into an AnalysisResult:

A. whole-report failure detection
B. health score
C. color analysis (hex code, detected color, taxonomy mapping)
D. scalp summary
E. recommendations with icon hints

Each step degrades to "field absent" when nothing matches; parsing never
raises for string input and holds no state between calls.
"""

import logging
import re
from typing import FrozenSet, List, Optional, Tuple

from ..models.analysis import (
    AnalysisResult,
    ColorAnalysis,
    RecommendationItem,
    DEFAULT_HEALTH_SCORE,
)
from ..text_sanitizer import (
    collapse_whitespace,
    normalize_for_comparison,
    normalize_quotes,
    preprocess_llm_response,
    strip_markdown,
)
from . import patterns
from .color_taxonomy import DEFAULT_COLOR_HEX, find_color_keyword, lookup_color
from .icon_hints import default_icon_hint

logger = logging.getLogger(__name__)

MIN_SCALP_SENTENCE_LENGTH = 10
MAX_RECOMMENDATIONS = 5

_BASE_FAILURE_PHRASES = (
    # English
    "unable to analyze",
    "unable to analyse",
    "unable to analyze the image",
    "unable to analyze the images",
    "analysis failed",
    "analysis unavailable",
    "no data",
    "no data available",
    "no analysis available",
    "i cannot analyze images",
    "i can't analyze images",
    "i am unable to analyze images",
    "i'm unable to analyze images",
    "i'm unable to analyze the images",
    # French
    "impossible d'analyser",
    "impossible d'analyser l'image",
    "impossible d'analyser les images",
    "analyse impossible",
    "analyse échouée",
    "aucune donnée",
    "aucune donnée disponible",
    # Arabic
    "غير قادر على التحليل",
    "غير قادر على تحليل الصور",
    "لا يمكن التحليل",
    "لا يمكنني تحليل الصور",
    "تعذر التحليل",
    "تعذر تحليل الصورة",
    "تعذر تحليل الصور",
    "فشل التحليل",
    "لا توجد بيانات",
    "لا توجد بيانات متاحة",
)

# Each phrase is also accepted with a single trailing period
FAILURE_PHRASES: FrozenSet[str] = frozenset(
    variant
    for phrase in _BASE_FAILURE_PHRASES
    for variant in (phrase, phrase + ".")
)

_HEX_ONLY_RE = re.compile(r"^#[0-9a-f]{6}$", re.IGNORECASE)
_LABEL_TRIM = " \t-–|,;:"


def is_failure_report(text: str) -> bool:
    """
    Check whether the whole report is a known failure message.

    The normalized text must equal a failure phrase; a report that merely
    mentions one of the phrases is not a failure.
    """
    return normalize_for_comparison(normalize_quotes(text)) in FAILURE_PHRASES


class ReportParser:
    """
    Parser from report text to AnalysisResult.

    The instance only carries immutable settings, so one parser can be
    shared between threads.
    """

    def __init__(self,
                 default_health_score: int = DEFAULT_HEALTH_SCORE,
                 min_sentence_length: int = MIN_SCALP_SENTENCE_LENGTH,
                 max_recommendations: int = MAX_RECOMMENDATIONS) -> None:
        self.default_health_score = default_health_score
        self.min_sentence_length = min_sentence_length
        self.max_recommendations = max_recommendations

    @classmethod
    def from_config(cls, parser_config) -> 'ReportParser':
        """Create a parser from a ParserConfig."""
        return cls(
            default_health_score=parser_config.default_health_score,
            min_sentence_length=parser_config.min_scalp_sentence_length,
            max_recommendations=parser_config.max_recommendations,
        )

    def parse(self, text: Optional[str], language: Optional[str] = None) -> AnalysisResult:
        """
        Parse one report.

        Args:
            text: Raw report text; None is treated as empty
            language: Optional declared language ("en", "fr", "ar") used to
                try that language's patterns first

        Returns:
            AnalysisResult for the report
        """
        raw_text = text or ""

        if not raw_text.strip():
            logger.warning("Empty report text, returning default analysis")
            return AnalysisResult(raw_text=raw_text, health_score=self.default_health_score)

        if is_failure_report(raw_text):
            logger.info("Report is a known failure message")
            return AnalysisResult(
                raw_text=raw_text,
                health_score=self.default_health_score,
                analysis_failed=True,
            )

        body = preprocess_llm_response(raw_text)
        if language not in patterns.SUPPORTED_LANGUAGES:
            language = patterns.detect_language(body)
        logger.debug("Parsing report (%d chars, language=%s)", len(body), language)

        return AnalysisResult(
            raw_text=raw_text,
            health_score=self.extract_health_score(body, language),
            color_analysis=self.extract_color_analysis(body, language),
            scalp_summary=self.extract_scalp_summary(body, language),
            recommendations=self.extract_recommendations(body, language),
        )

    # Health score
    def extract_health_score(self, text: str, language: Optional[str] = None) -> int:
        """Return the first matching score clamped to [0, 100], or the default."""
        cascade = patterns.prefer_language(patterns.HEALTH_SCORE_PATTERNS, language)
        match = patterns.first_match(cascade, text)
        if not match:
            logger.debug("No health score found, using default %d", self.default_health_score)
            return self.default_health_score

        score = int(match.group(1))
        if score > 100:
            logger.warning("Health score %d out of range, clamping to 100", score)
        return max(0, min(100, score))

    # Color
    def extract_color_analysis(self, text: str, language: Optional[str] = None) -> Optional[ColorAnalysis]:
        """Build the color analysis from the color section, if there is one."""
        section = self._find_section(patterns.COLOR_SECTION_PATTERNS, text, language)
        if section is None:
            return None

        hex_match = patterns.first_match(
            patterns.prefer_language(patterns.HEX_CODE_PATTERNS, language), section)
        text_hex = hex_match.group(1).upper() if hex_match else None

        phrase = self._detected_color_phrase(section, language)
        if phrase is None:
            phrase = find_color_keyword(self._first_sentence(section) or "")

        if phrase is None and text_hex is None:
            logger.debug("Color section found but no color could be identified")
            return None

        entry = lookup_color(phrase) if phrase else None
        if entry is not None:
            label = entry.canonical_name
            color_hex = text_hex or entry.hex
            reference_note = entry.reference_note
        else:
            label = phrase or text_hex
            color_hex = text_hex or DEFAULT_COLOR_HEX
            reference_note = None

        return ColorAnalysis(
            detected_color_label=label,
            color_hex=color_hex,
            color_reference_note=reference_note,
            summary=self._color_summary(section, language, label, color_hex, reference_note),
        )

    def _detected_color_phrase(self, section: str, language: Optional[str]) -> Optional[str]:
        cascade = patterns.prefer_language(patterns.DETECTED_COLOR_PATTERNS, language)
        for pattern in cascade:
            match = pattern.search(section)
            if not match:
                continue
            phrase = collapse_whitespace(strip_markdown(match.group(1))).strip(_LABEL_TRIM)
            if phrase and not _HEX_ONLY_RE.match(phrase):
                return phrase
        return None

    def _color_summary(self, section: str, language: Optional[str], label: str,
                       color_hex: str, reference_note: Optional[str]) -> str:
        match = patterns.first_match(
            patterns.prefer_language(patterns.COLOR_SUMMARY_PATTERNS, language), section)
        if match:
            stated = collapse_whitespace(strip_markdown(match.group(1))).strip(_LABEL_TRIM)
            if stated:
                return stated

        summary = f"Detected hair color: {label} ({color_hex})"
        if reference_note:
            summary += f". {reference_note}"
        return summary + "."

    # Scalp
    def extract_scalp_summary(self, text: str, language: Optional[str] = None) -> Optional[str]:
        """First sentence of the scalp section long enough to be meaningful."""
        section = self._find_section(patterns.SCALP_SECTION_PATTERNS, text, language)
        if section is None:
            return None

        for sentence in self._sentences(section):
            if len(sentence) >= self.min_sentence_length:
                return sentence if sentence.endswith('.') else sentence + '.'
        logger.debug("Scalp section has no sentence of %d+ characters", self.min_sentence_length)
        return None

    # Recommendations
    def extract_recommendations(self, text: str, language: Optional[str] = None) -> Tuple[RecommendationItem, ...]:
        """Up to ``max_recommendations`` bulleted items from the recommendations section."""
        section = self._find_section(patterns.RECOMMENDATIONS_SECTION_PATTERNS, text, language)
        if section is None:
            return ()

        bullet_lines: List[str] = []
        for line in section.splitlines():
            stripped = line.strip()
            if not stripped.startswith(('-', '•')):
                continue
            content = patterns.BULLET_RE.sub('', stripped, count=1).strip()
            # skip empty bullets and horizontal rules ("---")
            if content.strip('-•*_ '):
                bullet_lines.append(content)
            if len(bullet_lines) >= self.max_recommendations:
                break

        return tuple(
            self._recommendation_item(line, index)
            for index, line in enumerate(bullet_lines)
        )

    def _recommendation_item(self, line: str, index: int) -> RecommendationItem:
        icon_hint = None
        hint_match = patterns.ICON_HINT_RE.search(line)
        if hint_match:
            icon_hint = collapse_whitespace(hint_match.group(1)).rstrip('.') or None
            line = line[:hint_match.start()] + ' ' + line[hint_match.end():]

        text = patterns.RECOMMENDATION_LABEL_RE.sub('', line.strip(), count=1)
        text = collapse_whitespace(text.replace('**', '')).strip(_LABEL_TRIM)

        return RecommendationItem(text=text, icon_hint=icon_hint or default_icon_hint(index))

    # Helpers
    @staticmethod
    def _find_section(cascade, text: str, language: Optional[str]) -> Optional[str]:
        match = patterns.first_match(patterns.prefer_language(cascade, language), text)
        if not match:
            return None
        return match.group(1)

    @staticmethod
    def _sentences(section: str) -> List[str]:
        sentences = []
        for raw in patterns.SENTENCE_SPLIT_RE.split(section):
            sentence = collapse_whitespace(strip_markdown(patterns.LEADING_MARKERS_RE.sub('', raw)))
            if sentence:
                sentences.append(sentence)
        return sentences

    def _first_sentence(self, section: str) -> Optional[str]:
        sentences = self._sentences(section)
        return sentences[0] if sentences else None


_default_parser = ReportParser()


def parse_report(text: Optional[str], language: Optional[str] = None) -> AnalysisResult:
    """Parse a report with the default settings."""
    return _default_parser.parse(text, language)
