#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pattern cascades for hair analysis reports.

Every extraction step is an ordered tuple of independent patterns tagged
with the language they target. The parser tries them in order and stops at
the first match; adding a language or a phrasing means adding one entry.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

_FLAGS = re.IGNORECASE | re.MULTILINE

# Separators allowed between a label and its value. The score separator may
# cross lines because the report template puts the value under the label.
_SCORE_SEP = r"[\s*:：\-\[\]()]*"
_LINE_SEP = r"[ \t*:：\-]*"

# A captured phrase stops at punctuation, brackets or the end of the line
_PHRASE = r"([^\n.,;:!?؟،()\[\]]+)"

_HEX = r"(#[0-9a-f]{6})(?![0-9a-f])"


@dataclass(frozen=True)
class LabeledPattern:
    """A compiled pattern and the report language it is written for."""
    language: str
    regex: re.Pattern

    def search(self, text: str) -> Optional[re.Match]:
        return self.regex.search(text)


def _p(language: str, pattern: str, flags: int = _FLAGS) -> LabeledPattern:
    return LabeledPattern(language, re.compile(pattern, flags))


def first_match(patterns: Iterable[LabeledPattern], text: str) -> Optional[re.Match]:
    """Return the match of the first pattern that matches, or None."""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match
    return None


def prefer_language(patterns: Sequence[LabeledPattern], language: Optional[str]) -> Tuple[LabeledPattern, ...]:
    """
    Reorder a cascade so patterns for ``language`` come first.

    The sort is stable and language-neutral patterns ("any") keep their
    position at the end of the cascade.
    """
    if not language:
        return tuple(patterns)
    labeled = [p for p in patterns if p.language != "any"]
    neutral = [p for p in patterns if p.language == "any"]
    labeled.sort(key=lambda p: 0 if p.language == language else 1)
    return tuple(labeled + neutral)


# --- Section headers -------------------------------------------------------

# Optional markdown heading, bold marker and list numbering before the name
_HEADER_PREFIX = r"^[ \t]*(?:#{1,6}[ \t]*)?(?:\*\*|__)?[ \t]*(?:\d+[.)][ \t]*)?"
# Colon and/or closing bold, or a bare header alone on its line
_HEADER_SUFFIX = (
    r"(?:[ \t]*(?:\*\*|__)?[ \t]*[:：][ \t]*(?:\*\*|__)?"
    r"|[ \t]*(?:\*\*|__)"
    r"|[ \t]*(?=\n|\Z))"
)
# Body runs until the next bold or markdown heading line, or end of text
_SECTION_BODY = r"(.*?)(?=^[ \t]*(?:\*\*|__|#{1,6}[ \t])|\Z)"


def _section(language: str, name: str) -> LabeledPattern:
    return _p(language, _HEADER_PREFIX + name + _HEADER_SUFFIX + _SECTION_BODY, _FLAGS | re.DOTALL)


COLOR_SECTION_PATTERNS: Tuple[LabeledPattern, ...] = (
    _section("en", r"(?:detailed[ \t]+)?(?:hair[ \t]+)?colou?r[ \t]+analysis"),
    _section("fr", r"analyse[ \t]+(?:d[ée]taill[ée]e[ \t]+)?de[ \t]+la[ \t]+couleur"),
    _section("ar", r"تحليل[ \t]+(?:مفصل[ \t]+)?(?:للون|اللون|لون[ \t]+الشعر)"),
)

SCALP_SECTION_PATTERNS: Tuple[LabeledPattern, ...] = (
    _section("en", r"(?:detailed[ \t]+)?scalp[ \t]+(?:analysis|condition)"),
    _section("fr", r"analyse[ \t]+(?:d[ée]taill[ée]e[ \t]+)?du[ \t]+cuir[ \t]+chevelu"),
    _section("ar", r"تحليل[ \t]+(?:مفصل[ \t]+)?(?:ل|ال)?فروة[ \t]+ال(?:رأس|راس)"),
)

RECOMMENDATIONS_SECTION_PATTERNS: Tuple[LabeledPattern, ...] = (
    _section("en", r"(?:key[ \t]+|personalized[ \t]+)?recommendations"),
    _section("fr", r"recommandations"),
    _section("ar", r"(?:ال)?توصيات"),
)


# --- Health score ----------------------------------------------------------

HEALTH_SCORE_PATTERNS: Tuple[LabeledPattern, ...] = (
    _p("en", r"global\s+hair\s+state\s+score" + _SCORE_SEP + r"(\d{1,3})\s*[%٪]"),
    _p("ar", r"(?:ال)?درجة\s+(?:ال)?عالمية\s+لحالة\s+الشعر" + _SCORE_SEP + r"(\d{1,3})\s*[%٪]"),
    _p("fr", r"score\s+global\s+de\s+l'[ée]tat\s+des\s+cheveux" + _SCORE_SEP + r"(\d{1,3})\s*[%٪]"),
    # First standalone percentage anywhere
    _p("any", r"(?<![\d.,])(\d{1,3})\s*[%٪]"),
)


# --- Color -----------------------------------------------------------------

HEX_CODE_PATTERNS: Tuple[LabeledPattern, ...] = (
    _p("en", r"hex(?:adecimal)?(?:[ \t]+(?:colou?r[ \t]+)?(?:code|value))?" + _LINE_SEP + _HEX),
    _p("fr", r"code[ \t]+(?:couleur[ \t]+)?hexad[ée]cimal" + _LINE_SEP + _HEX),
    _p("ar", r"(?:رمز|كود)[ \t]+(?:ال)?لون(?:[ \t]+(?:ال)?سداسي)?" + _LINE_SEP + _HEX),
    _p("ar", r"(?:ال)?رمز[ \t]+(?:ال)?سداسي" + _LINE_SEP + _HEX),
    _p("any", r"(?<![0-9a-z&])" + _HEX),
)

DETECTED_COLOR_PATTERNS: Tuple[LabeledPattern, ...] = (
    _p("en", r"detected[ \t]+(?:hair[ \t]+)?colou?r" + _LINE_SEP + _PHRASE),
    _p("en", r"hair[ \t]+colou?r[ \t]+is[ \t]+(?:an?[ \t]+|the[ \t]+)?" + _PHRASE),
    _p("en", r"appears[ \t]+to[ \t]+be[ \t]+(?:an?[ \t]+)?" + _PHRASE),
    _p("fr", r"couleur[ \t]+d[ée]tect[ée]e" + _LINE_SEP + _PHRASE),
    _p("fr", r"couleur[ \t]+(?:des[ \t]+cheveux[ \t]+)?est[ \t]+(?:un[ \t]+|une[ \t]+|d[ue][ \t]+)?" + _PHRASE),
    _p("fr", r"semble[ \t]+[êe]tre[ \t]+(?:un[ \t]+|une[ \t]+)?" + _PHRASE),
    _p("ar", r"اللون[ \t]+المكتشف" + _LINE_SEP + _PHRASE),
    _p("ar", r"لون[ \t]+الشعر(?:[ \t]+هو)?" + _LINE_SEP + _PHRASE),
    _p("ar", r"يبدو[ \t]+(?:أنه[ \t]+|انه[ \t]+)?" + _PHRASE),
)

COLOR_SUMMARY_PATTERNS: Tuple[LabeledPattern, ...] = (
    _p("en", r"^[ \t]*[-•]?[ \t]*\**[ \t]*summary" + _LINE_SEP + r"([^\n]+)$"),
    _p("fr", r"^[ \t]*[-•]?[ \t]*\**[ \t]*r[ée]sum[ée]" + _LINE_SEP + r"([^\n]+)$"),
    _p("ar", r"^[ \t]*[-•]?[ \t]*\**[ \t]*(?:ال)?ملخص" + _LINE_SEP + r"([^\n]+)$"),
)


# --- Sentences and recommendations -----------------------------------------

SENTENCE_SPLIT_RE = re.compile(r"[.!?؟۔\n]+")

# Bullets, quote markers and headings at the start of a sentence
LEADING_MARKERS_RE = re.compile(r"^[\s\-•*>#]+")

BULLET_RE = re.compile(r"^[ \t]*[-•][ \t]*")

# The hint runs to the end of the line or the next delimiter and may be
# wrapped in brackets, as in the prompt template ("IconHint: [water drop]").
ICON_HINT_RE = re.compile(
    r"[(\[]?[ \t]*\**[ \t]*icon[ \t_-]?hint[ \t]*\**[ \t]*[:：][ \t]*\**[ \t]*"
    r"[(\[]?[ \t]*"
    r"([^\s*()\[\],;|](?:[^\n*()\[\],;|]*[^\s*()\[\],;|])?)"
    r"[ \t]*[)\]]?[ \t]*\**[ \t]*[)\]]?",
    re.IGNORECASE,
)

RECOMMENDATION_LABEL_RE = re.compile(
    r"^[ \t]*\**[ \t]*(?:recommendation|recommandation|توصية)(?:[ \t]*\d+)?"
    r"[ \t]*\**[ \t]*[:：][ \t]*\**[ \t]*",
    re.IGNORECASE,
)


# --- Languages ---------------------------------------------------------------

ARABIC_LETTERS_RE = re.compile(r"[\u0600-\u06FF]")
LATIN_LETTERS_RE = re.compile(r"[A-Za-zÀ-ÿ]")
FRENCH_MARKERS_RE = re.compile(
    r"\b(?:cheveux|couleur|cuir\s+chevelu|recommandations?|analyse\s+d[ée]taill[ée]e|état)\b",
    re.IGNORECASE,
)

SUPPORTED_LANGUAGES: Tuple[str, ...] = ("en", "fr", "ar")


def detect_language(text: str) -> str:
    """
    Guess the report language from its script and a few French markers.

    Returns "ar" when Arabic letters outnumber Latin ones, "fr" when French
    section vocabulary is present, otherwise "en".
    """
    if not text:
        return "en"
    arabic = len(ARABIC_LETTERS_RE.findall(text))
    latin = len(LATIN_LETTERS_RE.findall(text))
    if arabic > latin:
        return "ar"
    if FRENCH_MARKERS_RE.search(text):
        return "fr"
    return "en"
