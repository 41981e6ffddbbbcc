#!/usr/bin/env python3
"""
Text normalization utilities for multi-language report processing.

Handles the quirks of English, French and Arabic model output that get in
the way of pattern matching: typographic quotes, whitespace runs, Arabic
diacritics and letter variants, and markdown emphasis.
"""

import re
import logging
import unicodedata

logger = logging.getLogger(__name__)

# Typographic quotation marks that models mix into their output
QUOTES_MAP = {
    "“": '"',  # Left double quotation mark
    "”": '"',  # Right double quotation mark
    "«": '"',  # Left guillemet
    "»": '"',  # Right guillemet
    "‘": "'",  # Left single quotation mark
    "’": "'",  # Right single quotation mark
    "\u00a0": " ",  # No-break space (French punctuation spacing)
    "\u202f": " ",  # Narrow no-break space
}

QUOTES_TRANSLATION = str.maketrans(QUOTES_MAP)

# Arabic letter variants folded before comparison
ARABIC_LETTER_MAP = {
    "ى": "ي",  # Alef maksura
    "ة": "ه",  # Teh marbuta
    "ـ": "",  # Tatweel
}

ARABIC_LETTER_TRANSLATION = str.maketrans(ARABIC_LETTER_MAP)

_WHITESPACE_RE = re.compile(r'\s+')
_MARKDOWN_EMPHASIS_RE = re.compile(r'[*_`]+')
_EDGE_PUNCTUATION = ' \t\n\r.,;:!?؟،"\'()[]{}-•'


def normalize_quotes(text: str) -> str:
    """
    Normalize typographic quotes and no-break spaces to ASCII equivalents.

    Args:
        text: Input text that may contain typographic quotes

    Returns:
        Text with normalized ASCII quotes and spaces
    """
    if not text:
        return text

    return text.translate(QUOTES_TRANSLATION)


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run to a single space and trim."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(' ', text).strip()


def normalize_for_comparison(text: str) -> str:
    """
    Normalize text for whole-string comparison.

    Lowercases (affects Latin script only), collapses whitespace runs to a
    single space and trims.
    """
    if not text:
        return ""
    return collapse_whitespace(text.lower())


def strip_diacritics(text: str) -> str:
    """
    Remove combining marks from text.

    Decomposes with NFKD and drops every non-spacing mark. For Arabic this
    removes harakat and folds hamza carriers (أ إ آ ؤ ئ) onto their base
    letter; for French it removes accents.
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize('NFKD', text)
    stripped = ''.join(ch for ch in decomposed if unicodedata.category(ch) != 'Mn')
    return unicodedata.normalize('NFC', stripped).translate(ARABIC_LETTER_TRANSLATION)


def strip_markdown(text: str) -> str:
    """Remove markdown emphasis markers (asterisks, underscores, backticks)."""
    if not text:
        return ""
    return _MARKDOWN_EMPHASIS_RE.sub('', text)


def normalize_key(text: str) -> str:
    """
    Build a lookup key from free text.

    Lowercase, diacritic-insensitive, markdown-free, whitespace collapsed and
    surrounding punctuation removed. Used for taxonomy and keyword tables.
    """
    if not text:
        return ""
    key = strip_markdown(normalize_quotes(text))
    key = strip_diacritics(key.lower())
    return collapse_whitespace(key).strip(_EDGE_PUNCTUATION)


def preprocess_llm_response(raw_response: str) -> str:
    """
    Preprocess a model response before pattern matching.

    Args:
        raw_response: Raw response from the text-generation service

    Returns:
        Response with quotes normalized and line endings unified
    """
    if not raw_response:
        return raw_response

    processed = normalize_quotes(raw_response).replace('\r\n', '\n').replace('\r', '\n')

    # Log if we made changes
    if processed != raw_response:
        logger.info("Normalized quotes and line endings in LLM response")
        logger.debug(
            "Original length: %d, processed length: %d",
            len(raw_response),
            len(processed),
        )

    return processed
