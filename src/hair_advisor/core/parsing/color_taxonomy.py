#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Canonical hair color taxonomy.

Maps informal color descriptions (English, French, Arabic) to a canonical
name, a representative hex value and a reference to the professional
level/tone numbering used on salon and retail dye shades.

The tables are built once at import time and exposed read-only.
"""

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from ..text_sanitizer import normalize_key

logger = logging.getLogger(__name__)

DEFAULT_COLOR_HEX = "#8B6B4A"


@dataclass(frozen=True)
class ColorTaxonomyEntry:
    """Canonical color with hex value and shade reference."""
    canonical_name: str
    hex: str
    reference_note: str


# Canonical entries keyed by their English name
_CANONICAL: Dict[str, ColorTaxonomyEntry] = {
    "black": ColorTaxonomyEntry(
        "Black", "#1C1A1A", "Similar to level 1 shades (1.0 Natural Black)"),
    "soft black": ColorTaxonomyEntry(
        "Soft Black", "#2A2424", "Similar to level 1 to 2 shades (1.1 Blue Black softened)"),
    "darkest brown": ColorTaxonomyEntry(
        "Darkest Brown", "#2E2220", "Similar to level 2 shades (2.0 Darkest Brown)"),
    "dark brown": ColorTaxonomyEntry(
        "Dark Brown", "#3B2A22", "Similar to level 3 shades (3.0 Dark Brown)"),
    "medium brown": ColorTaxonomyEntry(
        "Medium Brown", "#4E3426", "Similar to level 4 shades (4.0 Medium Brown)"),
    "brown": ColorTaxonomyEntry(
        "Brown", "#5A3D2B", "Similar to level 4 to 5 shades (4.0 to 5.0 Natural Brown)"),
    "light brown": ColorTaxonomyEntry(
        "Light Brown", "#7A5838", "Similar to level 5 shades (5.0 Light Brown)"),
    "chestnut": ColorTaxonomyEntry(
        "Chestnut Brown", "#6B4226", "Similar to level 5 warm shades (5.3 Golden Chestnut)"),
    "mahogany": ColorTaxonomyEntry(
        "Mahogany", "#5C2E25", "Similar to level 4 to 5 red-violet shades (4.56 Mahogany)"),
    "dark blonde": ColorTaxonomyEntry(
        "Dark Blonde", "#8D6A43", "Similar to level 6 shades (6.0 Dark Blonde)"),
    "medium blonde": ColorTaxonomyEntry(
        "Medium Blonde", "#A7814F", "Similar to level 7 shades (7.0 Medium Blonde)"),
    "blonde": ColorTaxonomyEntry(
        "Blonde", "#B89463", "Similar to level 7 to 8 shades (7.0 to 8.0 Natural Blonde)"),
    "light blonde": ColorTaxonomyEntry(
        "Light Blonde", "#C9A878", "Similar to level 8 shades (8.0 Light Blonde)"),
    "very light blonde": ColorTaxonomyEntry(
        "Very Light Blonde", "#DCC195", "Similar to level 9 shades (9.0 Very Light Blonde)"),
    "platinum blonde": ColorTaxonomyEntry(
        "Platinum Blonde", "#E8DCC4", "Similar to level 10 shades (10.1 Platinum Ash)"),
    "golden blonde": ColorTaxonomyEntry(
        "Golden Blonde", "#C8A060", "Similar to level 7 to 8 gold shades (7.3 Golden Blonde)"),
    "ash blonde": ColorTaxonomyEntry(
        "Ash Blonde", "#B3A386", "Similar to level 7 to 8 ash shades (7.1 Ash Blonde)"),
    "strawberry blonde": ColorTaxonomyEntry(
        "Strawberry Blonde", "#C9875A", "Similar to level 8 copper-gold shades (8.43 Strawberry Blonde)"),
    "auburn": ColorTaxonomyEntry(
        "Auburn", "#7B3B24", "Similar to level 5 red-copper shades (5.64 Auburn)"),
    "copper": ColorTaxonomyEntry(
        "Copper", "#A4532B", "Similar to level 6 to 7 copper shades (7.4 Copper Blonde)"),
    "red": ColorTaxonomyEntry(
        "Red", "#8E2B1F", "Similar to level 5 to 6 red shades (6.6 Intense Red)"),
    "burgundy": ColorTaxonomyEntry(
        "Burgundy", "#5B1F2A", "Similar to level 4 violet-red shades (4.62 Burgundy)"),
    "gray": ColorTaxonomyEntry(
        "Gray", "#8E8C88", "Natural unpigmented hair; comparable to silver toners"),
    "salt and pepper": ColorTaxonomyEntry(
        "Salt and Pepper", "#6F6B66", "Mixed pigmented and gray hair; blending shades at level 5 to 6"),
    "silver": ColorTaxonomyEntry(
        "Silver", "#B8B8B6", "Comparable to silver and violet toning glosses"),
    "white": ColorTaxonomyEntry(
        "White", "#E6E3DD", "Fully unpigmented hair; comparable to pearl toners"),
}

# Informal descriptions mapped onto canonical keys
_ALIASES: Dict[str, str] = {
    # English
    "jet black": "black",
    "natural black": "black",
    "off black": "soft black",
    "very dark brown": "darkest brown",
    "espresso": "darkest brown",
    "deep brown": "dark brown",
    "chocolate brown": "dark brown",
    "chocolate": "dark brown",
    "natural brown": "brown",
    "chestnut brown": "chestnut",
    "golden brown": "light brown",
    "caramel": "light brown",
    "dirty blonde": "dark blonde",
    "dark blond": "dark blonde",
    "blond": "blonde",
    "light blond": "light blonde",
    "honey blonde": "golden blonde",
    "platinum": "platinum blonde",
    "ash blond": "ash blonde",
    "ginger": "copper",
    "copper red": "copper",
    "wine": "burgundy",
    "grey": "gray",
    "silver gray": "silver",
    "silver grey": "silver",
    # French
    "noir": "black",
    "noir naturel": "black",
    "brun": "brown",
    "brun fonce": "dark brown",
    "brun clair": "light brown",
    "chatain": "chestnut",
    "chatain fonce": "medium brown",
    "chatain clair": "light brown",
    "acajou": "mahogany",
    "blond fonce": "dark blonde",
    "blond clair": "light blonde",
    "blond tres clair": "very light blonde",
    "blond platine": "platinum blonde",
    "blond dore": "golden blonde",
    "blond cendre": "ash blonde",
    "blond venitien": "strawberry blonde",
    "roux": "copper",
    "cuivre": "copper",
    "rouge": "red",
    "bordeaux": "burgundy",
    "gris": "gray",
    "poivre et sel": "salt and pepper",
    "argent": "silver",
    "blanc": "white",
    # Arabic
    "أسود": "black",
    "اسود": "black",
    "أسود فاحم": "black",
    "بني": "brown",
    "بني غامق": "dark brown",
    "بني داكن": "dark brown",
    "بني متوسط": "medium brown",
    "بني فاتح": "light brown",
    "كستنائي": "chestnut",
    "ماهوجني": "mahogany",
    "أشقر": "blonde",
    "أشقر داكن": "dark blonde",
    "أشقر غامق": "dark blonde",
    "أشقر فاتح": "light blonde",
    "أشقر بلاتيني": "platinum blonde",
    "أشقر ذهبي": "golden blonde",
    "أشقر رمادي": "ash blonde",
    "أحمر": "red",
    "نحاسي": "copper",
    "خمري": "burgundy",
    "رمادي": "gray",
    "شايب": "gray",
    "فضي": "silver",
    "أبيض": "white",
}


def _build_table() -> Mapping[str, ColorTaxonomyEntry]:
    table: Dict[str, ColorTaxonomyEntry] = {}
    for key, entry in _CANONICAL.items():
        table[normalize_key(key)] = entry
    for alias, canonical_key in _ALIASES.items():
        table[normalize_key(alias)] = _CANONICAL[canonical_key]
    return MappingProxyType(table)


COLOR_TAXONOMY: Mapping[str, ColorTaxonomyEntry] = _build_table()

# Basic color names scanned in the first sentence of a color section when no
# explicit phrase is found. Order matters: the first keyword present wins, so
# longer names come before the names they contain.
COLOR_KEYWORDS: Tuple[str, ...] = (
    # English
    "black", "brown", "blonde", "blond", "auburn", "red", "copper",
    "gray", "grey", "silver", "white", "chestnut",
    # French
    "noir", "brun", "chatain", "roux", "gris", "blanc",
    # Arabic
    "أسود", "بني", "أشقر", "أحمر", "نحاسي", "كستنائي", "رمادي", "فضي", "أبيض",
)

# Arabic keywords match whole words, optionally after the definite article
# or an attached conjunction/preposition ("والبني", "بالأسود")
_ARABIC_KEYWORD_PREFIX = r'(?:وال|بال|فال|لل|ال|و|ب|ف|ل)?'
_ARABIC_KEYWORD_RES = MappingProxyType({
    keyword: re.compile(r'(?<!\w)' + _ARABIC_KEYWORD_PREFIX + re.escape(normalize_key(keyword)) + r'(?!\w)')
    for keyword in COLOR_KEYWORDS
    if not normalize_key(keyword).isascii()
})


def lookup_color(phrase: str) -> Optional[ColorTaxonomyEntry]:
    """
    Look up a color phrase in the taxonomy.

    Matching is case-insensitive for Latin script and ignores diacritics,
    markdown and surrounding punctuation. A leading Arabic definite article
    and a trailing "hair"/"cheveux" word are tolerated.

    Args:
        phrase: Free-text color description

    Returns:
        Matching entry, or None when the phrase is unknown
    """
    key = normalize_key(phrase)
    if not key:
        return None

    for candidate in _candidate_keys(key):
        entry = COLOR_TAXONOMY.get(candidate)
        if entry is not None:
            logger.debug("Color '%s' mapped to %s", phrase, entry.canonical_name)
            return entry
    return None


def _candidate_keys(key: str):
    yield key
    words = key.split(' ')
    if words[-1] in ('hair', 'cheveux', 'color', 'colour', 'couleur') and len(words) > 1:
        yield ' '.join(words[:-1])
    # Arabic definite article on each word ("البني الداكن")
    if any(word.startswith('ال') for word in words):
        yield ' '.join(word[2:] if word.startswith('ال') and len(word) > 3 else word for word in words)


def find_color_keyword(text: str) -> Optional[str]:
    """
    Find the first basic color keyword contained in text.

    Keywords are tried in list order and must match whole words. Arabic
    keywords may carry an attached prefix such as the definite article, so
    "البني" matches "بني" while "البنية" (structure) does not.
    """
    normalized = normalize_key(text)
    if not normalized:
        return None

    words = set(re.findall(r'\w+', normalized))
    for keyword in COLOR_KEYWORDS:
        pattern = _ARABIC_KEYWORD_RES.get(keyword)
        if pattern is None:
            if normalize_key(keyword) in words:
                return keyword
        elif pattern.search(normalized):
            return keyword
    return None
