#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Icon hint resolution for recommendation items.

A hint is whatever followed "IconHint:" in the report: an emoji, an Arabic
keyword or an English keyword. Resolution always yields something the
display layer can render.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from ..text_sanitizer import normalize_key

DEFAULT_ICON = "sparkles-outline"

# Hints assigned by position when the report gives none
DEFAULT_ICON_HINTS: Tuple[str, ...] = ("water", "shampoo", "scissors", "sun", "leaf")

# Common emoji blocks (inclusive code-point ranges)
EMOJI_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x1F300, 0x1F5FF),  # Symbols & pictographs
    (0x1F600, 0x1F64F),  # Emoticons
    (0x1F680, 0x1F6FF),  # Transport & map
    (0x1F900, 0x1F9FF),  # Supplemental symbols & pictographs
    (0x1FA70, 0x1FAFF),  # Symbols & pictographs extended-A
    (0x2600, 0x26FF),    # Miscellaneous symbols
    (0x2700, 0x27BF),    # Dingbats
    (0x2B00, 0x2BFF),    # Arrows and stars
    (0x1F1E6, 0x1F1FF),  # Regional indicators
)

ENGLISH_ICON_KEYWORDS: Mapping[str, str] = MappingProxyType({
    "water": "water-outline",
    "hydration": "water-outline",
    "hydrate": "water-outline",
    "moisture": "water-outline",
    "drop": "water-outline",
    "shampoo": "flask-outline",
    "conditioner": "flask-outline",
    "wash": "flask-outline",
    "product": "flask-outline",
    "scissors": "cut-outline",
    "trim": "cut-outline",
    "cut": "cut-outline",
    "haircut": "cut-outline",
    "sun": "sunny-outline",
    "uv": "sunny-outline",
    "sunscreen": "sunny-outline",
    "leaf": "leaf-outline",
    "natural": "leaf-outline",
    "herbal": "leaf-outline",
    "oil": "color-fill-outline",
    "serum": "color-fill-outline",
    "diet": "nutrition-outline",
    "nutrition": "nutrition-outline",
    "food": "nutrition-outline",
    "vitamin": "medkit-outline",
    "supplement": "medkit-outline",
    "doctor": "medkit-outline",
    "dermatologist": "medkit-outline",
    "medical": "medkit-outline",
    "sleep": "moon-outline",
    "night": "moon-outline",
    "massage": "hand-left-outline",
    "hand": "hand-left-outline",
    "brush": "brush-outline",
    "comb": "brush-outline",
    "heat": "flame-outline",
    "dryer": "flame-outline",
    "flame": "flame-outline",
    "protect": "shield-checkmark-outline",
    "protection": "shield-checkmark-outline",
    "shield": "shield-checkmark-outline",
    "mask": "color-palette-outline",
    "color": "color-palette-outline",
    "dye": "color-palette-outline",
    "time": "time-outline",
    "schedule": "time-outline",
    "calendar": "calendar-outline",
    "exercise": "fitness-outline",
    "stress": "happy-outline",
    "heart": "heart-outline",
    "care": "heart-outline",
})

ARABIC_ICON_KEYWORDS: Mapping[str, str] = MappingProxyType({
    normalize_key(keyword): icon for keyword, icon in {
        "ماء": "water-outline",
        "ترطيب": "water-outline",
        "شامبو": "flask-outline",
        "بلسم": "flask-outline",
        "غسل": "flask-outline",
        "مقص": "cut-outline",
        "قص": "cut-outline",
        "شمس": "sunny-outline",
        "ورقة": "leaf-outline",
        "طبيعي": "leaf-outline",
        "أعشاب": "leaf-outline",
        "زيت": "color-fill-outline",
        "سيروم": "color-fill-outline",
        "غذاء": "nutrition-outline",
        "تغذية": "nutrition-outline",
        "فيتامين": "medkit-outline",
        "طبيب": "medkit-outline",
        "نوم": "moon-outline",
        "تدليك": "hand-left-outline",
        "مشط": "brush-outline",
        "فرشاة": "brush-outline",
        "حرارة": "flame-outline",
        "مجفف": "flame-outline",
        "حماية": "shield-checkmark-outline",
        "قناع": "color-palette-outline",
        "صبغة": "color-palette-outline",
        "وقت": "time-outline",
        "رياضة": "fitness-outline",
        "قلب": "heart-outline",
        "عناية": "heart-outline",
    }.items()
})

_ARABIC_LETTER_RE = re.compile(r'[\u0600-\u06FF]')
_TOKEN_SPLIT_RE = re.compile(r'[-_/\s]+')


@dataclass(frozen=True)
class IconResolution:
    """Outcome of resolving an icon hint."""
    kind: str  # "emoji", "arabic", "english" or "default"
    icon: str


def is_emoji(token: str) -> bool:
    """Check whether the token starts with a character from a common emoji block."""
    if not token:
        return False
    code_point = ord(token[0])
    return any(start <= code_point <= end for start, end in EMOJI_RANGES)


def default_icon_hint(index: int) -> str:
    """Hint for the recommendation at ``index`` when the report gives none."""
    return DEFAULT_ICON_HINTS[index % len(DEFAULT_ICON_HINTS)]


def _arabic_icon(key: str) -> Optional[str]:
    icon = ARABIC_ICON_KEYWORDS.get(key)
    if icon is None and key.startswith('ال') and len(key) > 3:
        icon = ARABIC_ICON_KEYWORDS.get(key[2:])
    return icon


def resolve_icon_hint(token: str) -> IconResolution:
    """
    Classify an icon hint and resolve it to something renderable.

    Order: literal emoji, Arabic keyword, English keyword, default icon.
    Never raises.
    """
    token = (token or "").strip()
    if is_emoji(token):
        return IconResolution("emoji", token)

    key = normalize_key(token)
    if not key:
        return IconResolution("default", DEFAULT_ICON)

    if _ARABIC_LETTER_RE.search(key):
        # whole hint first, then each word of a multi-word name
        for candidate in [key] + _TOKEN_SPLIT_RE.split(key):
            icon = _arabic_icon(candidate)
            if icon is not None:
                return IconResolution("arabic", icon)
        return IconResolution("default", DEFAULT_ICON)

    icon = ENGLISH_ICON_KEYWORDS.get(key)
    if icon is None:
        for part in _TOKEN_SPLIT_RE.split(key):
            # plain plurals ("vitamins", "oils")
            icon = ENGLISH_ICON_KEYWORDS.get(part) or ENGLISH_ICON_KEYWORDS.get(part[:-1] if part.endswith('s') else '')
            if icon is not None:
                break
    if icon is not None:
        return IconResolution("english", icon)
    return IconResolution("default", DEFAULT_ICON)
