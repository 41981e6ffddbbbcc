#!/usr/bin/env python3
"""
Report parsing for hair analysis text.

Provides the report parser, the color taxonomy and icon hint resolution.
"""

from .report_parser import ReportParser, parse_report, is_failure_report, FAILURE_PHRASES
from .color_taxonomy import ColorTaxonomyEntry, COLOR_TAXONOMY, DEFAULT_COLOR_HEX, lookup_color
from .icon_hints import IconResolution, resolve_icon_hint, DEFAULT_ICON, DEFAULT_ICON_HINTS
from .patterns import detect_language

__all__ = [
    'ReportParser', 'parse_report', 'is_failure_report', 'FAILURE_PHRASES',
    'ColorTaxonomyEntry', 'COLOR_TAXONOMY', 'DEFAULT_COLOR_HEX', 'lookup_color',
    'IconResolution', 'resolve_icon_hint', 'DEFAULT_ICON', 'DEFAULT_ICON_HINTS',
    'detect_language'
]
