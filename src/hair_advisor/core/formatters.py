#!/usr/bin/env python3
"""
Formatting utilities for analysis results, routines and history records.
"""

from datetime import datetime
from typing import List, Optional

import pytz

from .models.analysis import AnalysisResult
from .models.record import AnalysisRecord
from .models.routine import Routine
from .parsing.icon_hints import resolve_icon_hint


def format_timestamp(value: Optional[datetime], timezone_name: str = "UTC") -> str:
    """Format a stored UTC timestamp in the display timezone."""
    if value is None:
        return "unknown"
    if value.tzinfo is None:
        value = pytz.utc.localize(value)
    local = value.astimezone(pytz.timezone(timezone_name))
    return local.strftime("%Y-%m-%d %H:%M %Z")


def format_analysis_result(result: AnalysisResult) -> str:
    """Format a parsed analysis for terminal display."""
    if result.analysis_failed:
        return "\n=== Hair Analysis ===\n❌ The analysis could not be completed.\n"

    lines = [
        "\n=== Hair Analysis ===",
        f"📊 Health score: {result.health_score}%",
    ]

    color = result.color_analysis
    if color is not None:
        lines.extend([
            "",
            "🎨 Color:",
            f"  {color.detected_color_label} ({color.color_hex or 'no hex'})",
        ])
        if color.color_reference_note:
            lines.append(f"  {color.color_reference_note}")
        lines.append(f"  {color.summary}")

    if result.scalp_summary:
        lines.extend([
            "",
            "🧴 Scalp:",
            f"  {result.scalp_summary}",
        ])

    if result.recommendations:
        lines.extend([
            "",
            "💡 Recommendations:"
        ])
        for item in result.recommendations:
            icon = resolve_icon_hint(item.icon_hint)
            marker = icon.icon if icon.kind == "emoji" else f"[{icon.icon}]"
            lines.append(f"  {marker} {item.text}")

    if not result.has_structured_content:
        lines.extend([
            "",
            "ℹ️ No structured sections found; showing raw text:",
            result.raw_text.strip(),
        ])

    return "\n".join(lines) + "\n"


def format_routine(routine: Routine) -> str:
    """Format a care routine for display."""
    lines = [f"\n=== {routine.title} ==="]
    if routine.is_fallback:
        lines.append("⚠️ The generated routine could not be read; showing a basic routine.")
    for number, step in enumerate(routine.steps, 1):
        lines.append(f"{number}. {step.title}")
        if step.description:
            lines.append(f"   {step.description}")
    return "\n".join(lines) + "\n"


def format_record(record: AnalysisRecord, timezone_name: str = "UTC") -> str:
    """One-line summary of a stored analysis with its re-parsed score."""
    result = record.parse()
    views = ", ".join(sorted(record.image_references)) or "no images"
    status = "failed" if result.analysis_failed else f"score {result.health_score}%"
    return f"[{format_timestamp(record.created_at, timezone_name)}] #{record.id} {status} ({views})"


def format_records(records: List[AnalysisRecord], timezone_name: str = "UTC") -> str:
    if not records:
        return "No analyses found."
    return "\n".join(format_record(record, timezone_name) for record in records)
