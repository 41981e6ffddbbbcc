#!/usr/bin/env python3
"""
Analysis result data models.

Contains the immutable structures produced by the report parser.
"""

from typing import Any, Dict, Optional, Tuple
from dataclasses import dataclass, field

DEFAULT_HEALTH_SCORE = 75


@dataclass(frozen=True)
class ColorAnalysis:
    """Detected hair color with its hex value and product reference."""
    detected_color_label: str
    summary: str
    color_hex: Optional[str] = None
    color_reference_note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'detected_color_label': self.detected_color_label,
            'color_hex': self.color_hex,
            'color_reference_note': self.color_reference_note,
            'summary': self.summary,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ColorAnalysis':
        return cls(
            detected_color_label=data.get('detected_color_label', ''),
            summary=data.get('summary', ''),
            color_hex=data.get('color_hex'),
            color_reference_note=data.get('color_reference_note'),
        )


@dataclass(frozen=True)
class RecommendationItem:
    """A single piece of advice with the icon hint used to render it."""
    text: str
    icon_hint: str

    def to_dict(self) -> Dict[str, Any]:
        return {'text': self.text, 'icon_hint': self.icon_hint}


@dataclass(frozen=True)
class AnalysisResult:
    """
    Structured view of one free-text hair analysis report.

    Built once per parse call. Optional fields are None when the report did
    not contain a usable section; ``analysis_failed`` is set only when the
    whole report is a known failure message.
    """
    raw_text: str
    health_score: int = DEFAULT_HEALTH_SCORE
    color_analysis: Optional[ColorAnalysis] = None
    scalp_summary: Optional[str] = None
    recommendations: Tuple[RecommendationItem, ...] = field(default_factory=tuple)
    analysis_failed: bool = False

    def __post_init__(self):
        """Coerce recommendations to a tuple so the record stays hashable."""
        if not isinstance(self.recommendations, tuple):
            object.__setattr__(self, 'recommendations', tuple(self.recommendations))

    @property
    def has_structured_content(self) -> bool:
        """True when at least one optional section was extracted."""
        return bool(self.color_analysis or self.scalp_summary or self.recommendations)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization and display layers."""
        return {
            'health_score': self.health_score,
            'color_analysis': self.color_analysis.to_dict() if self.color_analysis else None,
            'scalp_summary': self.scalp_summary,
            'recommendations': [item.to_dict() for item in self.recommendations],
            'analysis_failed': self.analysis_failed,
            'raw_text': self.raw_text,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AnalysisResult':
        """Create AnalysisResult from dictionary."""
        color = data.get('color_analysis')
        return cls(
            raw_text=data.get('raw_text', ''),
            health_score=int(data.get('health_score', DEFAULT_HEALTH_SCORE)),
            color_analysis=ColorAnalysis.from_dict(color) if color else None,
            scalp_summary=data.get('scalp_summary'),
            recommendations=tuple(
                RecommendationItem(text=item.get('text', ''), icon_hint=item.get('icon_hint', ''))
                for item in data.get('recommendations') or []
            ),
            analysis_failed=bool(data.get('analysis_failed', False)),
        )
