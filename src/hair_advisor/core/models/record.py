#!/usr/bin/env python3
"""
Stored analysis record model.

The store keeps the raw report text and the image references that went
with the request; structured fields are rebuilt by re-parsing on read.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from dateutil import parser as date_parser


def _parse_datetime_safe(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError):
        return None


@dataclass
class AnalysisRecord:
    """Represents an analysis row keyed by user and timestamp."""
    user_id: str
    raw_text: str
    image_references: Dict[str, str] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    id: Optional[int] = None

    def __post_init__(self):
        """Normalize timestamps to timezone-aware UTC."""
        if self.created_at is not None and self.created_at.tzinfo is None:
            self.created_at = self.created_at.replace(tzinfo=timezone.utc)

    def parse(self, parser=None):
        """
        Re-parse the stored report text.

        Args:
            parser: Optional ReportParser; the module default is used otherwise

        Returns:
            AnalysisResult for the stored text
        """
        if parser is None:
            from ..parsing.report_parser import parse_report
            return parse_report(self.raw_text)
        return parser.parse(self.raw_text)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'user_id': self.user_id,
            'raw_text': self.raw_text,
            'image_references': dict(self.image_references),
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AnalysisRecord':
        """Create a record from a database row or JSON dictionary."""
        return cls(
            id=data.get('id'),
            user_id=str(data.get('user_id', '')),
            raw_text=data.get('analysis_text') or data.get('raw_text') or '',
            image_references=dict(data.get('image_references') or {}),
            created_at=_parse_datetime_safe(data.get('created_at')),
        )

    def __repr__(self):
        return f"AnalysisRecord(id={self.id}, user_id='{self.user_id}', created_at='{self.created_at}')"
