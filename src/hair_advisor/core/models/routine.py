#!/usr/bin/env python3
"""
Hair care routine data models.

Routines are generated by the text-generation service from a previous
analysis and returned as JSON.
"""

from typing import Any, Dict, List
from dataclasses import dataclass, field


@dataclass
class RoutineStep:
    """One step of a care routine."""
    title: str
    description: str

    def __post_init__(self):
        self.title = self.title.strip()
        self.description = self.description.strip()

    def to_dict(self) -> Dict[str, Any]:
        return {'title': self.title, 'description': self.description}


@dataclass
class Routine:
    """A personalized routine with ordered steps."""
    title: str
    steps: List[RoutineStep] = field(default_factory=list)
    is_fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'steps': [step.to_dict() for step in self.steps],
            'is_fallback': self.is_fallback,
        }
