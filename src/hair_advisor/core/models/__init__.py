#!/usr/bin/env python3
"""
Core data models for hair analysis.

Contains all data structures used throughout the application.
"""

from .analysis import AnalysisResult, ColorAnalysis, RecommendationItem, DEFAULT_HEALTH_SCORE
from .record import AnalysisRecord
from .routine import Routine, RoutineStep

__all__ = [
    'AnalysisResult', 'ColorAnalysis', 'RecommendationItem', 'DEFAULT_HEALTH_SCORE',
    'AnalysisRecord', 'Routine', 'RoutineStep'
]
