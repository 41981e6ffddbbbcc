#!/usr/bin/env python3
"""
Database package for analysis history.
"""

from .connection_manager import ConnectionManager
from .analysis_service import AnalysisService

__all__ = [
    'ConnectionManager',
    'AnalysisService',
]
