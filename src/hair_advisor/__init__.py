"""
Hair Advisor: multilingual hair analysis reports turned into structured results.
"""

__version__ = "1.0.0"
