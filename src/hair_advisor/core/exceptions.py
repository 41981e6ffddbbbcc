#!/usr/bin/env python3
"""
Standardized exception hierarchy for the hair advisor.

Provides specific exception types for different error conditions with
proper error context. The report parser itself never raises; these types
cover the services around it (text generation, persistence, configuration).
"""

from typing import Optional, Dict, Any


class HairAdvisorError(Exception):
    """Base exception for all hair advisor errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context
        }


# Text-generation service exceptions
class AdviceServiceError(HairAdvisorError):
    """The external text-generation service failed."""

    def __init__(self, provider: str, model: str, original_error: Exception):
        message = f"Advice service error from {provider} ({model})"
        context = {
            'provider': provider,
            'model': model,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


class AdviceTimeoutError(HairAdvisorError):
    """The text-generation request timed out."""

    def __init__(self, provider: str, timeout_seconds: int):
        message = f"{provider} request timed out after {timeout_seconds}s"
        context = {
            'provider': provider,
            'timeout_seconds': timeout_seconds
        }
        super().__init__(message, context=context)


# Database-related exceptions
class DatabaseError(HairAdvisorError):
    """Base exception for database errors."""
    pass


class DatabaseConnectionError(DatabaseError):
    """Failed to connect to database."""

    def __init__(self, connection_type: str, original_error: Exception):
        message = f"Failed to connect to database via {connection_type}"
        context = {
            'connection_type': connection_type,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


class DatabaseOperationError(DatabaseError):
    """Database operation failed."""

    def __init__(self, operation: str, table: str, original_error: Exception):
        message = f"Database {operation} failed on table {table}"
        context = {
            'operation': operation,
            'table': table,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


# Routine generation
class RoutineValidationError(HairAdvisorError):
    """Routine JSON could not be extracted from the model output."""
    pass


# Configuration-related exceptions
class ConfigurationError(HairAdvisorError):
    """Configuration is invalid or missing."""

    def __init__(self, config_key: str, issue: str):
        message = f"Configuration error for {config_key}: {issue}"
        context = {
            'config_key': config_key,
            'issue': issue
        }
        super().__init__(message, context=context)


class ErrorRecovery:
    """Utilities for error recovery and retry logic."""

    @staticmethod
    def get_retry_delay(error: Exception, attempt: int) -> int:
        """Get recommended retry delay in seconds."""
        if isinstance(error, AdviceTimeoutError):
            return min(error.context.get('timeout_seconds', 30), 120)

        # Exponential backoff: 2^attempt seconds, max 300s (5 minutes)
        return min(2 ** attempt, 300)
