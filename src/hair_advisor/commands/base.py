#!/usr/bin/env python3
"""
Base command class for the modular command architecture.

Provides common functionality and interface that all commands inherit.
Uses dependency injection for better testability and maintainability.
"""

import logging
import sys
from abc import ABC, abstractmethod
from argparse import Namespace
from pathlib import Path
from typing import List, Optional

from ..core.container import get_container

logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """
    Base class for all command endpoints.

    Provides access to shared services through the dependency injection
    container and the standard exception-to-exit-code mapping.
    """

    def __init__(self, container=None):
        """
        Initialize base command with dependency injection container.

        Args:
            container: Optional container instance. If None, uses global container.
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self._container = container or get_container()

    @property
    def config(self):
        """Get configuration from container."""
        return self._container.get('config')

    @property
    def report_parser(self):
        """Get the shared report parser from container."""
        return self._container.get('report_parser')

    @property
    def analysis_service(self):
        """Get analysis history service from container."""
        return self._container.get('analysis_service')

    def create_advice_client(self):
        """Create new text-generation client instance."""
        return self._container.get('advice_client')

    @staticmethod
    def read_text(path: Optional[str]) -> str:
        """Read report text from a file, or from stdin when no path is given."""
        if not path or path == '-':
            return sys.stdin.read()
        return Path(path).read_text(encoding='utf-8')

    @abstractmethod
    def execute(self, subcommand: str, args: Namespace) -> int:
        """
        Execute the command with given subcommand and arguments.

        Args:
            subcommand: The specific action to perform
            args: Parsed command line arguments

        Returns:
            Exit code (0 for success, non-zero for error)
        """

    def get_available_subcommands(self) -> List[str]:
        """Get list of available subcommands for this command."""
        skipped = {'execute', 'get_available_subcommands', 'handle_error', 'read_text',
                   'create_advice_client'}
        methods = []
        for attr_name in dir(type(self)):
            if attr_name.startswith('_') or attr_name in skipped:
                continue
            if isinstance(getattr(type(self), attr_name), property):
                continue
            if callable(getattr(self, attr_name)):
                methods.append(attr_name)
        return methods

    def handle_error(self, error: BaseException, context: str = "") -> int:
        """
        Standard error handling for commands.

        Args:
            error: The exception that occurred
            context: Additional context about where the error occurred

        Returns:
            Appropriate exit code
        """
        error_msg = f"{context}: {error}" if context else str(error)

        # Map common exceptions to exit codes
        if isinstance(error, KeyboardInterrupt):
            self.logger.info("Command interrupted by user")
            return 130

        self.logger.error(error_msg, exc_info=True)
        if isinstance(error, FileNotFoundError):
            return 2
        elif isinstance(error, PermissionError):
            return 13
        elif isinstance(error, ValueError):
            return 22
        else:
            return 1
