#!/usr/bin/env python3
"""
Command endpoints for the hair advisor.

Each major functionality is handled by a dedicated command class.
"""

from typing import Dict, Type

from .base import BaseCommand
from .report import ReportCommand
from .advice import AdviceCommand
from .history import HistoryCommand

# Command registry for easy extension
COMMANDS: Dict[str, Type[BaseCommand]] = {
    'report': ReportCommand,
    'advice': AdviceCommand,
    'history': HistoryCommand,
}


def get_command(command_name: str, container=None) -> BaseCommand:
    """Get a command instance by name."""
    if command_name not in COMMANDS:
        available = ', '.join(COMMANDS.keys())
        raise ValueError(f"Unknown command '{command_name}'. Available: {available}")

    command_class = COMMANDS[command_name]
    return command_class(container)


def list_commands() -> Dict[str, str]:
    """Get list of available commands with descriptions."""
    return {
        name: command_class.__doc__ or 'No description available'
        for name, command_class in COMMANDS.items()
    }
