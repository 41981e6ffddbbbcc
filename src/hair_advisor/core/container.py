#!/usr/bin/env python3
"""
Dependency Injection Container

Provides a centralized way to manage dependencies and avoid scattered
instantiation throughout the codebase. Supports singleton and factory patterns.
"""

import logging
import threading
from functools import wraps
from typing import Any, Dict, Callable, TypeVar, Optional

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Container:
    """Simple dependency injection container with lifecycle management."""

    def __init__(self):
        """Initialize empty container."""
        self._factories: Dict[str, Callable] = {}
        self._singletons: Dict[str, Any] = {}
        self._lock = threading.RLock()

    def register_singleton(self, service_name: str, factory: Callable[[], T]) -> None:
        """
        Register a service as singleton (created once, reused).

        Args:
            service_name: Unique name for the service
            factory: Function that creates the service instance
        """
        with self._lock:
            self._factories[service_name] = singleton(factory) if not getattr(factory, '_is_singleton', False) else factory
            # Remove any existing instance to force recreation
            self._singletons.pop(service_name, None)

    def register_factory(self, service_name: str, factory: Callable[[], T]) -> None:
        """
        Register a service as factory (new instance each time).

        Args:
            service_name: Unique name for the service
            factory: Function that creates service instances
        """
        with self._lock:
            self._factories[service_name] = factory

    def register_instance(self, service_name: str, instance: T) -> None:
        """
        Register an existing instance as singleton.

        Args:
            service_name: Unique name for the service
            instance: Pre-created service instance
        """
        with self._lock:
            self._singletons[service_name] = instance

    def get(self, service_name: str) -> Any:
        """
        Get service instance by name.

        Raises:
            KeyError: If service is not registered
        """
        if service_name in self._singletons:
            return self._singletons[service_name]

        if service_name not in self._factories:
            raise KeyError(f"Service '{service_name}' not registered")

        with self._lock:
            factory = self._factories[service_name]

            if getattr(factory, '_is_singleton', False):
                # Double-check pattern for thread safety
                if service_name not in self._singletons:
                    self._singletons[service_name] = factory()
                    logger.debug(f"Created singleton instance for '{service_name}'")
                return self._singletons[service_name]

            instance = factory()
            logger.debug(f"Created new instance for '{service_name}'")
            return instance

    def has(self, service_name: str) -> bool:
        """Check if service is registered."""
        return service_name in self._factories or service_name in self._singletons

    def clear(self) -> None:
        """Clear all registered services and instances."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()

    def reset_singleton(self, service_name: str) -> None:
        """Reset a singleton instance (will be recreated on next get())."""
        with self._lock:
            if service_name in self._singletons:
                del self._singletons[service_name]
                logger.debug(f"Reset singleton '{service_name}'")


def singleton(factory_func: Callable[[], T]) -> Callable[[], T]:
    """
    Decorator to mark a factory function as singleton.

    Usage:
        @singleton
        def create_parser():
            return ReportParser()
    """
    @wraps(factory_func)
    def wrapper():
        return factory_func()

    wrapper._is_singleton = True
    return wrapper


# Global container instance
_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get global container instance (thread-safe singleton)."""
    global _container
    if _container is None:
        with _container_lock:
            if _container is None:
                _container = Container()
                _setup_default_services(_container)
    return _container


def reset_container() -> None:
    """Reset global container (useful for testing)."""
    global _container
    with _container_lock:
        if _container:
            _container.clear()
        _container = None


def _setup_default_services(container: Container) -> None:
    """Set up default service registrations with configuration injection."""

    @singleton
    def create_config():
        from .config import get_config
        return get_config()

    @singleton
    def create_report_parser():
        from .parsing.report_parser import ReportParser
        return ReportParser.from_config(container.get('config').parser)

    @singleton
    def create_connection_manager():
        from .database.connection_manager import ConnectionManager
        config = container.get('config')
        if not config.has_database():
            from .exceptions import ConfigurationError
            raise ConfigurationError('SUPABASE_DB_PASSWORD', "database is not configured")
        return ConnectionManager(config.database)

    def create_analysis_service():
        from .database.analysis_service import AnalysisService
        return AnalysisService(container.get('connection_manager'))

    def create_advice_client():
        from ..integrations.advice_client import create_advice_client as build_client
        return build_client(container.get('config').integrations)

    # Register services
    container.register_singleton('config', create_config)
    container.register_singleton('report_parser', create_report_parser)
    container.register_singleton('connection_manager', create_connection_manager)

    # Non-singletons
    container.register_factory('analysis_service', create_analysis_service)
    container.register_factory('advice_client', create_advice_client)

    logger.debug("Default services registered in container")


# Convenience functions for common usage patterns

def get_config():
    """Get configuration instance from container."""
    return get_container().get('config')


def get_report_parser():
    """Get the shared report parser."""
    return get_container().get('report_parser')
