#!/usr/bin/env python3
"""
Database Connection Manager

Handles database connections with proper lifecycle management
and error recovery.
"""

import logging
import time
from contextlib import contextmanager
from typing import Optional, Dict, Any

import psycopg
from psycopg.rows import dict_row

from ..exceptions import ConfigurationError, DatabaseConnectionError, ErrorRecovery

logger = logging.getLogger(__name__)

# Supabase transaction pooler port
POOLER_PORT = 6543


class ConnectionManager:
    """Manages database connections with error handling and recovery."""

    def __init__(self, config):
        """
        Initialize connection manager with configuration.

        Args:
            config: DatabaseConfig object
        """
        self.config = config
        self.connection: Optional[psycopg.Connection] = None
        self._connect()

    def _build_connection_string(self) -> str:
        """Build PostgreSQL connection string from configuration."""
        url = self.config.supabase_url
        password = self.config.supabase_db_password

        if not url or not password:
            raise ConfigurationError('SUPABASE_URL', "database URL and password are required for history storage")
        if not url.startswith('https://'):
            raise ConfigurationError('SUPABASE_URL', f"invalid Supabase URL format: {url}")

        host = url.replace('https://', '').rstrip('/')
        return f"postgresql://postgres:{password}@{host}:{POOLER_PORT}/postgres?sslmode=require"

    def _connect(self) -> None:
        """Establish database connection, retrying transient failures."""
        connection_string = self._build_connection_string()
        attempts = max(1, self.config.max_retries)

        for attempt in range(1, attempts + 1):
            try:
                self.connection = psycopg.connect(
                    connection_string,
                    row_factory=dict_row,
                    autocommit=True,
                    connect_timeout=self.config.connection_timeout
                )
                logger.debug("Database connection established")
                return
            except psycopg.Error as e:
                error = DatabaseConnectionError('postgresql', e)
                if attempt >= attempts:
                    logger.error(f"Database connection failed after {attempts} attempts: {e}")
                    raise error from e
                delay = ErrorRecovery.get_retry_delay(error, attempt)
                logger.warning(f"Database connection attempt {attempt} failed, retrying in {delay}s: {e}")
                time.sleep(delay)

    def ensure_connection(self) -> None:
        """Ensure database connection is active, reconnect if needed."""
        try:
            if not self.connection or self.connection.closed:
                self._connect()
            else:
                with self.connection.cursor() as cursor:
                    cursor.execute("SELECT 1")
        except psycopg.Error:
            logger.warning("Connection test failed, reconnecting...")
            self._connect()

    def get_connection(self) -> psycopg.Connection:
        """
        Get active database connection.

        Raises:
            DatabaseConnectionError: If connection cannot be established
        """
        self.ensure_connection()
        return self.connection

    @contextmanager
    def get_cursor(self):
        """Get database cursor as context manager."""
        self.ensure_connection()
        with self.connection.cursor() as cursor:
            yield cursor

    @contextmanager
    def transaction(self):
        """
        Execute operations in a database transaction.

        Yields:
            Database cursor within transaction
        """
        connection = self.get_connection()
        connection.autocommit = False

        try:
            with connection.cursor() as cursor:
                yield cursor
            connection.commit()
        except Exception:
            connection.rollback()
            raise
        finally:
            connection.autocommit = True

    def close(self) -> None:
        """Close database connection."""
        if self.connection and not self.connection.closed:
            self.connection.close()
            logger.debug("Database connection closed")

    def health_check(self) -> Dict[str, Any]:
        """
        Perform health check on database connection.

        Returns:
            Health status information
        """
        try:
            with self.get_cursor() as cursor:
                cursor.execute("SELECT 1 as test")
                result = cursor.fetchone()

                cursor.execute("SELECT version() as version")
                version_info = cursor.fetchone()

            return {
                'connected': True,
                'test_query': result['test'] == 1,
                'version': version_info['version'],
            }

        except (psycopg.Error, DatabaseConnectionError) as e:
            logger.error(f"Database health check failed: {e}")
            return {
                'connected': False,
                'error': str(e)
            }

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
