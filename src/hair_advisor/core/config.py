#!/usr/bin/env python3
"""
Centralized Configuration Manager

Provides a single source of truth for all application configuration,
including environment variables, defaults, and validation.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional, Dict

import pytz

from .env_loader import load_env_file
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

TOGETHER_BASE_URL = "https://api.together.xyz/v1"
DEFAULT_ADVICE_MODEL = "meta-llama/Llama-3.3-70B-Instruct-Turbo-Free"
ADVICE_BACKENDS = ('together', 'edge_function')


@dataclass
class DatabaseConfig:
    """Database connection configuration (optional; only history needs it)."""
    supabase_url: Optional[str] = None
    supabase_db_password: Optional[str] = None
    connection_timeout: int = 30
    max_retries: int = 3

    def is_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_db_password)


@dataclass
class IntegrationConfig:
    """Text-generation service configuration."""
    together_api_key: Optional[str] = None
    together_base_url: str = TOGETHER_BASE_URL
    advice_model: str = DEFAULT_ADVICE_MODEL
    advice_backend: str = 'together'
    advice_timeout: int = 60
    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None


@dataclass
class ParserConfig:
    """Report parser tuning."""
    default_health_score: int = 75
    min_scalp_sentence_length: int = 10
    max_recommendations: int = 5


@dataclass
class ApplicationConfig:
    """Core application configuration."""
    default_language: str = "en"
    display_timezone: str = "UTC"
    history_days: int = 30

    # Logging
    log_level: str = "INFO"
    verbose_logging: bool = False


@dataclass
class Config:
    """Master configuration container."""
    database: DatabaseConfig
    integrations: IntegrationConfig
    parser: ParserConfig
    app: ApplicationConfig

    def has_database(self) -> bool:
        """Check if analysis history storage is available."""
        return self.database.is_configured()

    def has_advice_service(self) -> bool:
        """Check if the configured text-generation backend has credentials."""
        if self.integrations.advice_backend == 'edge_function':
            return bool(self.integrations.supabase_url and self.integrations.supabase_anon_key)
        return bool(self.integrations.together_api_key)


class ConfigManager:
    """Manages application configuration with validation and environment loading."""

    def __init__(self, env_file_path: str = ".env"):
        """
        Initialize configuration manager.

        Args:
            env_file_path: Path to .env file relative to project root
        """
        self._config: Optional[Config] = None
        load_env_file(env_file_path)

    def get_config(self, force_reload: bool = False) -> Config:
        """
        Get application configuration.

        Args:
            force_reload: Force reloading configuration from environment

        Returns:
            Complete configuration object
        """
        if self._config is None or force_reload:
            self._config = self._build_config()
        return self._config

    def _build_config(self) -> Config:
        """Build configuration from environment variables."""
        supabase_url = os.getenv('SUPABASE_URL')

        database_config = DatabaseConfig(
            supabase_url=supabase_url,
            supabase_db_password=os.getenv('SUPABASE_DB_PASSWORD'),
            connection_timeout=self._get_int('DB_CONNECTION_TIMEOUT', 30),
            max_retries=self._get_int('DB_MAX_RETRIES', 3)
        )

        integration_config = IntegrationConfig(
            together_api_key=os.getenv('TOGETHER_API_KEY') or os.getenv('TOGETHER_AI_API_KEY'),
            together_base_url=os.getenv('TOGETHER_BASE_URL', TOGETHER_BASE_URL),
            advice_model=os.getenv('ADVICE_MODEL', DEFAULT_ADVICE_MODEL),
            advice_backend=os.getenv('ADVICE_BACKEND', 'together').lower(),
            advice_timeout=self._get_int('ADVICE_TIMEOUT', 60),
            supabase_url=supabase_url,
            supabase_anon_key=os.getenv('SUPABASE_ANON_KEY')
        )

        parser_config = ParserConfig(
            default_health_score=self._get_int('DEFAULT_HEALTH_SCORE', 75),
            min_scalp_sentence_length=self._get_int('MIN_SCALP_SENTENCE_LENGTH', 10),
            max_recommendations=self._get_int('MAX_RECOMMENDATIONS', 5)
        )

        app_config = ApplicationConfig(
            default_language=os.getenv('DEFAULT_LANGUAGE', 'en').lower(),
            display_timezone=os.getenv('DISPLAY_TIMEZONE', 'UTC'),
            history_days=self._get_int('HISTORY_DAYS', 30),
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            verbose_logging=os.getenv('VERBOSE_LOGGING', 'false').lower() == 'true'
        )

        config = Config(
            database=database_config,
            integrations=integration_config,
            parser=parser_config,
            app=app_config
        )

        self._validate_config(config)
        return config

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        value = os.getenv(key)
        if value is None or value == '':
            return default
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(key, f"expected an integer, got '{value}'")

    def _validate_config(self, config: Config) -> None:
        """Validate configuration values."""
        errors = []

        if config.database.supabase_url and not config.database.supabase_url.startswith('https://'):
            errors.append("SUPABASE_URL must start with https://")

        if not 0 <= config.parser.default_health_score <= 100:
            errors.append("DEFAULT_HEALTH_SCORE must be between 0 and 100")

        if config.parser.min_scalp_sentence_length < 1:
            errors.append("MIN_SCALP_SENTENCE_LENGTH must be at least 1")

        if config.parser.max_recommendations < 1:
            errors.append("MAX_RECOMMENDATIONS must be at least 1")

        if config.integrations.advice_backend not in ADVICE_BACKENDS:
            errors.append(f"ADVICE_BACKEND must be one of: {', '.join(ADVICE_BACKENDS)}")

        if config.app.default_language not in ('en', 'fr', 'ar'):
            errors.append("DEFAULT_LANGUAGE must be one of: en, fr, ar")

        if config.app.display_timezone not in pytz.all_timezones_set:
            errors.append(f"DISPLAY_TIMEZONE '{config.app.display_timezone}' is not a known timezone")

        valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if config.app.log_level not in valid_log_levels:
            errors.append(f"LOG_LEVEL must be one of: {', '.join(valid_log_levels)}")

        if errors:
            raise ConfigurationError('environment', '; '.join(errors))

        logger.debug("Configuration validation passed")

    def update_logging(self) -> None:
        """Configure logging based on current configuration."""
        config = self.get_config()

        numeric_level = getattr(logging, config.app.log_level)
        logging.getLogger().setLevel(numeric_level)

        if config.app.verbose_logging:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
        else:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

        for handler in logging.getLogger().handlers:
            handler.setLevel(numeric_level)
            handler.setFormatter(logging.Formatter(format_str, datefmt='%Y-%m-%d %H:%M:%S'))

    def get_integration_status(self) -> Dict[str, bool]:
        """Get status of all integrations."""
        config = self.get_config()
        return {
            'advice_service': config.has_advice_service(),
            'database': config.has_database(),
        }


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> Config:
    """Get application configuration."""
    return get_config_manager().get_config()


def reset_config() -> None:
    """Reset configuration manager (useful for testing)."""
    global _config_manager
    _config_manager = None
