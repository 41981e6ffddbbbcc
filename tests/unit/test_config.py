import logging
import os

import pytest

from hair_advisor.core.config import (
    DEFAULT_ADVICE_MODEL,
    ConfigManager,
    get_config,
    get_config_manager,
    reset_config,
)
from hair_advisor.core.env_loader import get_env_var, load_env_file
from hair_advisor.core.exceptions import ConfigurationError

ENV_KEYS = [
    'SUPABASE_URL', 'SUPABASE_DB_PASSWORD', 'SUPABASE_ANON_KEY', 'DB_CONNECTION_TIMEOUT', 'DB_MAX_RETRIES',
    'TOGETHER_API_KEY', 'TOGETHER_AI_API_KEY', 'TOGETHER_BASE_URL', 'ADVICE_MODEL', 'ADVICE_BACKEND',
    'ADVICE_TIMEOUT', 'DEFAULT_HEALTH_SCORE', 'MIN_SCALP_SENTENCE_LENGTH', 'MAX_RECOMMENDATIONS',
    'DEFAULT_LANGUAGE', 'DISPLAY_TIMEZONE', 'HISTORY_DAYS', 'LOG_LEVEL', 'VERBOSE_LOGGING',
]


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def _manager() -> ConfigManager:
    return ConfigManager(env_file_path="missing-test.env")


def test_defaults_without_environment(clean_env):
    config = _manager().get_config()

    assert config.parser.default_health_score == 75
    assert config.parser.min_scalp_sentence_length == 10
    assert config.parser.max_recommendations == 5
    assert config.integrations.advice_model == DEFAULT_ADVICE_MODEL
    assert config.app.default_language == "en"
    assert config.app.display_timezone == "UTC"
    assert not config.has_database()
    assert not config.has_advice_service()


def test_values_from_environment(clean_env):
    clean_env.setenv('TOGETHER_AI_API_KEY', 'key-123')
    clean_env.setenv('MAX_RECOMMENDATIONS', '3')
    clean_env.setenv('DEFAULT_LANGUAGE', 'FR')
    clean_env.setenv('DISPLAY_TIMEZONE', 'Europe/Paris')
    clean_env.setenv('SUPABASE_URL', 'https://abc.supabase.co')
    clean_env.setenv('SUPABASE_DB_PASSWORD', 'secret')

    manager = _manager()
    config = manager.get_config()

    assert config.integrations.together_api_key == 'key-123'
    assert config.parser.max_recommendations == 3
    assert config.app.default_language == 'fr'
    assert config.app.display_timezone == 'Europe/Paris'
    assert manager.get_integration_status() == {'advice_service': True, 'database': True}


def test_edge_function_backend_needs_anon_key(clean_env):
    clean_env.setenv('ADVICE_BACKEND', 'edge_function')
    clean_env.setenv('SUPABASE_URL', 'https://abc.supabase.co')

    config = _manager().get_config()
    assert not config.has_advice_service()

    clean_env.setenv('SUPABASE_ANON_KEY', 'anon')
    assert _manager().get_config().has_advice_service()


def test_non_integer_value_raises(clean_env):
    clean_env.setenv('HISTORY_DAYS', 'a week')

    with pytest.raises(ConfigurationError) as exc_info:
        _manager().get_config()

    assert exc_info.value.context['config_key'] == 'HISTORY_DAYS'


@pytest.mark.parametrize("key,value,fragment", [
    ('DISPLAY_TIMEZONE', 'Mars/Olympus', 'DISPLAY_TIMEZONE'),
    ('DEFAULT_HEALTH_SCORE', '150', 'DEFAULT_HEALTH_SCORE'),
    ('MAX_RECOMMENDATIONS', '0', 'MAX_RECOMMENDATIONS'),
    ('ADVICE_BACKEND', 'carrier-pigeon', 'ADVICE_BACKEND'),
    ('DEFAULT_LANGUAGE', 'de', 'DEFAULT_LANGUAGE'),
    ('LOG_LEVEL', 'LOUD', 'LOG_LEVEL'),
    ('SUPABASE_URL', 'http://abc.supabase.co', 'SUPABASE_URL'),
])
def test_invalid_values_fail_validation(clean_env, key, value, fragment):
    clean_env.setenv(key, value)

    with pytest.raises(ConfigurationError, match=fragment):
        _manager().get_config()


def test_all_validation_errors_are_reported_together(clean_env):
    clean_env.setenv('DEFAULT_LANGUAGE', 'de')
    clean_env.setenv('LOG_LEVEL', 'LOUD')

    with pytest.raises(ConfigurationError) as exc_info:
        _manager().get_config()

    assert 'DEFAULT_LANGUAGE' in exc_info.value.message
    assert 'LOG_LEVEL' in exc_info.value.message


def test_config_is_cached_until_reload(clean_env):
    manager = _manager()
    first = manager.get_config()

    clean_env.setenv('HISTORY_DAYS', '7')

    assert manager.get_config() is first
    assert manager.get_config(force_reload=True).app.history_days == 7


def test_update_logging_sets_root_level(clean_env):
    clean_env.setenv('LOG_LEVEL', 'WARNING')
    root = logging.getLogger()
    clean_env.setattr(root, 'handlers', [])
    previous = root.level
    try:
        _manager().update_logging()
        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous)


def test_global_manager_is_shared_and_resettable(clean_env):
    manager = get_config_manager()

    assert get_config_manager() is manager
    assert get_config() is manager.get_config()

    reset_config()
    assert get_config_manager() is not manager


def test_load_env_file_keeps_existing_values(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n"
        "TOGETHER_API_KEY='from-file'\n"
        "HISTORY_DAYS=14\n"
        "not a pair\n",
        encoding="utf-8",
    )
    clean_env.setenv('HISTORY_DAYS', '3')
    # registers the key so the value loaded from the file is removed afterwards
    clean_env.setenv('TOGETHER_API_KEY', '')
    clean_env.delenv('TOGETHER_API_KEY')

    loaded = load_env_file(str(env_file))

    assert loaded == 1
    assert os.environ['TOGETHER_API_KEY'] == 'from-file'
    assert os.environ['HISTORY_DAYS'] == '3'


def test_get_env_var_required(clean_env):
    assert get_env_var('TOGETHER_API_KEY', default='fallback') == 'fallback'
    with pytest.raises(ValueError):
        get_env_var('TOGETHER_API_KEY', required=True)
