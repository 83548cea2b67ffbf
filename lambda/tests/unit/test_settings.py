"""
Unit tests for settings.py
Tests configuration loading and environment variables
"""
import importlib
import os
from unittest.mock import patch

import pytest

from shared.config import settings


@pytest.fixture
def reload_settings():
    """Recarrega settings com o ambiente corrente e restaura ao final"""
    yield lambda: importlib.reload(settings)
    importlib.reload(settings)


class TestSettings:
    """Tests for Settings configuration"""

    @patch.dict(os.environ, {
        'WEATHER_API_URL': 'https://weather.example.com/v1/',
        'WEATHER_API_KEY': 'secret-key',
        'CACHE_EXPIRY': '1800',
        'REDIS_HOST': 'redis.internal',
        'REDIS_PORT': '6380',
        'APP_VERSION': '2.3.4',
        'CORS_ORIGIN': 'https://test.example.com'
    })
    def test_settings_from_environment(self, reload_settings):
        reload_settings()

        assert settings.WEATHER_API_URL == 'https://weather.example.com/v1'
        assert settings.WEATHER_API_KEY == 'secret-key'
        assert settings.CACHE_EXPIRY == 1800
        assert settings.REDIS_HOST == 'redis.internal'
        assert settings.REDIS_PORT == 6380
        assert settings.APP_VERSION == '2.3.4'
        assert settings.CORS_ORIGIN == 'https://test.example.com'

    def test_defaults(self, reload_settings):
        keys = ['WEATHER_API_URL', 'CACHE_EXPIRY', 'REDIS_HOST', 'REDIS_PORT', 'APP_VERSION', 'CORS_ORIGIN']
        clean_env = {k: v for k, v in os.environ.items() if k not in keys}

        with patch.dict(os.environ, clean_env, clear=True):
            reload_settings()

            assert settings.WEATHER_API_URL == 'https://api.weatherapi.com/v1'
            assert settings.CACHE_EXPIRY is None
            assert settings.REDIS_HOST == 'localhost'
            assert settings.REDIS_PORT == 6379
            assert settings.APP_VERSION == '1.0.0'
            assert settings.CORS_ORIGIN == '*'

    @patch.dict(os.environ, {'CACHE_EXPIRY': '   '})
    def test_blank_cache_expiry_means_no_expiry(self, reload_settings):
        reload_settings()
        assert settings.CACHE_EXPIRY is None
