"""
Configurações centralizadas da aplicação
Todos os valores vêm de variáveis de ambiente
"""
import os


def _optional_int(name: str):
    """Lê inteiro opcional do ambiente (None se ausente ou vazio)"""
    value = os.environ.get(name, '').strip()
    if not value:
        return None
    return int(value)


# WeatherAPI.com
WEATHER_API_URL = os.environ.get('WEATHER_API_URL', 'https://api.weatherapi.com/v1').rstrip('/')
WEATHER_API_KEY = os.environ.get('WEATHER_API_KEY', '')

# Cache (segundos) - sem valor definido grava sem expiração
CACHE_EXPIRY = _optional_int('CACHE_EXPIRY')

# Redis
REDIS_HOST = os.environ.get('REDIS_HOST', 'localhost')
REDIS_PORT = int(os.environ.get('REDIS_PORT', '6379'))
REDIS_CONNECT_TIMEOUT = float(os.environ.get('REDIS_CONNECT_TIMEOUT', '3'))

# Aplicação
APP_VERSION = os.environ.get('APP_VERSION', '1.0.0')

# CORS
CORS_ORIGIN = os.environ.get('CORS_ORIGIN', '*')
