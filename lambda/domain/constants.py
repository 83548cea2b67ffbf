"""
Domain Constants - Constantes da aplicação centralizadas
Valores vindos do ambiente são lidos em shared.config.settings
"""
from shared.config import settings


class API:
    """Constantes da API externa (WeatherAPI.com)"""

    WEATHER_API_URL = settings.WEATHER_API_URL
    WEATHER_API_KEY = settings.WEATHER_API_KEY
    CURRENT_ENDPOINT = "/current.json"

    # Timeouts e limites HTTP
    HTTP_TIMEOUT_TOTAL = 10  # segundos (uma única tentativa, sem retry)
    HTTP_TIMEOUT_CONNECT = 5  # segundos
    HTTP_TIMEOUT_READ = 10  # segundos
    HTTP_CONNECTION_LIMIT = 100
    HTTP_CONNECTION_LIMIT_PER_HOST = 30
    DNS_CACHE_TTL = 300  # segundos


class Cache:
    """Constantes de cache (Redis)"""

    KEY_PREFIX = "weather:"

    # None = grava sem expiração
    TTL_SECONDS = settings.CACHE_EXPIRY

    REDIS_HOST = settings.REDIS_HOST
    REDIS_PORT = settings.REDIS_PORT
    REDIS_CONNECT_TIMEOUT = settings.REDIS_CONNECT_TIMEOUT

    # Backoff do loop de conexão (segundos)
    RECONNECT_MIN_WAIT = 1
    RECONNECT_MAX_WAIT = 30


class Validation:
    """Regras de validação do parâmetro city"""

    CITY_MAX_LENGTH = 100


class Response:
    """Constantes do envelope de resposta"""

    SOURCE = "weather-api-wrapper"
    SUCCESS_MESSAGE = "Weather data retrieved successfully"

    ERROR_CODES = {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        408: "TIMEOUT",
        429: "RATE_LIMITED",
        500: "INTERNAL_ERROR",
        503: "SERVICE_UNAVAILABLE",
    }


class App:
    """Metadados da aplicação"""

    VERSION = settings.APP_VERSION
    CORS_ORIGIN = settings.CORS_ORIGIN
