"""WeatherAPI Provider - cliente do endpoint current.json do WeatherAPI.com"""
import asyncio
from typing import Any, Dict, Optional

import aiohttp
from ddtrace import tracer

from application.ports.output.weather_provider_port import IWeatherProvider
from domain.constants import API
from domain.exceptions import WeatherErrorKind, WeatherProviderException
from shared.config.aiohttp_session_manager import (
    AiohttpSessionManager,
    get_aiohttp_session_manager
)
from shared.config.logger_config import get_logger

logger = get_logger(child=True)

DEFAULT_UPSTREAM_MESSAGE = 'Weather data not found'


class WeatherApiProvider(IWeatherProvider):
    """
    Provider para WeatherAPI.com (condições atuais por nome de cidade)

    Características:
    - Uma única tentativa por chamada (sem retry)
    - Timeout total de 10 segundos
    - Falhas classificadas uma única vez em WeatherErrorKind
    - 100% async com aiohttp
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        session_manager: Optional[AiohttpSessionManager] = None,
        timeout_seconds: float = API.HTTP_TIMEOUT_TOTAL
    ):
        """
        Inicializa provider

        Args:
            api_key: Chave da WeatherAPI (env WEATHER_API_KEY se None)
            base_url: URL base da API (env WEATHER_API_URL se None)
            session_manager: Gerenciador de sessão HTTP (singleton se None)
            timeout_seconds: Timeout total da requisição
        """
        self.api_key = api_key if api_key is not None else API.WEATHER_API_KEY
        if not self.api_key:
            logger.warning("WEATHER_API_KEY não configurada - provider responderá 401")

        self.base_url = (base_url or API.WEATHER_API_URL).rstrip('/')
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self.session_manager = session_manager or get_aiohttp_session_manager(
            total_timeout=API.HTTP_TIMEOUT_TOTAL,
            connect_timeout=API.HTTP_TIMEOUT_CONNECT,
            sock_read_timeout=API.HTTP_TIMEOUT_READ,
            limit=API.HTTP_CONNECTION_LIMIT,
            limit_per_host=API.HTTP_CONNECTION_LIMIT_PER_HOST,
            ttl_dns_cache=API.DNS_CACHE_TTL
        )

    @property
    def provider_name(self) -> str:
        return "WeatherAPI"

    @tracer.wrap(resource="weatherapi.fetch_current")
    async def fetch_current(self, city: str) -> Dict[str, Any]:
        """
        Busca condições atuais de uma cidade

        Args:
            city: Nome da cidade (trimmed, caixa original)

        Returns:
            Payload JSON do provider, sem transformação

        Raises:
            WeatherProviderException: Falha classificada (ver classify_status)
        """
        url = f"{self.base_url}{API.CURRENT_ENDPOINT}"
        params = {'key': self.api_key, 'q': city.strip()}

        try:
            session = await self.session_manager.get_session()
            async with session.get(url, params=params, timeout=self.timeout) as response:
                if response.status >= 400:
                    upstream_message = await self._read_upstream_message(response)
                    raise self.classify_status(response.status, upstream_message)

                return await response.json()

        except WeatherProviderException:
            raise
        except asyncio.TimeoutError as e:
            raise WeatherProviderException(
                WeatherErrorKind.TIMEOUT,
                "Request timeout. Please try again.",
                details={"timeout_seconds": self.timeout.total}
            ) from e
        except aiohttp.ClientConnectorError as e:
            raise WeatherProviderException(
                WeatherErrorKind.UNREACHABLE,
                "Unable to connect to weather service. Please check your internet connection.",
                details={"reason": str(e)}
            ) from e
        except Exception as e:
            logger.error(
                "Unexpected error fetching weather data",
                city=city,
                error=str(e),
                exc_info=True
            )
            raise WeatherProviderException(
                WeatherErrorKind.UNKNOWN,
                "An unexpected error occurred while fetching weather data."
            ) from e

    @staticmethod
    async def _read_upstream_message(response: aiohttp.ClientResponse) -> str:
        """Extrai error.message do corpo de erro do provider"""
        try:
            body = await response.json(content_type=None)
        except Exception:
            return DEFAULT_UPSTREAM_MESSAGE

        if isinstance(body, dict):
            error = body.get('error')
            if isinstance(error, dict) and error.get('message'):
                return str(error['message'])
        return DEFAULT_UPSTREAM_MESSAGE

    @staticmethod
    def classify_status(status: int, upstream_message: str) -> WeatherProviderException:
        """
        Mapeia status HTTP de erro do provider para WeatherErrorKind

        400 -> INVALID_CITY, 401 -> UNAUTHORIZED, 403 -> FORBIDDEN,
        demais -> PROVIDER_ERROR
        """
        details = {"upstream_status": status, "upstream_message": upstream_message}

        if status == 400:
            return WeatherProviderException(
                WeatherErrorKind.INVALID_CITY,
                f"Invalid city name: {upstream_message}",
                details=details
            )
        if status == 401:
            return WeatherProviderException(
                WeatherErrorKind.UNAUTHORIZED,
                "Invalid API key. Please check your configuration.",
                details=details
            )
        if status == 403:
            return WeatherProviderException(
                WeatherErrorKind.FORBIDDEN,
                "API access forbidden. Please check your subscription.",
                details=details
            )
        return WeatherProviderException(
            WeatherErrorKind.PROVIDER_ERROR,
            f"Weather service error: {upstream_message}",
            details=details
        )


# Factory singleton
_provider_instance: Optional[WeatherApiProvider] = None


def get_weatherapi_provider() -> WeatherApiProvider:
    """Retorna singleton do provider (reuso em warm starts)"""
    global _provider_instance

    if _provider_instance is None:
        _provider_instance = WeatherApiProvider()

    return _provider_instance
