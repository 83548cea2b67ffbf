"""
Async Use Case: Get City Weather
Leitura cache-aside: Redis primeiro, provider no miss, grava no cache
"""
import json
from typing import Any, Dict, Optional

from ddtrace import tracer

from application.ports.input.get_city_weather_port import IGetCityWeatherUseCase
from application.ports.output.cache_repository_port import IAsyncCacheRepository
from application.ports.output.weather_provider_port import IWeatherProvider
from domain.constants import Cache
from domain.exceptions import InvalidInputException
from domain.value_objects.weather_query import WeatherQuery
from shared.config.logger_config import get_logger
from shared.utils.validators import GenericValidator

logger = get_logger(child=True)


class AsyncGetCityWeatherUseCase(IGetCityWeatherUseCase):
    """Async use case: current weather for a city, cache-first"""

    def __init__(
        self,
        cache: IAsyncCacheRepository,
        weather_provider: IWeatherProvider,
        ttl_seconds: Optional[int] = Cache.TTL_SECONDS
    ):
        """
        Args:
            cache: Cache fail-open (nunca lança exceção)
            weather_provider: Provider externo
            ttl_seconds: TTL das entradas (None = sem expiração)
        """
        self.cache = cache
        self.weather_provider = weather_provider
        self.ttl_seconds = ttl_seconds

    @tracer.wrap(resource="use_case.get_city_weather")
    async def execute(self, city: str) -> Dict[str, Any]:
        """
        Execute use case asynchronously

        Flow:
        1. Normaliza a cidade e deriva a chave weather:<cidade>
        2. Cache HIT: desserializa e retorna (sem provider, sem escrita)
        3. Cache MISS: chama o provider com a cidade trimmed (caixa original)
        4. Grava o payload no cache com o TTL configurado
        5. Retorna o payload

        Args:
            city: City name as received

        Returns:
            Provider payload, untransformed

        Raises:
            InvalidInputException: If city is blank or not a string
            WeatherProviderException: Propagated unchanged from the provider
        """
        GenericValidator.validate_not_empty(
            city,
            param_name="City name",
            exception_class=InvalidInputException
        )
        query = WeatherQuery(city)

        cached = await self._read_cache(query.cache_key)
        if cached is not None:
            logger.info("Weather served from cache", cache_key=query.cache_key)
            return cached

        weather_data = await self.weather_provider.fetch_current(query.trimmed)

        await self.cache.set(
            query.cache_key,
            json.dumps(weather_data, separators=(',', ':')),
            ttl_seconds=self.ttl_seconds
        )

        logger.info(
            "Weather fetched from provider",
            cache_key=query.cache_key,
            provider=self.weather_provider.provider_name,
            ttl_seconds=self.ttl_seconds
        )

        return weather_data

    async def _read_cache(self, cache_key: str) -> Optional[Dict[str, Any]]:
        """Lê e desserializa entrada do cache; JSON corrompido conta como miss"""
        raw = await self.cache.get(cache_key)
        if raw is None:
            return None

        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning("Corrupted cache entry - treating as miss", cache_key=cache_key, error=str(e))
            return None
