"""
Weather Provider Factory - criação centralizada do provider (WeatherAPI) e do cache (Redis)
"""
from typing import Optional

from application.ports.output.cache_repository_port import IAsyncCacheRepository
from application.ports.output.weather_provider_port import IWeatherProvider
from infrastructure.adapters.cache.redis_cache_adapter import get_redis_cache
from infrastructure.adapters.output.providers.weatherapi import get_weatherapi_provider


class WeatherProviderFactory:
    """
    Factory simples para as dependências de saída do use case.
    Mantém lazy-loading e singleton para reuso em execução quente da Lambda.
    """

    def __init__(
        self,
        provider: Optional[IWeatherProvider] = None,
        cache: Optional[IAsyncCacheRepository] = None
    ):
        self._provider = provider
        self._cache = cache

    def get_weather_provider(self) -> IWeatherProvider:
        """Retorna provider padrão (WeatherAPI)."""
        if self._provider is None:
            self._provider = get_weatherapi_provider()
        return self._provider

    def get_cache(self) -> IAsyncCacheRepository:
        """Retorna cache padrão (Redis, fail-open)."""
        if self._cache is None:
            self._cache = get_redis_cache()
        return self._cache


# Factory singleton global
_factory_instance: Optional[WeatherProviderFactory] = None


def get_weather_provider_factory() -> WeatherProviderFactory:
    """
    Retorna singleton da factory.
    """
    global _factory_instance

    if _factory_instance is None:
        _factory_instance = WeatherProviderFactory()

    return _factory_instance
