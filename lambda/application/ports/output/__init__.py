"""Output ports"""
from .cache_repository_port import IAsyncCacheRepository
from .weather_provider_port import IWeatherProvider

__all__ = ['IAsyncCacheRepository', 'IWeatherProvider']
