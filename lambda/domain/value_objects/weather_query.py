"""
Value Object para a consulta de clima por cidade
Centraliza normalização e esquema de chave de cache
"""
from dataclasses import dataclass

from domain.constants import Cache


@dataclass(frozen=True)
class WeatherQuery:
    """
    Consulta de clima como o cliente digitou

    - `trimmed`: enviado ao provider (mantém maiúsculas/minúsculas)
    - `normalized`: lowercase + trim, usado apenas localmente
    - `cache_key`: weather:<normalized>

    Consultas que diferem só por caixa ou espaços nas pontas
    compartilham a mesma chave de cache.
    """
    city: str

    @property
    def trimmed(self) -> str:
        return self.city.strip()

    @property
    def normalized(self) -> str:
        return self.trimmed.lower()

    @property
    def cache_key(self) -> str:
        return build_cache_key(self.city)


def build_cache_key(city: str) -> str:
    """
    Deriva a chave de cache de uma cidade

    Example:
        >>> build_cache_key("  London ")
        'weather:london'
    """
    return f"{Cache.KEY_PREFIX}{city.strip().lower()}"
