"""
Output Port: Interface para repositório de cache assíncrono
Desacopla o use case do store concreto (Redis)
"""
from typing import Protocol, Optional


class IAsyncCacheRepository(Protocol):
    """
    Cache key-value com TTL

    Contrato fail-open: nenhuma operação lança exceção. Com o store
    indisponível, get retorna None, set não faz nada e delete retorna False.
    """

    def is_connected(self) -> bool:
        """Indica se o store está acessível no momento"""
        ...

    async def get(self, key: str) -> Optional[str]:
        """Busca valor serializado por chave (None em miss ou falha)"""
        ...

    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        """Grava valor serializado, com expiração se ttl_seconds informado"""
        ...

    async def delete(self, key: str) -> bool:
        """Remove chave; True se algo foi removido"""
        ...
