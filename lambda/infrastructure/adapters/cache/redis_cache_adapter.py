"""
Redis Cache Adapter - cache key-value assíncrono com degradação graciosa
O cache é só otimização: indisponibilidade nunca vira erro para o usuário
"""
from typing import Optional

from ddtrace import tracer
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from infrastructure.adapters.cache.connection_state import RedisConnectionState
from infrastructure.adapters.cache.redis_client_manager import (
    RedisClientManager,
    get_redis_client_manager
)
from shared.config.logger_config import get_logger

logger = get_logger(child=True)

CONNECTION_ERRORS = (RedisConnectionError, RedisTimeoutError, OSError)


class RedisCacheAdapter:
    """
    Cache Redis fail-open

    - Estado de conexão "down": get retorna None, set/delete não fazem I/O
    - Erro de I/O com conexão "up": loga warning e trata como miss/no-op
    - Erro de conexão derruba o estado e dispara reconexão em background
    """

    def __init__(
        self,
        client_manager: RedisClientManager,
        state: Optional[RedisConnectionState] = None
    ):
        self.client_manager = client_manager
        self.state = state or client_manager.state

    def is_connected(self) -> bool:
        """Liveness atual do store (usado no /health)"""
        return self.state.is_connected()

    def _available_client(self):
        if not self.state.is_connected():
            return None
        return self.client_manager.client

    def _handle_error(self, operation: str, key: str, error: Exception) -> None:
        logger.warning(
            f"Error on cache {operation}",
            key=key,
            error=str(error),
            error_type=type(error).__name__
        )
        if isinstance(error, CONNECTION_ERRORS):
            self.client_manager.mark_error(error)

    @tracer.wrap(resource="redis_cache.get")
    async def get(self, key: str) -> Optional[str]:
        """
        Busca valor no cache

        Returns:
            Valor serializado ou None (miss, store indisponível ou erro)
        """
        client = self._available_client()
        if client is None:
            return None

        try:
            value = await client.get(key)
        except Exception as e:
            self._handle_error("get", key, e)
            return None

        logger.debug("Cache HIT" if value is not None else "Cache MISS", key=key)
        return value

    @tracer.wrap(resource="redis_cache.set")
    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        """
        Grava valor no cache

        Args:
            key: Chave
            value: Valor já serializado
            ttl_seconds: Expiração em segundos (None ou 0 = sem expiração)
        """
        client = self._available_client()
        if client is None:
            return

        try:
            if ttl_seconds:
                await client.set(key, value, ex=int(ttl_seconds))
            else:
                await client.set(key, value)
        except Exception as e:
            self._handle_error("set", key, e)

    async def delete(self, key: str) -> bool:
        """Remove entrada do cache; True se a chave existia"""
        client = self._available_client()
        if client is None:
            return False

        try:
            removed = await client.delete(key)
        except Exception as e:
            self._handle_error("delete", key, e)
            return False

        return removed > 0

    async def close(self) -> None:
        """Fechamento best-effort no shutdown do processo"""
        await self.client_manager.close()


# Factory singleton
_cache_instance: Optional[RedisCacheAdapter] = None


def get_redis_cache() -> RedisCacheAdapter:
    """
    Factory para obter instância singleton do cache
    Compartilha o estado de conexão do gerenciador singleton
    """
    global _cache_instance

    if _cache_instance is None:
        _cache_instance = RedisCacheAdapter(client_manager=get_redis_client_manager())

    return _cache_instance
