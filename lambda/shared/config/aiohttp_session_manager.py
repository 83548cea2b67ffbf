"""
Aiohttp Session Manager - sessão HTTP compartilhada para chamadas ao provider
Reutiliza a sessão entre invocações Lambda (warm starts) enquanto o event loop for o mesmo
"""
import asyncio
from typing import Optional

import aiohttp

from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class AiohttpSessionManager:
    """
    Gerenciador singleton de sessão aiohttp

    - Uma sessão por event loop (sessões aiohttp ficam presas ao loop que as criou)
    - Recria a sessão quando o loop muda ou a sessão foi fechada
    - Pool de conexões e cache DNS compartilhados entre requisições

    Uso:
        manager = get_aiohttp_session_manager()
        session = await manager.get_session()
        async with session.get(url, params=params) as response:
            data = await response.json()
    """

    _instance: Optional['AiohttpSessionManager'] = None

    def __init__(
        self,
        total_timeout: float = 10,
        connect_timeout: float = 5,
        sock_read_timeout: float = 10,
        limit: int = 100,
        limit_per_host: int = 30,
        ttl_dns_cache: int = 300
    ):
        """
        Args:
            total_timeout: Timeout total da requisição em segundos
            connect_timeout: Timeout de conexão em segundos
            sock_read_timeout: Timeout de leitura em segundos
            limit: Limite total de conexões no pool
            limit_per_host: Limite de conexões por host
            ttl_dns_cache: TTL do cache DNS em segundos
        """
        self.timeout = aiohttp.ClientTimeout(
            total=total_timeout,
            connect=connect_timeout,
            sock_read=sock_read_timeout
        )
        self.limit = limit
        self.limit_per_host = limit_per_host
        self.ttl_dns_cache = ttl_dns_cache

        self._session: Optional[aiohttp.ClientSession] = None
        self._session_loop_id: Optional[int] = None

    @classmethod
    def get_instance(cls, **kwargs) -> 'AiohttpSessionManager':
        """Retorna instância singleton (kwargs usados apenas na primeira criação)"""
        if cls._instance is None:
            cls._instance = cls(**kwargs)
            logger.info(
                "AiohttpSessionManager singleton created",
                total_timeout=cls._instance.timeout.total,
                limit=cls._instance.limit
            )
        return cls._instance

    @property
    def has_open_session(self) -> bool:
        return self._session is not None and not self._session.closed

    async def get_session(self) -> aiohttp.ClientSession:
        """
        Retorna sessão aiohttp do event loop atual (cria ou reutiliza)

        Raises:
            RuntimeError: Se chamado fora de um event loop
        """
        current_loop_id = id(asyncio.get_running_loop())

        if self.has_open_session and self._session_loop_id == current_loop_id:
            return self._session

        if self.has_open_session:
            logger.info(
                "Event loop changed - recreating aiohttp session",
                old_loop_id=self._session_loop_id,
                new_loop_id=current_loop_id
            )
            await self._close_session()

        connector = aiohttp.TCPConnector(
            limit=self.limit,
            limit_per_host=self.limit_per_host,
            ttl_dns_cache=self.ttl_dns_cache
        )
        self._session = aiohttp.ClientSession(timeout=self.timeout, connector=connector)
        self._session_loop_id = current_loop_id

        logger.info("Aiohttp session created", loop_id=current_loop_id)
        return self._session

    async def _close_session(self) -> None:
        if not self.has_open_session:
            return

        try:
            await self._session.close()
        except Exception as e:
            logger.warning("Error closing aiohttp session", error=str(e))
        finally:
            self._session = None
            self._session_loop_id = None

    async def cleanup(self) -> None:
        """Fecha a sessão (best-effort no shutdown do processo)"""
        await self._close_session()

    @classmethod
    def reset_instance(cls) -> None:
        """Reset do singleton (útil para testes). Cleanup deve ser feito antes."""
        cls._instance = None


def get_aiohttp_session_manager(**kwargs) -> AiohttpSessionManager:
    """Factory function para obter o singleton do gerenciador"""
    return AiohttpSessionManager.get_instance(**kwargs)
