"""
Redis Client Manager - ciclo de vida do cliente redis.asyncio
Conexão em background com retry/backoff, sem bloquear o atendimento de requisições
"""
import asyncio
from typing import Callable, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    wait_exponential
)

from domain.constants import Cache
from infrastructure.adapters.cache.connection_state import RedisConnectionState
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class RedisClientManager:
    """
    Gerenciador do cliente Redis

    - start() agenda a task de conexão no event loop atual e retorna na hora
    - A task faz PING com backoff exponencial até conseguir (cancelável)
    - Falha de conexão durante uso (mark_error) derruba o estado e reagenda a conexão
    - Cliente é recriado quando o event loop muda (clientes asyncio ficam presos ao loop)

    Uso:
        manager = get_redis_client_manager()
        manager.start()
        if manager.state.is_connected():
            await manager.client.get(key)
    """

    def __init__(
        self,
        host: str = Cache.REDIS_HOST,
        port: int = Cache.REDIS_PORT,
        connect_timeout: float = Cache.REDIS_CONNECT_TIMEOUT,
        state: Optional[RedisConnectionState] = None,
        min_wait: float = Cache.RECONNECT_MIN_WAIT,
        max_wait: float = Cache.RECONNECT_MAX_WAIT,
        client_factory: Optional[Callable[[], Redis]] = None
    ):
        """
        Args:
            host: Host do Redis
            port: Porta do Redis
            connect_timeout: Timeout de conexão/socket em segundos
            state: Estado de conexão compartilhado (criado se None)
            min_wait: Espera inicial entre tentativas de conexão
            max_wait: Espera máxima entre tentativas de conexão
            client_factory: Fábrica do cliente (injeção para testes)
        """
        self.host = host
        self.port = port
        self.connect_timeout = connect_timeout
        self.state = state or RedisConnectionState()
        self.min_wait = min_wait
        self.max_wait = max_wait
        self._client_factory = client_factory or self._default_client_factory

        self._client: Optional[Redis] = None
        self._client_loop_id: Optional[int] = None
        self._connect_task: Optional[asyncio.Task] = None
        self._warning_shown = False

    def _default_client_factory(self) -> Redis:
        return Redis(
            host=self.host,
            port=self.port,
            socket_connect_timeout=self.connect_timeout,
            socket_timeout=self.connect_timeout,
            decode_responses=True
        )

    @property
    def client(self) -> Optional[Redis]:
        return self._client

    @property
    def is_connecting(self) -> bool:
        return self._connect_task is not None and not self._connect_task.done()

    def start(self) -> None:
        """
        Agenda a conexão no event loop atual (não bloqueia)

        Idempotente: se já existe task de conexão em andamento no mesmo loop,
        não faz nada.

        Raises:
            RuntimeError: Se chamado fora de um event loop
        """
        loop = asyncio.get_running_loop()

        if self._client is None or self._client_loop_id != id(loop):
            if self._client is not None:
                logger.info(
                    "Event loop changed - recreating Redis client",
                    old_loop_id=self._client_loop_id,
                    new_loop_id=id(loop)
                )
            self.state.mark_disconnected()
            self._client = self._client_factory()
            self._client_loop_id = id(loop)
            self._connect_task = None

        if self.state.is_connected() or self.is_connecting:
            return

        self._connect_task = loop.create_task(self._connect_loop())
        self._connect_task.add_done_callback(self._on_connect_task_done)

    async def _connect_loop(self) -> None:
        retrying = AsyncRetrying(
            retry=retry_if_exception_type((RedisError, OSError)),
            wait=wait_exponential(multiplier=self.min_wait, min=self.min_wait, max=self.max_wait),
            before_sleep=self._before_retry,
            reraise=True
        )

        async for attempt in retrying:
            with attempt:
                await self._client.ping()

        self._on_ready()

    def _before_retry(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        self._on_error(error)
        logger.debug(
            "Redis connection attempt failed",
            attempt=retry_state.attempt_number,
            error=str(error)
        )

    def _on_ready(self) -> None:
        """Evento connect/ready"""
        if self.state.mark_connected():
            logger.info("Connected to Redis - caching enabled", host=self.host, port=self.port)
        self._warning_shown = False

    def _on_error(self, error: Optional[BaseException]) -> None:
        """Evento error: desliga o cache e avisa uma vez por indisponibilidade"""
        self.state.mark_disconnected()
        if not self._warning_shown:
            logger.warning(
                "Redis not available - running without cache",
                host=self.host,
                port=self.port,
                error=str(error)
            )
            self._warning_shown = True

    def _on_connect_task_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._on_error(error)
            logger.error("Redis connection task stopped", error=str(error))

    def mark_error(self, error: BaseException) -> None:
        """
        Reporta falha de conexão observada durante uma operação de cache

        Derruba o estado e reagenda a task de conexão.
        """
        self._on_error(error)
        self.start()

    async def close(self) -> None:
        """Cancela a conexão em andamento e fecha o cliente (evento end)"""
        task = self._connect_task
        self._connect_task = None
        same_loop = self._client_loop_id == id(asyncio.get_running_loop())

        if task is not None and not task.done():
            task.cancel()
            if same_loop:
                try:
                    await task
                except asyncio.CancelledError:
                    pass

        if self._client is not None and same_loop:
            try:
                await self._client.aclose()
            except Exception as e:
                logger.warning("Error closing Redis client", error=str(e))

        self._client = None
        self._client_loop_id = None
        if self.state.mark_disconnected():
            logger.info("Redis connection closed")


# Factory singleton
_manager_instance: Optional[RedisClientManager] = None


def get_redis_client_manager() -> RedisClientManager:
    """
    Retorna singleton do gerenciador (um estado de conexão por processo)
    Reutilizado entre invocações Lambda (warm starts)
    """
    global _manager_instance

    if _manager_instance is None:
        _manager_instance = RedisClientManager()

    return _manager_instance
