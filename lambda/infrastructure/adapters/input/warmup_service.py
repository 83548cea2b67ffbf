"""
Warm-up service to prepare dependencies and short-circuit scheduled pings.
"""
import json
from typing import Callable, Optional, Any

from ddtrace import tracer


class WarmupService:
    def __init__(
        self,
        *,
        logger,
        get_or_create_event_loop: Callable[[], Any],
        run_async: Callable[[Any], Any],
        get_weather_provider_factory: Callable[[], Any],
        cors_origin: str = "*",
    ):
        self.logger = logger
        self.get_or_create_event_loop = get_or_create_event_loop
        self.run_async = run_async
        self.get_weather_provider_factory = get_weather_provider_factory
        self.cors_origin = cors_origin

    @staticmethod
    def is_warmup_event(event: Optional[dict]) -> bool:
        if not isinstance(event, dict):
            return False
        return bool(event.get("warmup") or event.get("source") == "aws.events")

    @tracer.wrap(resource="warmup.init")
    def warmup_init(self):
        """Cria sessão HTTP e inicia a conexão Redis para reuso em warm starts."""
        try:
            self.get_or_create_event_loop()
            factory = self.get_weather_provider_factory()
            weather_provider = factory.get_weather_provider()
            cache = factory.get_cache()
        except Exception as exc:  # pragma: no cover - best-effort
            self.logger.warning("Warm-up init sync step failed", error=str(exc))
            return

        async def preload_async():
            session_manager = getattr(weather_provider, "session_manager", None)
            if session_manager:
                await session_manager.get_session()

            # Conexão segue em background; o warm-up não espera o Redis
            client_manager = getattr(cache, "client_manager", None)
            if client_manager:
                client_manager.start()

        try:
            self.run_async(preload_async())
        except Exception as exc:  # pragma: no cover - best-effort
            self.logger.warning("Warm-up init async step failed", error=str(exc))

    @tracer.wrap(resource="warmup.handle_ping")
    def handle_warmup_ping(self, event: Optional[dict]):
        """
        Warm-up short-circuit para pings agendados (EventBridge/cron).
        Retorna None quando o evento não é um ping.
        """
        if not self.is_warmup_event(event):
            return None

        self.logger.info("Warm-up ping recebido")
        self.warmup_init()
        return {
            "statusCode": 200,
            "headers": {
                "Content-Type": "application/json",
                "Access-Control-Allow-Origin": self.cors_origin,
            },
            "body": json.dumps({"ok": True, "warmup": True})
        }
