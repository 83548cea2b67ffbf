"""
Input Adapter: Lambda Handler HTTP (100% ASYNC)
Presentation Layer: valida a requisição, delega ao use case e formata o envelope
"""
import asyncio
import time
from urllib.parse import urlencode

from aws_lambda_powertools.event_handler import APIGatewayRestResolver, CORSConfig
from aws_lambda_powertools.utilities.typing import LambdaContext

# Application Layer
from application.dtos.responses import HealthResponse, SuccessResponse, utc_timestamp
from application.use_cases.get_city_weather_use_case import AsyncGetCityWeatherUseCase

# Domain Layer
from domain.constants import App
from domain.exceptions import InvalidInputException, WeatherProviderException

# Infrastructure Layer - Adapters
from infrastructure.adapters.input.exception_handler_service import ExceptionHandlerService
from infrastructure.adapters.input.warmup_service import WarmupService
from infrastructure.adapters.output.providers.weather_provider_factory import get_weather_provider_factory

# Shared Layer
from shared.config.aiohttp_session_manager import get_aiohttp_session_manager
from shared.config.logger_config import get_logger
from shared.utils.validators import CityValidator

logger = get_logger()

app = APIGatewayRestResolver(cors=CORSConfig(allow_origin=App.CORS_ORIGIN))

# =============================
# Estado global do processo (persistente entre invocações Lambda)
# =============================
_global_event_loop = None
_process_started_at = time.monotonic()


def describe_current_request() -> dict:
    """Método, URL, IP do cliente e timestamp da requisição em andamento (para logs de erro)"""
    event = app.current_event
    raw_event = event.raw_event
    query = raw_event.get('queryStringParameters') or {}
    identity = (raw_event.get('requestContext') or {}).get('identity') or {}

    path = raw_event.get('path', 'N/A')
    return {
        "method": raw_event.get('httpMethod', 'N/A'),
        "url": f"{path}?{urlencode(query)}" if query else path,
        "client_ip": identity.get('sourceIp', 'N/A'),
        "request_timestamp": utc_timestamp()
    }


# =============================
# Exception Handlers (Delegados para ExceptionHandlerService)
# =============================

exception_service = ExceptionHandlerService(logger=logger, request_context=describe_current_request)

app.exception_handler(InvalidInputException)(exception_service.handle_invalid_input)
app.exception_handler(WeatherProviderException)(exception_service.handle_provider_error)
app.not_found(exception_service.handle_route_not_found)
app.exception_handler(Exception)(exception_service.handle_unexpected_error)


async def start_cache_connection(cache) -> None:
    """Agenda a conexão Redis em background no loop atual (não espera conectar)"""
    client_manager = getattr(cache, "client_manager", None)
    if client_manager is not None:
        client_manager.start()


def extract_city_param():
    """
    Lê o parâmetro city da query string

    Valor repetido (?city=a&city=b) é devolvido como lista para ser
    rejeitado pelo validador como INVALID_CITY.
    """
    event = app.current_event
    values = (event.multi_value_query_string_parameters or {}).get("city")
    if values and len(values) > 1:
        return values
    return event.get_query_string_value(name="city", default_value=None)


# =============================
# Routes (Async execution with sync wrappers for AWS Powertools compatibility)
# =============================

@app.get("/weather")
def get_weather_route():
    """
    GET /weather?city=London

    Returns current conditions for a city, cache-first.
    Validation failures answer 400 before any cache or provider access.
    """
    city = CityValidator.validate(extract_city_param())

    factory = get_weather_provider_factory()
    cache = factory.get_cache()
    weather_provider = factory.get_weather_provider()

    async def execute_async():
        await start_cache_connection(cache)
        use_case = AsyncGetCityWeatherUseCase(cache=cache, weather_provider=weather_provider)
        return await use_case.execute(city)

    weather_data = run_async(execute_async())

    return SuccessResponse(data=weather_data).to_dict()


@app.get("/health")
def health_route():
    """
    GET /health

    Returns status, uptime (seconds), version and Redis liveness.
    """
    cache = get_weather_provider_factory().get_cache()
    run_async(start_cache_connection(cache))

    return HealthResponse(
        uptime=round(time.monotonic() - _process_started_at, 3),
        version=App.VERSION,
        redis=cache.is_connected()
    ).to_dict()


warmup_service = WarmupService(
    logger=logger,
    get_or_create_event_loop=lambda: get_or_create_event_loop(),
    run_async=lambda coro: run_async(coro),
    get_weather_provider_factory=lambda: get_weather_provider_factory(),
    cors_origin=App.CORS_ORIGIN,
)


# =============================
# Lambda Handler (100% ASYNC)
# =============================

@logger.inject_lambda_context()
def lambda_handler(event, context: LambdaContext):
    """
    AWS Lambda main function - 100% ASYNC

    AWS Lambda Powertools manages:
    - REST routing with exception handlers
    - CORS
    - JSON serialization
    - Structured logging

    Available routes:
    - GET /weather?city=London
    - GET /health
    """
    warmup_response = warmup_service.handle_warmup_ping(event)
    if warmup_response is not None:
        return warmup_response

    headers = event.get('headers', {}) or {}
    request_context = event.get('requestContext', {}) or {}
    identity = request_context.get('identity', {}) or {}

    logger.info(
        "Requisição Lambda recebida",
        rota=event.get('path', 'N/A'),
        metodo=event.get('httpMethod', 'N/A'),
        request_id=getattr(context, 'aws_request_id', 'N/A'),
        source_ip=identity.get('sourceIp', 'N/A'),
        user_agent=headers.get('User-Agent', 'N/A')
    )

    response = app.resolve(event, context)

    if 'headers' not in response:
        response['headers'] = {}

    response['headers']['Access-Control-Allow-Origin'] = App.CORS_ORIGIN
    response['headers']['Access-Control-Allow-Headers'] = 'Content-Type,Authorization,X-Requested-With'
    response['headers']['Access-Control-Allow-Methods'] = 'GET,OPTIONS'
    response['headers']['Access-Control-Max-Age'] = '86400'

    status_code = response.get('statusCode', 'N/A')
    logger.info(
        "Requisição Lambda concluída",
        status_code=status_code,
        sucesso=status_code == 200
    )

    return response


def get_or_create_event_loop():
    """
    Retorna event loop global persistente

    Benefícios:
    - Reutiliza event loop entre invocações Lambda (warm starts)
    - Sessão aiohttp e cliente Redis permanecem válidos
    - Task de conexão Redis continua de onde parou na próxima invocação
    """
    global _global_event_loop

    if _global_event_loop is not None and not _global_event_loop.is_closed():
        return _global_event_loop

    _global_event_loop = asyncio.new_event_loop()
    asyncio.set_event_loop(_global_event_loop)

    return _global_event_loop


def run_async(coro):
    """
    Executa coroutine no event loop global (NÃO fecha o loop)

    Args:
        coro: Coroutine a ser executada

    Returns:
        Resultado da coroutine
    """
    loop = get_or_create_event_loop()
    return loop.run_until_complete(coro)


def shutdown() -> None:
    """Fechamento best-effort de Redis e sessão HTTP no fim do processo"""
    factory = get_weather_provider_factory()

    async def close_all():
        close_cache = getattr(factory.get_cache(), "close", None)
        if close_cache is not None:
            await close_cache()
        await get_aiohttp_session_manager().cleanup()

    try:
        run_async(close_all())
    except Exception as exc:
        logger.warning("Shutdown cleanup failed", error=str(exc))
