"""
Exception Handler Service
Único ponto que traduz falhas tipadas em status HTTP e envelope de erro
"""
import json
from typing import Any, Callable, Dict

from aws_lambda_powertools.event_handler import Response

from application.dtos.responses import ErrorResponse, utc_timestamp
from domain.exceptions import (
    InvalidInputException,
    WeatherErrorKind,
    WeatherProviderException,
)
from shared.config.logger_config import logger as app_logger

# INVALID_CITY vira 404 para o cliente: o provider rejeitou a cidade
STATUS_BY_ERROR_KIND = {
    WeatherErrorKind.INVALID_CITY: 404,
    WeatherErrorKind.UNAUTHORIZED: 401,
    WeatherErrorKind.TIMEOUT: 408,
    WeatherErrorKind.UNREACHABLE: 503,
}


def _no_request_context() -> Dict[str, Any]:
    return {"request_timestamp": utc_timestamp()}


class ExceptionHandlerService:
    """
    Service para centralizar tratamento de exceções da aplicação
    Responsável por converter exceções em respostas HTTP com envelope padrão
    """
    logger = app_logger
    request_context: Callable[[], Dict[str, Any]] = staticmethod(_no_request_context)

    def __init__(self, logger=app_logger, request_context: Callable[[], Dict[str, Any]] = None):
        # Permite injeção de logger compartilhado e do extrator de contexto da requisição
        if logger:
            ExceptionHandlerService.logger = logger
        if request_context:
            ExceptionHandlerService.request_context = staticmethod(request_context)

    @staticmethod
    def status_for_kind(kind: WeatherErrorKind) -> int:
        """InvalidCity->404, Unauthorized->401, Timeout->408, Unreachable->503, demais->500"""
        return STATUS_BY_ERROR_KIND.get(kind, 500)

    @staticmethod
    def _json_response(error: ErrorResponse) -> Response:
        return Response(
            status_code=error.status_code,
            content_type="application/json",
            body=json.dumps(error.to_dict())
        )

    @staticmethod
    def handle_invalid_input(ex: InvalidInputException) -> Response:
        """Handle 400 - City parameter validation"""
        ExceptionHandlerService.logger.warning(
            "Invalid city parameter",
            error=ex.message,
            code=ex.code,
            **ExceptionHandlerService.request_context()
        )
        return ExceptionHandlerService._json_response(ErrorResponse(
            message=ex.message,
            status_code=400,
            code=ex.code,
            details=ex.details
        ))

    @staticmethod
    def handle_provider_error(ex: WeatherProviderException) -> Response:
        """Handle provider failures by error kind"""
        status_code = ExceptionHandlerService.status_for_kind(ex.kind)
        log = ExceptionHandlerService.logger.warning if status_code < 500 else ExceptionHandlerService.logger.error
        log(
            "Weather provider error",
            error=ex.message,
            kind=ex.kind.value,
            status_code=status_code,
            details=ex.details,
            **ExceptionHandlerService.request_context()
        )
        return ExceptionHandlerService._json_response(ErrorResponse(
            message=ex.message,
            status_code=status_code
        ))

    @staticmethod
    def handle_route_not_found(ex: Exception) -> Response:
        """Handle 404 - Unknown route"""
        context = ExceptionHandlerService.request_context()
        ExceptionHandlerService.logger.warning("Route not found", **context)
        url = context.get('url')
        return ExceptionHandlerService._json_response(ErrorResponse(
            message=f"Route {url} not found" if url else "Route not found",
            status_code=404,
            details={"available_routes": ["GET /weather?city=CityName", "GET /health"]}
        ))

    @staticmethod
    def handle_unexpected_error(ex: Exception) -> Response:
        """Handle 500 - Unexpected errors"""
        ExceptionHandlerService.logger.error(
            "Unexpected error",
            error=str(ex),
            exc_info=True,
            **ExceptionHandlerService.request_context()
        )
        return ExceptionHandlerService._json_response(ErrorResponse(
            message="Internal server error",
            status_code=500
        ))
