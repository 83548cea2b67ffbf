"""
Testes unitários para WeatherApiProvider
Sessão aiohttp mockada, sem chamadas reais à API
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from domain.exceptions import WeatherErrorKind, WeatherProviderException
from infrastructure.adapters.output.providers.weatherapi.weatherapi_provider import (
    WeatherApiProvider
)


def _mock_response(status: int, payload=None, json_error: Exception = None):
    response = MagicMock()
    response.status = status
    if json_error is not None:
        response.json = AsyncMock(side_effect=json_error)
    else:
        response.json = AsyncMock(return_value=payload)
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def provider(session):
    session_manager = MagicMock()
    session_manager.get_session = AsyncMock(return_value=session)
    return WeatherApiProvider(
        api_key='test-key',
        base_url='https://api.weather.test/v1/',
        session_manager=session_manager
    )


def _respond_with(session, response):
    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=response)
    ctx.__aexit__ = AsyncMock(return_value=False)
    session.get.return_value = ctx


@pytest.mark.asyncio
class TestWeatherApiProvider:
    """Testes de chamada e classificação de erros"""

    async def test_success_returns_payload_verbatim(self, provider, session, london_payload):
        _respond_with(session, _mock_response(200, london_payload))

        result = await provider.fetch_current("  London ")

        assert result == london_payload
        args, kwargs = session.get.call_args
        assert args[0] == 'https://api.weather.test/v1/current.json'
        assert kwargs['params'] == {'key': 'test-key', 'q': 'London'}
        assert kwargs['timeout'].total == 10

    @pytest.mark.parametrize("status,kind,expected_message", [
        (400, WeatherErrorKind.INVALID_CITY, "Invalid city name: No matching location found."),
        (401, WeatherErrorKind.UNAUTHORIZED, "Invalid API key. Please check your configuration."),
        (403, WeatherErrorKind.FORBIDDEN, "API access forbidden. Please check your subscription."),
        (500, WeatherErrorKind.PROVIDER_ERROR, "Weather service error: No matching location found."),
        (429, WeatherErrorKind.PROVIDER_ERROR, "Weather service error: No matching location found."),
    ])
    async def test_error_status_mapping(self, provider, session, status, kind, expected_message):
        body = {"error": {"code": 1006, "message": "No matching location found."}}
        _respond_with(session, _mock_response(status, body))

        with pytest.raises(WeatherProviderException) as exc_info:
            await provider.fetch_current("Zzzzznotreal")

        assert exc_info.value.kind == kind
        assert exc_info.value.message == expected_message
        assert exc_info.value.details["upstream_status"] == status

    async def test_error_without_json_body_uses_default_message(self, provider, session):
        _respond_with(session, _mock_response(400, json_error=ValueError("not json")))

        with pytest.raises(WeatherProviderException) as exc_info:
            await provider.fetch_current("Zzzzznotreal")

        assert exc_info.value.kind == WeatherErrorKind.INVALID_CITY
        assert exc_info.value.message == "Invalid city name: Weather data not found"

    async def test_timeout(self, provider, session):
        session.get.side_effect = asyncio.TimeoutError()

        with pytest.raises(WeatherProviderException) as exc_info:
            await provider.fetch_current("London")

        assert exc_info.value.kind == WeatherErrorKind.TIMEOUT
        assert exc_info.value.message == "Request timeout. Please try again."

    async def test_connection_refused_is_unreachable(self, provider, session):
        session.get.side_effect = aiohttp.ClientConnectorError(
            MagicMock(), OSError(111, "Connection refused")
        )

        with pytest.raises(WeatherProviderException) as exc_info:
            await provider.fetch_current("London")

        assert exc_info.value.kind == WeatherErrorKind.UNREACHABLE

    async def test_unexpected_error_is_unknown(self, provider, session):
        session.get.side_effect = RuntimeError("boom")

        with pytest.raises(WeatherProviderException) as exc_info:
            await provider.fetch_current("London")

        assert exc_info.value.kind == WeatherErrorKind.UNKNOWN
        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestClassifyStatus:

    def test_details_carry_upstream_info(self):
        error = WeatherApiProvider.classify_status(502, "Bad gateway")
        assert error.kind == WeatherErrorKind.PROVIDER_ERROR
        assert error.details == {"upstream_status": 502, "upstream_message": "Bad gateway"}

    def test_provider_name(self):
        provider = WeatherApiProvider(api_key='k', session_manager=MagicMock())
        assert provider.provider_name == "WeatherAPI"
