"""
Configurações e fixtures compartilhadas para testes unitários
"""
import json
import os
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

# Sem agente Datadog nos testes
os.environ.setdefault('DD_TRACE_ENABLED', 'false')

from domain.exceptions import WeatherErrorKind, WeatherProviderException


LONDON_PAYLOAD = {
    "location": {"name": "London", "country": "UK"},
    "current": {"temp_c": 20, "condition": {"text": "Sunny"}}
}


class FakeCache:
    """
    Cache em memória que cumpre o contrato fail-open do IAsyncCacheRepository
    Registra chamadas para asserções
    """

    def __init__(self, connected: bool = True):
        self.connected = connected
        self.store: Dict[str, str] = {}
        self.get_calls = []
        self.set_calls = []

    def is_connected(self) -> bool:
        return self.connected

    async def get(self, key: str) -> Optional[str]:
        self.get_calls.append(key)
        if not self.connected:
            return None
        return self.store.get(key)

    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        self.set_calls.append((key, value, ttl_seconds))
        if self.connected:
            self.store[key] = value

    async def delete(self, key: str) -> bool:
        if not self.connected:
            return False
        return self.store.pop(key, None) is not None


class MockContext:
    """Mock do Lambda Context para testes locais"""
    def __init__(self):
        self.function_name = 'weather-api-wrapper'
        self.function_version = '$LATEST'
        self.invoked_function_arn = 'arn:aws:lambda:us-east-1:123456789012:function:weather-api-wrapper'
        self.memory_limit_in_mb = '256'
        self.aws_request_id = 'test-request-id-12345'
        self.log_group_name = '/aws/lambda/weather-api-wrapper'
        self.log_stream_name = '2025/11/18/[$LATEST]test'

    def get_remaining_time_in_millis(self):
        return 30000  # 30 segundos


@pytest.fixture
def london_payload() -> Dict[str, Any]:
    """Payload do provider para London (cópia para cada teste)"""
    return json.loads(json.dumps(LONDON_PAYLOAD))


@pytest.fixture
def fake_cache():
    """Cache em memória conectado"""
    return FakeCache()


@pytest.fixture
def mock_provider(london_payload):
    """Provider mockado que retorna o payload de London"""
    provider = MagicMock()
    provider.provider_name = "WeatherAPI"
    provider.fetch_current = AsyncMock(return_value=london_payload)
    return provider


@pytest.fixture
def make_provider_error():
    """
    Factory fixture para WeatherProviderException

    Usage:
        def test_something(make_provider_error):
            error = make_provider_error(WeatherErrorKind.TIMEOUT)
    """
    messages = {
        WeatherErrorKind.INVALID_CITY: "Invalid city name: No matching location found.",
        WeatherErrorKind.UNAUTHORIZED: "Invalid API key. Please check your configuration.",
        WeatherErrorKind.FORBIDDEN: "API access forbidden. Please check your subscription.",
        WeatherErrorKind.PROVIDER_ERROR: "Weather service error: Internal application error.",
        WeatherErrorKind.TIMEOUT: "Request timeout. Please try again.",
        WeatherErrorKind.UNREACHABLE: "Unable to connect to weather service. Please check your internet connection.",
        WeatherErrorKind.UNKNOWN: "An unexpected error occurred while fetching weather data.",
    }

    def _make(kind: WeatherErrorKind) -> WeatherProviderException:
        return WeatherProviderException(kind, messages[kind])

    return _make


@pytest.fixture
def mock_context():
    """Fixture que retorna MockContext para todos os testes"""
    return MockContext()


@pytest.fixture
def make_event():
    """
    Factory fixture para eventos do API Gateway (REST, payload v1)

    Usage:
        event = make_event('/weather', {'city': 'London'})
    """
    def _make(
        path: str,
        query: Optional[Dict[str, Any]] = None,
        method: str = 'GET',
        source_ip: str = '203.0.113.10'
    ) -> Dict[str, Any]:
        query = query or {}
        single = {}
        multi = {}
        for key, value in query.items():
            values = value if isinstance(value, list) else [value]
            single[key] = values[-1]
            multi[key] = values

        return {
            'resource': path,
            'path': path,
            'httpMethod': method,
            'headers': {
                'Accept': 'application/json',
                'User-Agent': 'pytest'
            },
            'multiValueHeaders': {},
            'pathParameters': None,
            'queryStringParameters': single or None,
            'multiValueQueryStringParameters': multi or None,
            'body': None,
            'isBase64Encoded': False,
            'requestContext': {
                'httpMethod': method,
                'path': path,
                'stage': 'test',
                'requestId': 'test-request-id-12345',
                'identity': {'sourceIp': source_ip}
            }
        }

    return _make
