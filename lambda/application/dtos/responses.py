"""Response DTOs - Envelopes padronizados de resposta da API"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from domain.constants import Response


def utc_timestamp() -> str:
    """Timestamp ISO 8601 em UTC com milissegundos (ex: 2025-11-20T15:00:00.000Z)"""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def error_code_for_status(status_code: int) -> str:
    """Código interno de erro derivado do status HTTP"""
    return Response.ERROR_CODES.get(status_code, 'UNKNOWN_ERROR')


@dataclass
class SuccessResponse:
    """Envelope de sucesso: {success, message, data, meta: {timestamp, source}}"""
    data: Any
    message: str = Response.SUCCESS_MESSAGE
    timestamp: str = field(default_factory=utc_timestamp)
    source: str = Response.SOURCE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': True,
            'message': self.message,
            'data': self.data,
            'meta': {
                'timestamp': self.timestamp,
                'source': self.source
            }
        }


@dataclass
class ErrorResponse:
    """Envelope de erro: {success, error: {message, code, statusCode, details?}, timestamp}"""
    message: str
    status_code: int = 500
    code: Optional[str] = None
    details: Optional[Any] = None
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        error = {
            'message': self.message,
            'code': self.code or error_code_for_status(self.status_code),
            'statusCode': self.status_code
        }
        if self.details:
            error['details'] = self.details

        return {
            'success': False,
            'error': error,
            'timestamp': self.timestamp
        }


@dataclass
class HealthResponse:
    """Corpo do GET /health"""
    uptime: float
    version: str
    redis: bool
    status: str = 'OK'
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'status': self.status,
            'timestamp': self.timestamp,
            'uptime': self.uptime,
            'version': self.version,
            'redis': self.redis
        }
