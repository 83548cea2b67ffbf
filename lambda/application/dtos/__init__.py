"""Application DTOs - Data Transfer Objects para contratos de API"""

from application.dtos.responses import (
    SuccessResponse,
    ErrorResponse,
    HealthResponse,
    error_code_for_status,
    utc_timestamp
)

__all__ = [
    'SuccessResponse',
    'ErrorResponse',
    'HealthResponse',
    'error_code_for_status',
    'utc_timestamp'
]
