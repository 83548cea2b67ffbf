"""
Domain Exceptions - Business Rule Violations
Clean Architecture: Domain layer exceptions
"""
from enum import Enum


class WeatherErrorKind(Enum):
    """Closed set of failure kinds produced by the weather provider client"""
    INVALID_CITY = "InvalidCity"
    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    PROVIDER_ERROR = "ProviderError"
    TIMEOUT = "Timeout"
    UNREACHABLE = "Unreachable"
    UNKNOWN = "Unknown"


class DomainException(Exception):
    """Base exception for all domain-level errors"""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInputException(DomainException):
    """Raised when the city parameter fails validation (never reaches the provider)"""
    def __init__(self, message: str, code: str = "INVALID_CITY", details: dict = None):
        super().__init__(message, details)
        self.code = code


class WeatherProviderException(DomainException):
    """Raised when the upstream weather provider call fails, classified by kind"""
    def __init__(self, kind: WeatherErrorKind, message: str, details: dict = None):
        super().__init__(message, details)
        self.kind = kind
