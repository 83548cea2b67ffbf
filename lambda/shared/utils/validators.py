"""
Validators Utility
Input validation with domain exceptions
"""
from typing import Any, Type

from domain.constants import Validation
from domain.exceptions import InvalidInputException

USAGE_HINT = "Usage: /weather?city=CityName (example: /weather?city=London)"


class GenericValidator:
    """Validador genérico para reduzir duplicação de código"""

    @staticmethod
    def validate_not_empty(
        value: Any,
        param_name: str,
        exception_class: Type[Exception] = ValueError
    ) -> str:
        """
        Valida se valor é string não vazia

        Args:
            value: Valor a validar
            param_name: Nome do parâmetro (para mensagem de erro)
            exception_class: Classe de exceção a lançar

        Returns:
            String validada e trimmed

        Raises:
            exception_class: Se não for string ou estiver vazia
        """
        if not isinstance(value, str) or not value.strip():
            raise exception_class(f"{param_name} must be a non-empty string")
        return value.strip()


class CityValidator:
    """Validate city query parameter"""

    MAX_LENGTH = Validation.CITY_MAX_LENGTH

    @staticmethod
    def validate(city: Any) -> str:
        """
        Validate presence, type and length of the city parameter

        Rules (checked in order):
        - MISSING_CITY: parameter absent or empty
        - INVALID_CITY: not a single string, or blank after trim
        - CITY_TOO_LONG: more than 100 characters after trim

        Args:
            city: Raw value from the query string

        Returns:
            The trimmed city (original case preserved)

        Raises:
            InvalidInputException: With the code of the rule that failed
        """
        if city is None or city == "":
            raise InvalidInputException(
                "City parameter is required",
                code="MISSING_CITY",
                details={"usage": USAGE_HINT}
            )

        if not isinstance(city, str) or not city.strip():
            raise InvalidInputException(
                "City must be a non-empty string",
                code="INVALID_CITY",
                details={"usage": USAGE_HINT}
            )

        trimmed = city.strip()
        if len(trimmed) > CityValidator.MAX_LENGTH:
            raise InvalidInputException(
                f"City name must be at most {CityValidator.MAX_LENGTH} characters",
                code="CITY_TOO_LONG",
                details={"length": len(trimmed), "max": CityValidator.MAX_LENGTH}
            )

        return trimmed
