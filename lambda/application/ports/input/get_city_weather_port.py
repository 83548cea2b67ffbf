"""
Input Port: Interface para buscar condições atuais de uma cidade
"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class IGetCityWeatherUseCase(ABC):
    """Interface para caso de uso de busca de clima por nome de cidade"""

    @abstractmethod
    async def execute(self, city: str) -> Dict[str, Any]:
        """
        Busca clima atual de uma cidade (cache primeiro, provider no miss)

        Args:
            city: Nome da cidade como recebido do cliente

        Returns:
            Payload do provider sem transformação

        Raises:
            InvalidInputException: Se city vazio ou não for string
            WeatherProviderException: Se o provider falhar
        """
        pass
