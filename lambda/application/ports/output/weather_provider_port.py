"""Weather Provider Port - Interface para o provedor climático externo"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class IWeatherProvider(ABC):
    """
    Interface para provedores de condições atuais por nome de cidade.
    O payload retornado é opaco: repassado ao cliente sem transformação.
    """

    @abstractmethod
    async def fetch_current(self, city: str) -> Dict[str, Any]:
        """
        Busca condições atuais de uma cidade

        Args:
            city: Nome da cidade já trimmed, como o usuário digitou

        Returns:
            Payload do provider (blocos location + current)

        Raises:
            WeatherProviderException: Com o kind da falha classificada
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Nome do provider (ex: 'WeatherAPI')"""
        pass
