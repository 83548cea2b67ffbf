"""
Configuração centralizada de logging
Logger AWS Lambda Powertools (JSON estruturado) com service name do Datadog
"""
import os
from typing import Optional

from aws_lambda_powertools import Logger

DEFAULT_SERVICE_NAME = 'weather-api-wrapper'


def get_logger(
    service_name: Optional[str] = None,
    child: bool = False,
    level: Optional[str] = None
) -> Logger:
    """
    Retorna uma instância configurada do Logger

    Args:
        service_name: Nome do serviço (se None, usa DD_SERVICE do ambiente)
        child: Se True, cria um child logger que herda handlers do logger principal
        level: Nível de log (se None, usa LOG_LEVEL do ambiente ou INFO)

    Returns:
        Logger configurado
    """
    service_name = service_name or os.environ.get('DD_SERVICE', DEFAULT_SERVICE_NAME)

    if child:
        return Logger(service=service_name, child=True)

    return Logger(
        service=service_name,
        level=level or os.environ.get('LOG_LEVEL', 'INFO')
    )


logger = get_logger()
