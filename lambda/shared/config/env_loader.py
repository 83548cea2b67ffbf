"""
Carregador de variáveis de ambiente a partir de arquivo .env
Usado apenas em execução local (na Lambda as variáveis vêm da configuração da função)
"""
import os
from pathlib import Path
from typing import Dict

from shared.config.logger_config import get_logger

logger = get_logger(child=True)

SENSITIVE_MARKERS = ('KEY', 'SECRET', 'PASSWORD', 'TOKEN')


def parse_env_file(env_path: Path) -> Dict[str, str]:
    """
    Lê pares KEY=VALUE de um arquivo .env

    Linhas vazias e comentários (#) são ignorados, aspas ao redor do valor
    são removidas.

    Args:
        env_path: Caminho do arquivo .env

    Returns:
        Dict com as variáveis encontradas (vazio se o arquivo não existir)
    """
    env_vars: Dict[str, str] = {}

    if not env_path.exists():
        logger.warning("Arquivo .env não encontrado", path=str(env_path))
        return env_vars

    with open(env_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith('#') or '=' not in line:
                continue

            key, value = line.split('=', 1)
            env_vars[key.strip()] = value.strip().strip('"').strip("'")

    return env_vars


def mask_value(key: str, value: str) -> str:
    """Oculta valores sensíveis para log"""
    if any(marker in key.upper() for marker in SENSITIVE_MARKERS):
        return f"***{value[-4:]}" if len(value) > 4 else "***"
    return value


def load_env_file(env_path: Path, override: bool = False) -> Dict[str, str]:
    """
    Aplica variáveis do .env em os.environ

    Args:
        env_path: Caminho do arquivo .env
        override: Se False, variáveis já definidas no ambiente são mantidas

    Returns:
        Dict com as variáveis efetivamente aplicadas
    """
    applied = {}

    for key, value in parse_env_file(env_path).items():
        if not override and key in os.environ:
            continue
        os.environ[key] = value
        applied[key] = value

    logger.info(
        "Variáveis de ambiente carregadas",
        path=str(env_path),
        variables={key: mask_value(key, value) for key, value in applied.items()}
    )
    return applied
