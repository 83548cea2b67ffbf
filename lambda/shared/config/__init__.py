"""Shared configuration"""
from .logger_config import get_logger, logger

__all__ = ['get_logger', 'logger']
