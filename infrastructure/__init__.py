# infrastructure/__init__.py
"""Инфраструктура приложения (БД, канал изменений, логирование)."""

from .logger import logger, setup_logging

__all__ = [
    "logger",
    "setup_logging",
]
