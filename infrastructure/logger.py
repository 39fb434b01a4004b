# infrastructure/logger.py
"""
📝 ЛОГИ

structlog поверх стандартного logging, всё в stdout.
В проде одна JSON строка на событие, с DEBUG=true - читаемый вывод
для консоли.
"""

import logging
import sys

import structlog

SHARED_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def setup_logging(debug: bool = False):
    """Один раз при старте, до создания приложений."""
    if debug:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        # кириллицу и эмодзи в ответах бота оставляем как есть
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)

    structlog.configure(
        processors=[*SHARED_PROCESSORS, renderer],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    # basicConfig ничего не делает, если у root уже есть хендлеры (uvicorn, pytest)
    logging.getLogger().setLevel(logging.DEBUG if debug else logging.INFO)


logger = structlog.get_logger()
