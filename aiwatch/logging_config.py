"""
Настройка логирования для AI Comment Watcher
"""

import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

from aiwatch.settings import Settings, settings


def setup_logging(app_settings: Optional[Settings] = None) -> None:
    """
    Один stdout-handler на корневом logger'е.

    production: JSON через python-json-logger, иначе LOG_FORMAT.
    События watchdog ниже WARNING не выводятся.
    """
    app_settings = app_settings or settings
    level = getattr(logging, app_settings.LOG_LEVEL.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if app_settings.ENVIRONMENT == 'production':
        handler.setFormatter(jsonlogger.JsonFormatter(
            '%(asctime)s %(name)s %(levelname)s %(message)s',
            timestamp=True
        ))
    else:
        handler.setFormatter(logging.Formatter(app_settings.LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    root.addHandler(handler)

    logging.getLogger('watchdog').setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
