"""
Настройки AI Comment Watcher

Значения можно переопределить через переменные окружения или .env,
по умолчанию заданы разумные значения.
"""
import json
from pathlib import Path
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path.cwd() / ".env"

DEFAULT_IGNORED_PATTERNS = [r"\.git", r"node_modules", r"dist", r"build", r"\.pi"]


class Settings(BaseSettings):
    """Настройки приложения"""

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # Application
    APP_NAME: str = "AI Comment Watcher"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"  # "development" или "production"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"

    # Watching
    WATCH_PATH: str = "."  # Корень отслеживаемого дерева
    IGNORED_PATTERNS: List[str] = DEFAULT_IGNORED_PATTERNS  # regex, ищутся в любом месте пути
    IGNORE_INITIAL: bool = True  # Не сканировать файлы, существующие на момент старта
    STABILITY_THRESHOLD_MS: int = 500  # Сколько файл должен «молчать» до события change
    POLL_INTERVAL_MS: int = 50  # Период проверки стабильности

    @field_validator('IGNORED_PATTERNS', mode='before')
    @classmethod
    def parse_json_list(cls, v):
        """Парсинг JSON строки в список."""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [item.strip() for item in v.split(',') if item.strip()]
        return v


settings = Settings()
