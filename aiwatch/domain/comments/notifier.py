"""
Контракт уведомителя об изменениях файлов.

Watcher зависит только от этих протоколов, а не от конкретной библиотеки
мониторинга. В тестах подставляется двойник, который генерирует события
синхронно.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Protocol, Sequence, runtime_checkable


class NotifierEvent(str, Enum):
    """События, которые уведомитель отдаёт подписчикам."""

    READY = "ready"
    CHANGE = "change"
    ERROR = "error"


Listener = Callable[..., None]


@dataclass
class NotifierOptions:
    """Параметры подписки, передаются уведомителю как есть."""

    ignored: List[str] = field(default_factory=list)  # regex-паттерны путей
    ignore_initial: bool = True
    stability_threshold: int = 500  # мс без новых записей до события change
    poll_interval: int = 50  # мс между проверками стабильности
    cwd: Optional[str] = None


@runtime_checkable
class NotifierSubscription(Protocol):
    """Активная подписка на изменения."""

    def on(self, event: str, listener: Listener) -> "NotifierSubscription":
        """Подписать listener на событие ready / change / error."""
        ...

    def close(self) -> None:
        """Остановить подписку. После возврата события не доставляются."""
        ...


@runtime_checkable
class FileNotifier(Protocol):
    """Фабрика подписок."""

    def start_watching(
        self,
        paths: str | Sequence[str],
        options: Optional[NotifierOptions] = None,
    ) -> NotifierSubscription:
        ...
