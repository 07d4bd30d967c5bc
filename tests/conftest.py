"""
Pytest fixtures для тестирования watcher'а AI-комментариев
"""
import logging
from typing import Callable, Dict, List, Optional

import pytest

from aiwatch.application.comments import CommentWatcher, WatcherCallbacks, WatcherOptions
from aiwatch.domain.comments import NotifierOptions


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging():
    """Настройка логирования для тестов - изолированно от основного приложения"""
    root_logger = logging.getLogger()

    # Очищаем все существующие handlers
    root_logger.handlers.clear()

    # Создаём новый handler для тестов
    handler = logging.StreamHandler()
    handler.setLevel(logging.ERROR)  # В тестах показываем только ошибки
    formatter = logging.Formatter('%(asctime)s | %(levelname)-8s | %(name)s - %(message)s')
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.ERROR)

    yield


class MockSubscription:
    """Подписка-двойник: события генерируются тестом синхронно через emit()"""

    def __init__(self, paths, options: Optional[NotifierOptions]):
        self.paths = paths
        self.options = options
        self.listeners: Dict[str, List[Callable]] = {}
        self.closed = False

    def on(self, event: str, listener: Callable) -> "MockSubscription":
        self.listeners.setdefault(event, []).append(listener)
        return self

    def close(self) -> None:
        self.closed = True

    def emit(self, event: str, *args) -> None:
        """Доставляет событие даже после close() — как запоздавшее событие"""
        for listener in list(self.listeners.get(event, [])):
            listener(*args)


class MockNotifier:
    """Фабрика подписок, запоминает все созданные подписки"""

    def __init__(self):
        self.subscriptions: List[MockSubscription] = []

    def start_watching(self, paths, options=None) -> MockSubscription:
        subscription = MockSubscription(paths, options)
        self.subscriptions.append(subscription)
        return subscription

    @property
    def current(self) -> MockSubscription:
        return self.subscriptions[-1]


class FakeFiles:
    """Содержимое файлов в памяти; ключ ищется как подстрока пути"""

    def __init__(self, contents: Dict[str, str]):
        self.contents = dict(contents)
        self.reads: List[str] = []

    def read(self, file_path: str) -> str:
        self.reads.append(file_path)
        for key, content in self.contents.items():
            if key in file_path:
                return content
        if "error.ts" in file_path:
            raise FileNotFoundError(file_path)
        return ""


@pytest.fixture
def notifier() -> MockNotifier:
    return MockNotifier()


@pytest.fixture
def files() -> FakeFiles:
    return FakeFiles({
        "trigger.ts": "// AI! Do something",
        "collect.ts": "// AI: collect this",
        "collect2.ts": "// AI: collect this too",
        "mixed.ts": "// AI: first line\n// AI! trigger",
        "none.ts": "// regular comment",
    })


@pytest.fixture
def make_watcher(notifier, files):
    """Создаёт CommentWatcher с двойниками уведомителя и чтения файлов"""

    def factory(callbacks: Optional[WatcherCallbacks] = None, **option_overrides) -> CommentWatcher:
        options = WatcherOptions(read_file=files.read, **option_overrides)
        return CommentWatcher(notifier, callbacks or WatcherCallbacks(), options)

    return factory
