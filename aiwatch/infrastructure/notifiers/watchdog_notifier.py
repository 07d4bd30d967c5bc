"""
Уведомитель об изменениях файлов на базе watchdog.

=== НАЗНАЧЕНИЕ ===
- Рекурсивно наблюдает за деревом через watchdog Observer
- created / modified / moved (путь назначения) → change(path)
- Сырые события по одному пути схлопываются: change отдаётся, когда
  файл «молчит» stability_threshold мс (проверка раз в poll_interval мс)
- ignore_initial=False: change для каждого существующего файла до ready
- Все события подписки доставляются по порядку в одном потоке-диспетчере
- ignore-паттерны применяются к пути относительно корня наблюдения
"""
from __future__ import annotations

import os
import queue
import threading
import time
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver

from aiwatch.application.comments.ignore import compile_patterns, relative_to_root, should_ignore_path
from aiwatch.domain.comments import Listener, NotifierEvent, NotifierOptions
from aiwatch.logging_config import get_logger

logger = get_logger("aiwatch.notifier.watchdog")

READY = NotifierEvent.READY.value
CHANGE = NotifierEvent.CHANGE.value
ERROR = NotifierEvent.ERROR.value


class _ChangeHandler(FileSystemEventHandler):
    """Передаёт изменения файлов в подписку (директории пропускаются)."""

    def __init__(self, subscription: "WatchdogSubscription"):
        self.subscription = subscription

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self.subscription.record(event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self.subscription.record(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self.subscription.record(event.dest_path)


class WatchdogSubscription:
    """Подписка на изменения в одном или нескольких деревьях."""

    def __init__(
        self,
        paths: List[str],
        options: NotifierOptions,
        observer_factory: Callable[[], BaseObserver] = Observer,
    ):
        self.paths = paths
        # abspath и realpath: бэкенды watchdog по-разному раскрывают симлинки
        self._roots = list(dict.fromkeys(
            root for path in paths for root in (os.path.abspath(path), os.path.realpath(path))
        ))
        self.options = options
        self._ignored = compile_patterns(options.ignored)

        self._listeners: Dict[str, List[Listener]] = {}
        # События, пришедшие до подписки на них; отдаются первому listener'у
        self._backlog: Dict[str, List[Tuple]] = {}
        self._events: "queue.Queue[Tuple]" = queue.Queue()
        self._dirty: Dict[str, float] = {}  # path -> время последнего сырого события
        self._dirty_lock = threading.Lock()
        self._emit_lock = threading.RLock()
        self._closed = threading.Event()

        self._observer = observer_factory()
        self._dispatcher = threading.Thread(
            target=self._run, name="aiwatch-notifier", daemon=True
        )

    # --- Public API ---------------------------------------------------------
    def start(self) -> "WatchdogSubscription":
        handler = _ChangeHandler(self)
        for path in self.paths:
            try:
                self._observer.schedule(handler, path, recursive=True)
            except OSError as e:
                logger.error(f"❌ Cannot watch {path}: {e}")
                self._events.put((ERROR, e))

        if not self.options.ignore_initial:
            for path in self.paths:
                self._queue_initial(path)

        try:
            self._observer.start()
        except OSError as e:
            logger.error(f"❌ Observer failed to start: {e}")
            self._events.put((ERROR, e))
        else:
            self._events.put((READY,))

        self._dispatcher.start()
        return self

    def on(self, event: str, listener: Listener) -> "WatchdogSubscription":
        event = NotifierEvent(event).value
        with self._emit_lock:
            self._listeners.setdefault(event, []).append(listener)
            for args in self._backlog.pop(event, []):
                if self._closed.is_set():
                    break
                self._call(event, listener, args)
        return self

    def close(self) -> None:
        if self._closed.is_set():
            return
        self._closed.set()

        self._observer.stop()
        if self._observer.is_alive() and threading.current_thread() is not self._observer:
            self._observer.join(timeout=1)

        with self._dirty_lock:
            self._dirty.clear()
        logger.debug("Watchdog subscription closed | paths=%s", self.paths)

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def record(self, path: str | bytes) -> None:
        """Сырое событие от watchdog: запоминаем путь до стабилизации."""
        path = os.fsdecode(path)
        if self._closed.is_set() or self._is_ignored(path):
            return
        with self._dirty_lock:
            self._dirty[path] = time.monotonic()

    # --- Internals ----------------------------------------------------------
    def _is_ignored(self, path: str) -> bool:
        """Паттерны сравниваются с путём внутри того корня, где лежит файл."""
        absolute = os.path.abspath(path)
        for root in self._roots:
            if relative_to_root(absolute, root) is not None:
                return should_ignore_path(absolute, self._ignored, root=root)
        return should_ignore_path(path, self._ignored)

    def _queue_initial(self, root: str) -> None:
        def onerror(error: OSError) -> None:
            self._events.put((ERROR, error))

        for dirpath, dirnames, filenames in os.walk(root, onerror=onerror):
            dirnames[:] = [
                d for d in dirnames
                if not self._is_ignored(os.path.join(dirpath, d))
            ]
            for filename in filenames:
                file_path = os.path.join(dirpath, filename)
                if not self._is_ignored(file_path):
                    self._events.put((CHANGE, file_path))

    def _collect_stable(self) -> List[str]:
        threshold = self.options.stability_threshold / 1000
        now = time.monotonic()
        with self._dirty_lock:
            stable = [path for path, seen in self._dirty.items() if now - seen >= threshold]
            for path in stable:
                del self._dirty[path]
        return stable

    def _run(self) -> None:
        interval = max(self.options.poll_interval, 1) / 1000
        while not self._closed.is_set():
            try:
                event, *args = self._events.get(timeout=interval)
            except queue.Empty:
                pass
            else:
                self._emit(event, tuple(args))

            for path in self._collect_stable():
                self._emit(CHANGE, (path,))

    def _emit(self, event: str, args: Tuple) -> None:
        with self._emit_lock:
            if self._closed.is_set():
                return
            listeners = list(self._listeners.get(event, []))
            if not listeners:
                self._backlog.setdefault(event, []).append(args)
                return
            for listener in listeners:
                self._call(event, listener, args)

    def _call(self, event: str, listener: Listener, args: Tuple) -> None:
        try:
            listener(*args)
        except Exception as e:
            logger.error(f"❌ Listener for '{event}' failed: {e}", exc_info=True)


class WatchdogNotifier:
    """Фабрика подписок watchdog для CommentWatcher."""

    def __init__(self, observer_factory: Callable[[], BaseObserver] = Observer):
        self.observer_factory = observer_factory

    def start_watching(
        self,
        paths: str | Sequence[str],
        options: Optional[NotifierOptions] = None,
    ) -> WatchdogSubscription:
        options = options or NotifierOptions()
        path_list = [paths] if isinstance(paths, str) else list(paths)
        if options.cwd:
            path_list = [os.path.join(options.cwd, path) for path in path_list]

        subscription = WatchdogSubscription(path_list, options, self.observer_factory)
        return subscription.start()
