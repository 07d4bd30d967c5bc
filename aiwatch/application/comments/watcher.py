"""
CommentWatcher — превращает события уведомителя в вызовы колбэков.

=== ЖИЗНЕННЫЙ ЦИКЛ ===
    idle  →  watching  ⇄  paused
               ↓
            closed  →  (watch) → watching

=== ОБРАБОТКА change(path) ===
1. Пауза или путь в ignore (относительно корня наблюдения) — событие пропускается
2. Файл читается целиком; ошибка чтения — событие пропускается без изменений
3. Блоки без триггера заменяют блоки файла в накопителе, для каждого нового
   блока вызывается on_ai_comment(block, all_pending)
4. Есть триггер — on_ai_trigger(pending других файлов + все блоки файла),
   накопитель очищается целиком

=== ПОДПИСКИ ===
Одновременно активна максимум одна подписка. Каждая помечается поколением;
события от закрытой подписки, пришедшие позже, отбрасываются.
"""
from __future__ import annotations

import os
import re
import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from aiwatch.domain.comments import (
    CommentBlock,
    FileNotifier,
    NotifierEvent,
    NotifierOptions,
    NotifierSubscription,
    get_comment_key,
    has_trigger_comment,
    parse_comments_in_file,
)
from aiwatch.logging_config import get_logger
from aiwatch.settings import Settings, settings

from .ignore import DEFAULT_IGNORED_PATTERNS, PatternLike, compile_patterns, should_ignore_path
from .pending import PendingComments

logger = get_logger("aiwatch.watcher")

CommentCallback = Callable[[CommentBlock, List[CommentBlock]], None]
TriggerCallback = Callable[[List[CommentBlock]], None]


def read_text_file(file_path: str) -> str:
    return Path(file_path).read_text(encoding="utf-8")


@dataclass
class WatcherCallbacks:
    """Колбэки watcher'а, все необязательные."""

    on_ai_comment: Optional[CommentCallback] = None
    on_ai_trigger: Optional[TriggerCallback] = None
    on_ready: Optional[Callable[[], None]] = None
    on_error: Optional[Callable[[BaseException], None]] = None


@dataclass
class WatcherOptions:
    ignored_patterns: List[PatternLike] = field(default_factory=lambda: list(DEFAULT_IGNORED_PATTERNS))
    cwd: Optional[str] = None
    ignore_initial: bool = True
    stability_threshold: int = 500
    poll_interval: int = 50
    read_file: Callable[[str], str] = read_text_file

    @classmethod
    def from_settings(cls, app_settings: Settings = settings, cwd: Optional[str] = None) -> "WatcherOptions":
        return cls(
            ignored_patterns=list(app_settings.IGNORED_PATTERNS),
            cwd=cwd,
            ignore_initial=app_settings.IGNORE_INITIAL,
            stability_threshold=app_settings.STABILITY_THRESHOLD_MS,
            poll_interval=app_settings.POLL_INTERVAL_MS,
        )

    def notifier_options(self) -> NotifierOptions:
        return NotifierOptions(
            ignored=[p.pattern if isinstance(p, re.Pattern) else p for p in self.ignored_patterns],
            ignore_initial=self.ignore_initial,
            stability_threshold=self.stability_threshold,
            poll_interval=self.poll_interval,
            cwd=self.cwd,
        )


class WatcherState(str, Enum):
    IDLE = "idle"
    WATCHING = "watching"
    PAUSED = "paused"
    CLOSED = "closed"


class CommentWatcher:
    """Следит за деревом файлов и собирает AI-комментарии до появления AI!"""

    def __init__(
        self,
        notifier: FileNotifier,
        callbacks: Optional[WatcherCallbacks] = None,
        options: Optional[WatcherOptions] = None,
    ):
        """
        Args:
            notifier: Фабрика подписок на изменения файлов
            callbacks: Колбэки on_ai_comment / on_ai_trigger / on_ready / on_error
            options: Паттерны игнора, чтение файлов и параметры уведомителя
        """
        self.notifier = notifier
        self.callbacks = callbacks or WatcherCallbacks()
        self.options = options or WatcherOptions()
        self._ignored = compile_patterns(self.options.ignored_patterns)

        self._pending = PendingComments()
        self._subscription: Optional[NotifierSubscription] = None
        self._root: Optional[str] = None
        self._generation = 0
        self._ready_generation = 0
        self._paused = False
        self._closed = False
        # RLock: колбэки могут вызывать pause()/resume() изнутри обработки
        self._lock = threading.RLock()

    # --- Lifecycle ----------------------------------------------------------
    def watch(self, root_path: str) -> None:
        """Начать наблюдение за root_path, закрыв предыдущую подписку."""
        with self._lock:
            if self._subscription is not None:
                self._close_subscription()

            self._generation += 1
            generation = self._generation
            self._closed = False
            self._root = os.path.join(self.options.cwd, root_path) if self.options.cwd else root_path
            subscription = self.notifier.start_watching(root_path, self.options.notifier_options())
            self._subscription = subscription

        logger.info("👀 Watching %s for AI comments (generation=%s)", root_path, generation)

        # Подписка вне self._lock: уведомитель может доставить накопленные события сразу
        subscription.on(NotifierEvent.READY.value, lambda *args: self._handle_ready(generation))
        subscription.on(NotifierEvent.CHANGE.value, lambda path, *args: self._handle_change(path, generation))
        subscription.on(NotifierEvent.ERROR.value, lambda error, *args: self._handle_error(error, generation))

    def close(self) -> None:
        with self._lock:
            if self._subscription is not None:
                self._close_subscription()
            self._generation += 1
            self._closed = True
        logger.info("🛑 Comment watcher closed")

    def pause(self) -> None:
        with self._lock:
            if not self._paused:
                logger.debug("⏸️ Comment watcher paused")
            self._paused = True

    def resume(self) -> None:
        with self._lock:
            if self._paused:
                logger.debug("▶️ Comment watcher resumed")
            self._paused = False

    def is_paused(self) -> bool:
        return self._paused

    @property
    def state(self) -> WatcherState:
        with self._lock:
            if self._closed:
                return WatcherState.CLOSED
            if self._subscription is None:
                return WatcherState.IDLE
            return WatcherState.PAUSED if self._paused else WatcherState.WATCHING

    # --- Pending set --------------------------------------------------------
    def get_pending_comments(self) -> List[CommentBlock]:
        with self._lock:
            return self._pending.snapshot()

    def clear_pending(self) -> None:
        with self._lock:
            self._pending.clear()

    # --- Notifier events ----------------------------------------------------
    def _is_current(self, generation: int) -> bool:
        return generation == self._generation and self._subscription is not None

    def _handle_ready(self, generation: int) -> None:
        with self._lock:
            if not self._is_current(generation) or self._ready_generation == generation:
                return
            self._ready_generation = generation
            logger.info("✅ Comment watcher ready")
            if self.callbacks.on_ready:
                self.callbacks.on_ready()

    def _handle_error(self, error: BaseException, generation: int) -> None:
        with self._lock:
            if not self._is_current(generation):
                return
            logger.warning("⚠️ Notifier error: %s", error)
            if self.callbacks.on_error:
                self.callbacks.on_error(error)

    def _handle_change(self, file_path: str, generation: int) -> None:
        with self._lock:
            if not self._is_current(generation):
                logger.debug("Discarding change from superseded subscription | path=%s", file_path)
                return
            if self._paused:
                return
            if should_ignore_path(file_path, self._ignored, root=self._root):
                return

            try:
                content = self.options.read_file(file_path)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Не удалось прочитать файл | path=%s error=%s", file_path, e)
                return

            blocks = parse_comments_in_file(file_path, content)
            logger.debug("Файл просканирован | path=%s blocks=%s", file_path, len(blocks))

            if has_trigger_comment(blocks):
                self._dispatch_trigger(file_path, blocks)
            else:
                self._store_comments(file_path, blocks)

    def _store_comments(self, file_path: str, blocks: List[CommentBlock]) -> None:
        previous = self._pending.replace(file_path, blocks)
        if not blocks:
            if previous:
                logger.debug("AI-комментарии удалены из файла | path=%s", file_path)
            return

        known_keys = {get_comment_key(block) for block in previous}
        snapshot = self._pending.snapshot()
        for block in blocks:
            if get_comment_key(block) in known_keys:
                continue
            logger.debug("AI comment collected | path=%s line=%s", file_path, block.start_line)
            if self.callbacks.on_ai_comment:
                self.callbacks.on_ai_comment(block, list(snapshot))

    def _dispatch_trigger(self, file_path: str, blocks: List[CommentBlock]) -> None:
        comments = self._pending.others(file_path) + blocks
        self._pending.clear()
        logger.info("🚀 AI! trigger in %s | sending %s comment(s)", file_path, len(comments))
        if self.callbacks.on_ai_trigger:
            self.callbacks.on_ai_trigger(comments)

    def _close_subscription(self) -> None:
        subscription, self._subscription = self._subscription, None
        subscription.close()
