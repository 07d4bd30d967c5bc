from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from aiwatch.domain.comments import CommentBlock, FileNotifier
from aiwatch.logging_config import get_logger
from aiwatch.settings import Settings, settings

from .message import create_ai_message
from .watcher import CommentWatcher, WatcherCallbacks, WatcherOptions

Deliver = Callable[[str], None]
Notify = Callable[[str, str], None]  # (message, level: "info" | "error")


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def _count_files(blocks: List[CommentBlock]) -> int:
    return len({block.file_path for block in blocks})


@dataclass
class WatchSession:
    """
    Владелец CommentWatcher на время сессии агента.

    Хост сообщает о начале и конце работы агента (agent_start / agent_end),
    чтобы правки агента не запускали watcher повторно. Готовое сообщение
    передаётся хосту через deliver.
    """

    notifier: FileNotifier
    deliver: Deliver
    notify: Optional[Notify] = None
    app_settings: Settings = field(default_factory=lambda: settings)
    logger_name: str = field(default="aiwatch.session")

    def __post_init__(self) -> None:
        self.logger = get_logger(self.logger_name)
        self.watcher: Optional[CommentWatcher] = None
        self.cwd: Optional[str] = None

    # --- Host lifecycle -----------------------------------------------------
    def start(self, cwd: Optional[str] = None) -> CommentWatcher:
        if self.watcher is not None:
            self.watcher.close()

        self.cwd = os.path.abspath(cwd or self.app_settings.WATCH_PATH)
        callbacks = WatcherCallbacks(
            on_ai_comment=self._on_ai_comment,
            on_ai_trigger=self._on_ai_trigger,
            on_ready=self._on_ready,
            on_error=self._on_error,
        )
        options = WatcherOptions.from_settings(self.app_settings, cwd=self.cwd)
        self.watcher = CommentWatcher(self.notifier, callbacks, options)
        self.watcher.watch(self.cwd)
        return self.watcher

    def agent_start(self) -> None:
        if self.watcher is not None:
            self.watcher.pause()

    def agent_end(self) -> None:
        if self.watcher is None:
            return
        self.watcher.resume()
        self._notify(f"Watching {self.cwd} for AI comments...", "info")

    def shutdown(self) -> None:
        if self.watcher is not None:
            self.watcher.close()
            self.watcher = None
        self.cwd = None

    # --- Watcher callbacks --------------------------------------------------
    def _on_ai_comment(self, comment: CommentBlock, all_pending: List[CommentBlock]) -> None:
        self._notify(
            f"{_plural(len(all_pending), 'AI comment')} collected from "
            f"{_plural(_count_files(all_pending), 'file')}.",
            "info",
        )

    def _on_ai_trigger(self, comments: List[CommentBlock]) -> None:
        if not comments:
            return

        message = create_ai_message(comments, self.cwd)
        try:
            self.deliver(message)
        except Exception as e:
            self.logger.error(f"❌ Failed to deliver AI message: {e}", exc_info=True)
            self._notify(f"Error sending message: {e}", "error")
            return

        self._notify(
            f"AI! comment found (sending {_plural(len(comments), 'comment')} "
            f"from {_plural(_count_files(comments), 'file')})",
            "info",
        )

    def _on_ready(self) -> None:
        self._notify(f"Watching {self.cwd} for AI comments...", "info")

    def _on_error(self, error: BaseException) -> None:
        self._notify(f"Watcher error: {error}", "error")

    def _notify(self, message: str, level: str) -> None:
        if self.notify is not None:
            self.notify(message, level)
        elif level == "error":
            self.logger.error(message)
        else:
            self.logger.info(message)
