"""
Use-case'ы для AI-комментариев.

=== НАЗНАЧЕНИЕ ===
- CommentWatcher — машина состояний: события уведомителя → колбэки
- PendingComments — накопитель блоков без триггера по файлам
- create_ai_message — сообщение для агента из блоков
- WatchSession — владелец watcher'а на время сессии агента

=== ИСПОЛЬЗОВАНИЕ ===

    from aiwatch.application.comments import CommentWatcher, WatcherCallbacks, create_ai_message
    from aiwatch.infrastructure.notifiers import WatchdogNotifier

    watcher = CommentWatcher(
        WatchdogNotifier(),
        WatcherCallbacks(on_ai_trigger=lambda blocks: print(create_ai_message(blocks))),
    )
    watcher.watch("/path/to/project")
"""

from .ignore import DEFAULT_IGNORED_PATTERNS, compile_patterns, relative_to_root, should_ignore_path
from .message import AI_MESSAGE_PREAMBLE, create_ai_message, get_relative_path
from .pending import PendingComments
from .watcher import (
    CommentWatcher,
    WatcherCallbacks,
    WatcherOptions,
    WatcherState,
    read_text_file,
)
from .session import WatchSession

__all__ = [
    "DEFAULT_IGNORED_PATTERNS",
    "compile_patterns",
    "relative_to_root",
    "should_ignore_path",
    "AI_MESSAGE_PREAMBLE",
    "create_ai_message",
    "get_relative_path",
    "PendingComments",
    "CommentWatcher",
    "WatcherCallbacks",
    "WatcherOptions",
    "WatcherState",
    "read_text_file",
    "WatchSession",
]
