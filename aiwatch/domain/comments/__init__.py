"""
Доменные объекты AI-комментариев.

=== НАЗНАЧЕНИЕ ===
- CommentBlock — группа подряд идущих строк с AI-маркером
- MarkerKind — результат классификации строки (none / comment / trigger)
- classify_line / parse_ai_comment — грамматика маркеров
- parse_comments_in_file — разбиение файла на блоки
- FileNotifier / NotifierSubscription — контракт уведомителя об изменениях

=== ИСПОЛЬЗОВАНИЕ ===

    from aiwatch.domain.comments import parse_comments_in_file

    blocks = parse_comments_in_file("b.py", "# step one AI\\n# step two AI!\\nprint(1)")
    blocks[0].start_line   # 1
    blocks[0].has_trigger  # True
"""

from .models import CommentBlock, MarkerKind
from .markers import classify_line, parse_ai_comment
from .grouping import (
    parse_comments_in_file,
    has_trigger_comment,
    filter_trigger_comments,
    get_comment_key,
)
from .notifier import (
    FileNotifier,
    Listener,
    NotifierEvent,
    NotifierOptions,
    NotifierSubscription,
)

__all__ = [
    "CommentBlock",
    "MarkerKind",
    "classify_line",
    "parse_ai_comment",
    "parse_comments_in_file",
    "has_trigger_comment",
    "filter_trigger_comments",
    "get_comment_key",
    "FileNotifier",
    "Listener",
    "NotifierEvent",
    "NotifierOptions",
    "NotifierSubscription",
]
