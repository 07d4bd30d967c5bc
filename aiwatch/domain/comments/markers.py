"""
Грамматика AI-маркеров в комментариях.

=== ФОРМАТ ===
Стили комментариев: #, //, --
Позиция маркера: в начале ИЛИ в конце комментария
Регистр не важен: ai, AI, Ai
Варианты: AI! (триггер), AI:, AI

    // AI! Add error handling
    // Add error handling AI!
    # ai refactor to be cleaner
    -- make this faster AI!

Маркер в середине предложения не считается: "// please ai! do it" — обычный комментарий.
"""

import re
from typing import Optional

from .models import MarkerKind

# Маркер в конце: "// do this ai!", "# implement this AI!", "// text AI:"
_TRAILING_MARKER = re.compile(
    r"^(?:#|//|--)\s*(?P<text>.+?)\s*\b(?P<marker>ai!?)[\s:.,;!?]*$",
    re.IGNORECASE,
)

# Маркер в начале: "// ai! do this", "# AI implement this", "// AI: do this"
_LEADING_MARKER = re.compile(
    r"^(?:#|//|--)\s*(?P<marker>ai!|ai\b)[\s:]*(?P<text>.+)$",
    re.IGNORECASE,
)

COMMENT_PATTERNS = (_TRAILING_MARKER, _LEADING_MARKER)


def classify_line(line: str) -> MarkerKind:
    """Классифицирует строку: не маркер / маркер / маркер-триггер."""
    trimmed = line.strip()

    matched = False
    trigger = False
    for pattern in COMMENT_PATTERNS:
        match = pattern.match(trimmed)
        if match is None:
            continue
        matched = True
        # "#AI!" без текста: "!" остаётся сразу за маркером
        if match.group("marker").endswith("!") or trimmed[match.end("marker"):].startswith("!"):
            trigger = True

    if not matched:
        return MarkerKind.NONE
    return MarkerKind.TRIGGER if trigger else MarkerKind.COMMENT


def parse_ai_comment(line: str) -> Optional[bool]:
    """None если строка не AI-комментарий, иначе флаг триггера."""
    kind = classify_line(line)
    if kind is MarkerKind.NONE:
        return None
    return kind is MarkerKind.TRIGGER
