from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class MarkerKind(str, Enum):
    """Result of classifying a single line."""

    NONE = "none"
    COMMENT = "comment"
    TRIGGER = "trigger"


@dataclass(slots=True)
class CommentBlock:
    """Группа подряд идущих строк с AI-маркером в одном файле."""

    file_path: str
    start_line: int  # 1-based номер первой строки блока
    raw_lines: List[str] = field(default_factory=list)  # строки как есть, с пробелами и маркером
    has_trigger: bool = False

    @property
    def end_line(self) -> int:
        """Номер последней строки блока."""
        return self.start_line + len(self.raw_lines) - 1

    def numbered_lines(self) -> List[tuple[int, str]]:
        """Пары (абсолютный номер строки, исходный текст)."""
        return [(self.start_line + offset, line) for offset, line in enumerate(self.raw_lines)]
