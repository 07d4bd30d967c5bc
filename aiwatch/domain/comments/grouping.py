from __future__ import annotations

import hashlib
from typing import Iterable, List

from .markers import classify_line
from .models import CommentBlock, MarkerKind


def parse_comments_in_file(file_path: str, content: str) -> List[CommentBlock]:
    """
    Находит AI-комментарии в содержимом файла.

    Подряд идущие строки с маркером собираются в один блок. Любая строка
    без маркера закрывает текущий блок, конец файла тоже.

    Args:
        file_path: Путь файла (только для пометки блоков)
        content: Полный текст файла

    Returns:
        Блоки в порядке появления в файле
    """
    blocks: List[CommentBlock] = []
    current: CommentBlock | None = None

    for index, line in enumerate(content.split("\n"), start=1):
        kind = classify_line(line)

        if kind is MarkerKind.NONE:
            if current is not None:
                blocks.append(current)
                current = None
            continue

        if current is None:
            current = CommentBlock(file_path=file_path, start_line=index)
        current.raw_lines.append(line)
        if kind is MarkerKind.TRIGGER:
            current.has_trigger = True

    if current is not None:
        blocks.append(current)

    return blocks


def has_trigger_comment(blocks: Iterable[CommentBlock]) -> bool:
    return any(block.has_trigger for block in blocks)


def filter_trigger_comments(blocks: Iterable[CommentBlock]) -> List[CommentBlock]:
    return [block for block in blocks if block.has_trigger]


def get_comment_key(block: CommentBlock) -> str:
    """Ключ блока: путь, первая строка и md5 от текста."""
    digest = hashlib.md5("\n".join(block.raw_lines).encode("utf-8")).hexdigest()
    return f"{block.file_path}:{block.start_line}:{digest}"
