"""
Сборка сообщения для агента из накопленных AI-комментариев.

Формат:

    <преамбула с правилами>

    src/file.ext:
    12: # Here's something to do, AI
    45: # Another thing here
    46: # Now with multiple lines, AI

Файлы идут в порядке поступления, блоки одного файла собираются под одним
заголовком.
"""
from __future__ import annotations

import os
from typing import Dict, List, Optional, Sequence

from aiwatch.domain.comments import CommentBlock

AI_MESSAGE_PREAMBLE = (
    "The AI comments below can be found in the code files.\n"
    "They contain your instructions.\n"
    "Line numbers are provided for reference.\n"
    "Rules:\n"
    "- Only make changes to files and lines that have AI comments.\n"
    "- Do not modify any other files or areas of files.\n"
    "- Follow the instructions in the AI comments strictly.\n"
    "- Be sure to remove all AI comments from the code during or after the changes.\n"
    '- After changes are finished say just "Done" and nothing else.\n'
)


def get_relative_path(file_path: str, base_dir: Optional[str] = None) -> str:
    """
    Путь файла относительно base_dir.

    Пустой base_dir означает текущую директорию. Если относительного пути
    нет (другой диск на Windows), возвращается исходный путь.
    """
    try:
        return os.path.relpath(file_path, base_dir or os.curdir)
    except ValueError:
        return file_path


def create_ai_message(blocks: Sequence[CommentBlock], base_dir: Optional[str] = None) -> str:
    """Собирает сообщение для агента. Пустой список — пустая строка."""
    if not blocks:
        return ""

    by_file: Dict[str, List[CommentBlock]] = {}
    for block in blocks:
        by_file.setdefault(block.file_path, []).append(block)

    parts = [AI_MESSAGE_PREAMBLE]
    for file_path, file_blocks in by_file.items():
        parts.append(f"{get_relative_path(file_path, base_dir)}:")
        for block in file_blocks:
            for line_number, line in block.numbered_lines():
                parts.append(f"{line_number}: {line}")
        parts.append("")

    return "\n".join(parts).strip()
