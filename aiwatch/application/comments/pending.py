from __future__ import annotations

from typing import Dict, List, Sequence

from aiwatch.domain.comments import CommentBlock


class PendingComments:
    """
    Накопитель AI-комментариев без триггера, по файлам.

    Порядок: файлы в порядке первого появления, внутри файла — порядок блоков.
    Файл без блоков в накопителе не хранится.
    """

    def __init__(self) -> None:
        self._by_file: Dict[str, List[CommentBlock]] = {}

    def replace(self, file_path: str, blocks: Sequence[CommentBlock]) -> List[CommentBlock]:
        """Заменяет блоки файла. Возвращает предыдущие блоки этого файла."""
        previous = self._by_file.get(file_path, [])
        if blocks:
            self._by_file[file_path] = list(blocks)
        else:
            self._by_file.pop(file_path, None)
        return previous

    def get(self, file_path: str) -> List[CommentBlock]:
        return list(self._by_file.get(file_path, []))

    def snapshot(self) -> List[CommentBlock]:
        return [block for blocks in self._by_file.values() for block in blocks]

    def others(self, file_path: str) -> List[CommentBlock]:
        """Все блоки, кроме блоков указанного файла."""
        return [
            block
            for path, blocks in self._by_file.items()
            if path != file_path
            for block in blocks
        ]

    def clear(self) -> None:
        self._by_file.clear()

    def file_count(self) -> int:
        return len(self._by_file)

    def __len__(self) -> int:
        return sum(len(blocks) for blocks in self._by_file.values())

    def __contains__(self, file_path: object) -> bool:
        return file_path in self._by_file
