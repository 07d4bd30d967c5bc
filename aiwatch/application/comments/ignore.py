"""Фильтрация путей по ignore-паттернам (регулярные выражения)."""
from __future__ import annotations

import os
import re
from typing import Iterable, List, Optional, Pattern, Sequence, Union

from aiwatch.settings import DEFAULT_IGNORED_PATTERNS as _DEFAULT_SOURCES

PatternLike = Union[str, Pattern[str]]

DEFAULT_IGNORED_PATTERNS: List[Pattern[str]] = [re.compile(p) for p in _DEFAULT_SOURCES]


def compile_patterns(patterns: Iterable[PatternLike]) -> List[Pattern[str]]:
    """Строки компилируются, готовые паттерны остаются как есть."""
    return [p if isinstance(p, re.Pattern) else re.compile(p) for p in patterns]


def relative_to_root(file_path: str, root: str) -> Optional[str]:
    """Путь относительно root или None, если файл лежит вне root."""
    try:
        relative = os.path.relpath(file_path, root)
    except ValueError:
        return None
    if relative == os.pardir or relative.startswith(os.pardir + os.sep):
        return None
    return relative


def should_ignore_path(
    file_path: str,
    patterns: Sequence[PatternLike],
    root: Optional[str] = None,
) -> bool:
    """
    True если путь совпадает хотя бы с одним паттерном (поиск в любом месте пути).

    С root паттерны видят только часть пути внутри root: проект в ~/build/app
    не попадает под паттерн build.
    """
    if root:
        relative = relative_to_root(file_path, root)
        if relative is not None:
            file_path = relative
    return any(re.search(pattern, file_path) for pattern in patterns)
