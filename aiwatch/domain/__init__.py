"""
Слой домена (Domain Layer).

Чистые функции и контракты без ввода-вывода: грамматика маркеров,
группировка строк в блоки, протокол уведомителя. Домен не знает о
watchdog и файловой системе.
"""

__all__ = []
