"""
AI Comment Watcher — следит за деревом исходников и собирает AI-комментарии.

=== НАЗНАЧЕНИЕ ===
1. Получает события об изменении файлов (watchdog)
2. Находит строки с маркером AI / AI: / AI! в комментариях #, //, --
3. Копит комментарии по файлам до появления AI!
4. По AI! отдаёт хосту одно сообщение со всеми накопленными инструкциями

=== ЗАПУСК ===
    aiwatch /path/to/project
    python -m aiwatch
"""

__version__ = "1.0.0"
