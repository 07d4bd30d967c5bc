"""
Тесты AI Comment Watcher.

=== НАЗНАЧЕНИЕ ===
- test_markers.py — грамматика маркеров
- test_ignore.py — ignore-паттерны относительно корня
- test_grouping.py — группировка строк в блоки
- test_message.py — сообщение для агента
- test_pending.py — накопитель комментариев
- test_watcher.py — машина состояний CommentWatcher (двойник уведомителя)
- test_session.py — связка с хостом агента
- test_settings.py — настройки
- test_logging_config.py — настройка логирования
- test_watchdog_notifier.py — интеграция с watchdog на реальной ФС

=== ЗАПУСК ===

    pip install -e ".[test]"
    pytest tests -v
"""
