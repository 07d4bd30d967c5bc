"""
Слой приложения (Application Layer): накопление комментариев, машина
состояний watcher'а, сборка сообщения и координатор сессии.
"""

__all__ = []
