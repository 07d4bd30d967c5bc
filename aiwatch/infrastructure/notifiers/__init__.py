"""Реализации уведомителя об изменениях файлов."""

from .watchdog_notifier import WatchdogNotifier, WatchdogSubscription

__all__ = ["WatchdogNotifier", "WatchdogSubscription"]
