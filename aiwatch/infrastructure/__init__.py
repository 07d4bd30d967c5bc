"""
Слой инфраструктуры: конкретные реализации доменных протоколов
(уведомитель на базе watchdog).
"""

__all__ = []
