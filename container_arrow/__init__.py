"""Экспорт списка контейнеров Docker в поток Arrow IPC."""

__version__ = "1.0.0"
