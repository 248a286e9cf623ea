"""Иерархия ошибок конвертации.

Фатальные ошибки (`InputDirectoryMissing`, `OutputDirectoryError`) прерывают
весь запуск. Наследники `TaskError` относятся к одному файлу: пакетный
контроллер их логирует и переходит к следующему файлу.
"""
from __future__ import annotations

from pathlib import Path


class ThumbnailError(Exception):
    """Базовая ошибка приложения."""


class InputDirectoryMissing(ThumbnailError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"Входной каталог не найден: {path}")
        self.path = path


class OutputDirectoryError(ThumbnailError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Не удалось создать выходной каталог {path}: {reason}")
        self.path = path


class TaskError(ThumbnailError):
    """Ошибка обработки одного файла."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


class DecodeError(TaskError):
    pass


class UnsupportedFormatError(TaskError):
    pass


class WriteError(TaskError):
    pass
