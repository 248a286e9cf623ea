"""Результаты обработки: по одному файлу и по всему запуску."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from thumbnailer.models.errors import TaskError
from thumbnailer.models.image_model import FileTask, OutputFileInfo


@dataclass(frozen=True)
class TaskResult:
    task: FileTask
    info: Optional[OutputFileInfo] = None
    error: Optional[TaskError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    """Сводка пакетного запуска.

    Ошибки отдельных файлов собираются здесь, а не прерывают запуск.
    """
    results: List[TaskResult] = field(default_factory=list)
    cancelled: bool = False

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> List[TaskResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> List[TaskResult]:
        return [r for r in self.results if not r.ok]

    def summary(self) -> str:
        text = f"Готово: {len(self.succeeded)} из {self.total}, ошибок: {len(self.failed)}"
        if self.cancelled:
            text += " (прервано)"
        return text
