"""Контроллер пакетной обработки: обход каталога и запуск конвейера.

SOLID:
- SRP: класс управляет очередью задач и сводкой, без логики обработки изображений.
- DIP: зависит от `ThumbnailService` как от роли; реализация передаётся снаружи.
Clean Code:
- Ошибка одного файла не прерывает пакет; фатальны только проблемы с каталогами.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Iterator, List, Optional, Set

from thumbnailer.models.config_model import BatchConfig, TargetSpec
from thumbnailer.models.errors import InputDirectoryMissing, OutputDirectoryError, TaskError
from thumbnailer.models.image_model import FileTask
from thumbnailer.models.result_model import BatchResult, TaskResult
from thumbnailer.services.thumbnail_service import ThumbnailService

logger = logging.getLogger(__name__)


def _is_partial_write(path: Path) -> bool:
    """Временный файл `WriterService` (`.<имя>.<случайное>.tmp`), если выход пишется во входной каталог."""
    return path.name.startswith(".") and path.name.endswith(".tmp")


def iter_source_files(input_dir: Path) -> Iterator[Path]:
    """Обычные файлы непосредственно в `input_dir`, по имени.

    Подкаталоги пропускаются, как и незавершённые временные файлы записи.

    Raises:
        InputDirectoryMissing: если каталога нет или это не каталог.
    """
    input_dir = Path(input_dir)
    if not input_dir.is_dir():
        raise InputDirectoryMissing(input_dir)
    try:
        entries = sorted(input_dir.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise InputDirectoryMissing(input_dir) from exc
    # проверки выше выполняются сразу, файлы отдаются лениво
    return _iter_entries(entries)


def _iter_entries(entries: List[Path]) -> Iterator[Path]:
    for entry in entries:
        if not entry.is_file():
            continue
        if _is_partial_write(entry):
            logger.debug("Пропуск временного файла %s", entry)
            continue
        yield entry


class BatchController:
    """Запускает конвейер для каждого файла входного каталога.

    Ответственности:
    - Подготовка выходного каталога.
    - Последовательный или параллельный (пул потоков) запуск задач.
    - Перехват ошибок отдельных файлов и сборка `BatchResult`.
    - Остановка по `cancel()`: новые задачи не запускаются, начатые дописываются.
    """

    def __init__(self, service: Optional[ThumbnailService] = None) -> None:
        self._service = service or ThumbnailService()
        self._cancel_event = threading.Event()

    def cancel(self) -> None:
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def run(self, config: BatchConfig) -> BatchResult:
        """Обрабатывает все файлы `config.input_dir` и возвращает сводку.

        Raises:
            InputDirectoryMissing: входного каталога нет.
            OutputDirectoryError: выходной каталог не удалось создать.
        """
        sources = iter_source_files(config.input_dir)
        self._ensure_output_dir(config.output_dir)

        tasks = (FileTask.for_file(path, Path(config.output_dir)) for path in sources)
        if config.workers > 1:
            result = self._run_parallel(tasks, config.spec, config.workers)
        else:
            result = self._run_sequential(tasks, config.spec)
        self._report(result)
        return result

    # ---- Helpers ----
    def _ensure_output_dir(self, output_dir: Path) -> None:
        try:
            Path(output_dir).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputDirectoryError(Path(output_dir), str(exc)) from exc

    def _run_task(self, task: FileTask, spec: TargetSpec) -> TaskResult:
        try:
            info = self._service.process(task.input_path, task.output_path.parent, spec)
        except TaskError as exc:
            logger.warning("Пропуск %s: %s", task.input_path, exc)
            return TaskResult(task=task, error=exc)
        return TaskResult(task=task, info=info)

    def _run_sequential(self, tasks: Iterator[FileTask], spec: TargetSpec) -> BatchResult:
        result = BatchResult()
        for task in tasks:
            if self.cancelled:
                result.cancelled = True
                break
            result.results.append(self._run_task(task, spec))
        return result

    def _run_parallel(self, tasks: Iterator[FileTask], spec: TargetSpec, workers: int) -> BatchResult:
        """
        В работе не больше `workers` задач: новая отправляется только после
        завершения одной из текущих, поэтому `cancel()` и Ctrl-C останавливают
        запуск оставшихся файлов.
        """
        result = BatchResult()
        results: List[TaskResult] = []
        pending: Set[Future] = set()
        pool = ThreadPoolExecutor(max_workers=workers)
        try:
            for task in tasks:
                while len(pending) >= workers:
                    done, pending = wait(pending, return_when=FIRST_COMPLETED)
                    results.extend(future.result() for future in done)
                if self.cancelled:
                    break
                pending.add(pool.submit(self._run_task, task, spec))
            done, pending = wait(pending)
            results.extend(future.result() for future in done)
        except BaseException:
            self.cancel()
            raise
        finally:
            pool.shutdown(wait=True, cancel_futures=True)
        # порядок как при последовательном запуске
        results.sort(key=lambda r: r.task.input_path.name)
        result.results.extend(results)
        result.cancelled = self.cancelled
        return result

    def _report(self, result: BatchResult) -> None:
        logger.info(result.summary())
        for failed in result.failed:
            logger.warning("  %s: %s", failed.task.input_path.name, failed.error)
