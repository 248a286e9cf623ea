"""Конвейер одной миниатюры: формат -> декодирование -> масштаб -> фон -> запись.

Принципы:
- SRP: оркестрирует сервисы, сам пикселей не трогает.
- DIP: сервисы передаются в конструктор, по умолчанию создаются стандартные.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from thumbnailer.models.config_model import TargetSpec
from thumbnailer.models.image_model import OutputFileInfo
from thumbnailer.services.format_registry import FormatRegistry
from thumbnailer.services.image_service import ImageService
from thumbnailer.services.process_service import ProcessService
from thumbnailer.services.writer_service import WriterService

logger = logging.getLogger(__name__)


class ThumbnailService:
    def __init__(
        self,
        registry: Optional[FormatRegistry] = None,
        image_service: Optional[ImageService] = None,
        process_service: Optional[ProcessService] = None,
        writer_service: Optional[WriterService] = None,
    ) -> None:
        self._registry = registry or FormatRegistry()
        self._image_service = image_service or ImageService()
        self._process_service = process_service or ProcessService()
        self._writer_service = writer_service or WriterService()

    def process(self, input_path: Path, output_dir: Path, spec: TargetSpec) -> OutputFileInfo:
        """Создаёт миниатюру `output_dir / input_path.name`.

        Args:
            input_path: Исходный файл изображения.
            output_dir: Существующий каталог для результата.
            spec: Целевой размер, политика увеличения и цвет фона.

        Returns:
            `OutputFileInfo` с размерами исходника и результата.

        Raises:
            UnsupportedFormatError: нет кодировщика для расширения выходного файла.
            DecodeError: исходный файл не читается или не является изображением.
            WriteError: не удалось закодировать или записать результат.
        """
        input_path = Path(input_path)
        output_path = Path(output_dir) / input_path.name
        logger.info("Обработка %s", input_path)

        # формат проверяем до декодирования, чтобы не тратить время впустую
        fmt = self._registry.resolve(output_path)
        source = self._image_service.load_image(input_path)
        thumbnail = self._process_service.make_thumbnail(source.pil_image, spec, source.has_alpha)
        size_bytes = self._writer_service.write(thumbnail, output_path, fmt)

        info = OutputFileInfo(
            source_path=input_path,
            output_path=output_path,
            source_width=source.width,
            source_height=source.height,
            width=thumbnail.width,
            height=thumbnail.height,
            had_alpha=source.has_alpha,
            size_bytes=size_bytes,
        )
        logger.info(
            "%s: %dx%d -> %dx%d, %s, %d KB",
            input_path.name,
            info.source_width,
            info.source_height,
            info.width,
            info.height,
            output_path,
            info.size_kb,
        )
        return info
