"""Загрузка изображений с диска и упаковка метаданных.

Принципы:
- SRP: класс отвечает только за декодирование и базовое извлечение свойств.
- LSP/ISP: возвращает `SourceImage` с предсказуемыми полями; интерфейс узкий и конкретный.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from thumbnailer.models.errors import DecodeError
from thumbnailer.models.image_model import SourceImage

logger = logging.getLogger(__name__)

ALPHA_MODES = frozenset({"RGBA", "LA", "PA", "RGBa", "La"})


def has_alpha(image: Image.Image) -> bool:
    """Есть ли прозрачность: альфа-канал в режиме или `transparency` у палитры."""
    if image.mode in ALPHA_MODES:
        return True
    return "transparency" in image.info


class ImageService:
    def load_image(self, file_path: str | Path) -> SourceImage:
        """Декодирует изображение с диска и возвращает его вместе с метаданными.

        Изображение загружается полностью и отвязывается от файла, режим
        не меняется (в отличие от просмотра, где всё приводится к RGBA).

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `SourceImage` c `PIL.Image.Image`, размерами, режимом, форматом и флагом прозрачности.

        Raises:
            DecodeError: если файл не существует, не читается или не распознан как изображение.
        """
        path = Path(file_path)
        if not path.is_file():
            raise DecodeError(path, f"Файл не найден: {path}")

        try:
            with Image.open(path) as opened:
                opened.load()
                fmt = opened.format
                pil_image = opened.copy()
        except UnidentifiedImageError as exc:
            raise DecodeError(path, f"Файл не является изображением: {path}") from exc
        except Image.DecompressionBombError as exc:
            raise DecodeError(path, f"Изображение слишком большое: {path}") from exc
        except (OSError, EOFError, SyntaxError, ValueError) as exc:
            # повреждённые и обрезанные файлы
            raise DecodeError(path, f"Не удалось прочитать {path}: {exc}") from exc

        width, height = pil_image.size
        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        return SourceImage(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            mode=pil_image.mode,
            format=fmt,
            has_alpha=has_alpha(pil_image),
            size_bytes=size_bytes,
        )
