"""Модели данных для изображений и задач конвертации.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image


@dataclass(frozen=True)
class SourceImage:
    """Неизменяемая модель исходного изображения и его метаданные.

    Fields:
        path: Путь к исходному файлу.
        pil_image: Декодированное изображение PIL (полностью загружено).
        width: Ширина, px.
        height: Высота, px.
        mode: Режим PIL, например "RGBA".
        format: Формат декодера, например "PNG".
        has_alpha: Есть ли у изображения прозрачность.
        size_bytes: Размер файла, если доступен.
    """
    path: Path
    pil_image: Image.Image
    width: int
    height: int
    mode: str
    format: Optional[str]
    has_alpha: bool
    size_bytes: Optional[int]


@dataclass(frozen=True)
class OutputFileInfo:
    """Сведения о записанной миниатюре."""
    source_path: Path
    output_path: Path
    source_width: int
    source_height: int
    width: int
    height: int
    had_alpha: bool
    size_bytes: int

    @property
    def size_kb(self) -> int:
        return self.size_bytes // 1024


@dataclass(frozen=True)
class FileTask:
    """Пара вход/выход для одного файла. Имя выходного файла совпадает с исходным."""
    input_path: Path
    output_path: Path

    @classmethod
    def for_file(cls, input_path: Path, output_dir: Path) -> "FileTask":
        return cls(input_path=input_path, output_path=output_dir / input_path.name)
