"""Таблица форматов: расширение файла -> возможности кодека.

Принципы:
- OCP: новые форматы добавляются записью в таблицу, без правки логики.
- Выбор формата явный; промах даёт `UnsupportedFormatError`, а не молчаливый откат.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

from PIL import Image

from thumbnailer.models.errors import UnsupportedFormatError


@dataclass(frozen=True)
class FormatSpec:
    """Возможности одного формата.

    Fields:
        name: Имя формата в PIL, например "JPEG".
        can_decode: Есть ли декодер.
        can_encode: Есть ли кодировщик.
        lossy: Поддерживает ли формат настраиваемое сжатие с потерями.
        save_options: Параметры `Image.save` для максимального качества.
    """
    name: str
    can_decode: bool = True
    can_encode: bool = True
    lossy: bool = False
    save_options: Mapping[str, Any] = field(default_factory=dict)


JPEG = FormatSpec("JPEG", lossy=True, save_options={"quality": 100, "subsampling": 0})
PNG = FormatSpec("PNG")
GIF = FormatSpec("GIF")
BMP = FormatSpec("BMP")
TIFF = FormatSpec("TIFF")
WEBP = FormatSpec("WEBP", lossy=True, save_options={"quality": 100})

DEFAULT_FORMATS: Dict[str, FormatSpec] = {
    ".jpg": JPEG,
    ".jpeg": JPEG,
    ".jpe": JPEG,
    ".jfif": JPEG,
    ".png": PNG,
    ".gif": GIF,
    ".bmp": BMP,
    ".tif": TIFF,
    ".tiff": TIFF,
    ".webp": WEBP,
}


def normalize_extension(ext: str) -> str:
    ext = ext.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


class FormatRegistry:
    def __init__(
        self,
        formats: Optional[Mapping[str, FormatSpec]] = None,
        available_encoders: Optional[Iterable[str]] = None,
    ) -> None:
        """
        Args:
            formats: Таблица расширение -> `FormatSpec`; по умолчанию `DEFAULT_FORMATS`.
            available_encoders: Имена форматов, для которых есть кодировщик.
                По умолчанию берутся из зарегистрированных в PIL (`Image.SAVE`).
        """
        source = DEFAULT_FORMATS if formats is None else formats
        self._formats = {normalize_extension(ext): spec for ext, spec in source.items()}
        self._encoders = None if available_encoders is None else {e.upper() for e in available_encoders}

    def extensions(self) -> list[str]:
        return sorted(self._formats)

    def lookup(self, ext: str) -> Optional[FormatSpec]:
        return self._formats.get(normalize_extension(ext))

    def resolve(self, path: Path) -> FormatSpec:
        """Возвращает формат, в который можно записать файл `path`.

        Raises:
            UnsupportedFormatError: если расширения нет, оно неизвестно
                или для формата не зарегистрирован кодировщик.
        """
        ext = path.suffix
        if not ext:
            raise UnsupportedFormatError(path, f"У файла нет расширения: {path.name}")
        spec = self.lookup(ext)
        if spec is None:
            raise UnsupportedFormatError(path, f"Неизвестное расширение файла: {ext.lower()}")
        if not spec.can_encode or not self._has_encoder(spec.name):
            raise UnsupportedFormatError(path, f"Нет кодировщика для расширения {ext.lower()} ({spec.name})")
        return spec

    def _has_encoder(self, name: str) -> bool:
        if self._encoders is not None:
            return name.upper() in self._encoders
        # плагины PIL регистрируются лениво
        Image.init()
        return name.upper() in Image.SAVE
