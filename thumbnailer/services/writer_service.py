"""Кодирование и запись миниатюр на диск.

Запись атомарная: изображение кодируется во временный файл в том же каталоге
и затем переименовывается поверх целевого. При ошибке временный файл удаляется,
так что на диске остаётся либо старый файл, либо полностью записанный новый.
"""
from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from PIL import Image

from thumbnailer.models.errors import WriteError
from thumbnailer.services.format_registry import FormatSpec

logger = logging.getLogger(__name__)


def _current_umask() -> int:
    # umask можно только прочитать, заодно установив новую
    mask = os.umask(0o022)
    os.umask(mask)
    return mask


class WriterService:
    def __init__(self) -> None:
        # права новых файлов как у обычного open(): 0o666 с учётом umask
        self._default_mode = 0o666 & ~_current_umask()

    def _target_mode(self, output_path: Path) -> int:
        """Права существующего файла сохраняются при перезаписи."""
        try:
            return stat.S_IMODE(output_path.stat().st_mode)
        except OSError:
            return self._default_mode

    def write(self, image: Image.Image, output_path: Path, fmt: FormatSpec) -> int:
        """Записывает `image` в `output_path` в формате `fmt`.

        Для форматов с потерями передаются параметры максимального качества,
        для остальных параметры сжатия не передаются вовсе.

        Returns:
            Размер записанного файла в байтах.

        Raises:
            WriteError: если кодирование или запись не удались.
        """
        options = dict(fmt.save_options) if fmt.lossy else {}
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent
            )
        except OSError as exc:
            raise WriteError(output_path, f"Не удалось создать файл в {output_path.parent}: {exc}") from exc
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as fh:
                image.save(fh, format=fmt.name, **options)
            os.chmod(tmp_path, self._target_mode(output_path))
            os.replace(tmp_path, output_path)
        except (OSError, ValueError, KeyError) as exc:
            tmp_path.unlink(missing_ok=True)
            raise WriteError(output_path, f"Не удалось записать {output_path}: {exc}") from exc
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

        size_bytes = output_path.stat().st_size
        logger.debug("Записан %s (%s, %d байт)", output_path, fmt.name, size_bytes)
        return size_bytes
