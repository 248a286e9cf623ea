from __future__ import annotations

import logging
import math
from typing import Tuple

import numpy as np
from PIL import Image

from thumbnailer.models.config_model import RGB, TargetSpec

logger = logging.getLogger(__name__)


def compute_target_size(width: int, height: int, target_size: int, allow_upscale: bool = True) -> Tuple[int, int]:
    """
    Размеры миниатюры с сохранением пропорций: большая сторона = target_size,
    меньшая масштабируется и округляется половиной вверх (800x600 -> 150x113).
    Без allow_upscale изображения, уже влезающие в target_size, не меняются.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Некорректный размер изображения: {width}x{height}")
    longest = max(width, height)
    if longest <= target_size and not allow_upscale:
        return width, height
    scale = target_size / longest
    if width >= height:
        return target_size, max(1, math.floor(height * scale + 0.5))
    return max(1, math.floor(width * scale + 0.5)), target_size


class ProcessService:
    # ---------- Вспомогательные функции ----------
    def _prepare_mode(self, image: Image.Image, has_alpha: bool) -> Image.Image:
        """
        Приводит палитровые и 1-битные изображения к режиму, в котором
        работает сглаживающий ресэмплинг (для "P" и "1" PIL берёт ближайшего соседа).
        """
        if has_alpha:
            return image if image.mode == "RGBA" else image.convert("RGBA")
        if image.mode == "P":
            return image.convert("RGB")
        if image.mode == "1":
            return image.convert("L")
        return image

    # ---------- 1) Масштабирование ----------
    def resize(self, image: Image.Image, spec: TargetSpec, has_alpha: bool = False) -> Image.Image:
        """
        Масштабирование Lanczos до размеров из compute_target_size.
        Всегда возвращает новое изображение, исходное не мутирует.
        """
        prepared = self._prepare_mode(image, has_alpha)
        size = compute_target_size(prepared.width, prepared.height, spec.target_size, spec.allow_upscale)
        if size == prepared.size:
            return prepared.copy()
        return prepared.resize(size, Image.LANCZOS)

    # ---------- 2) Удаление альфа-канала ----------
    def flatten_alpha(self, image: Image.Image, background: RGB) -> Image.Image:
        """
        Накладывает изображение на непрозрачный фон background:
        out = rgb * a + bg * (1 - a). Возвращает RGB без альфа-канала.
        """
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        arr = np.asarray(rgba, dtype=np.float32)
        alpha = arr[..., 3:4] / 255.0
        bg = np.asarray(background, dtype=np.float32).reshape(1, 1, 3)
        out = arr[..., :3] * alpha + bg * (1.0 - alpha)
        out = np.clip(np.rint(out), 0, 255).astype(np.uint8)
        return Image.fromarray(out)

    def make_thumbnail(self, image: Image.Image, spec: TargetSpec, has_alpha: bool) -> Image.Image:
        """
        Масштабирование и, при наличии прозрачности, наложение на фон.
        Результат никогда не содержит альфа-канала.
        """
        resized = self.resize(image, spec, has_alpha=has_alpha)
        if has_alpha:
            logger.debug("Есть альфа-канал, накладываем на фон %s", spec.background)
            return self.flatten_alpha(resized, spec.background)
        return resized
