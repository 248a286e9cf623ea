"""Конфигурация запуска: целевой размер, политика увеличения, цвет фона."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

RGB = Tuple[int, int, int]

DEFAULT_INPUT_DIR = Path("originals")
DEFAULT_OUTPUT_DIR = Path("output")
DEFAULT_TARGET_SIZE = 150
# Цвет подложки при удалении альфа-канала: непрозрачный чёрный
DEFAULT_BACKGROUND: RGB = (0, 0, 0)
DEFAULT_WORKERS = 1


@dataclass(frozen=True)
class TargetSpec:
    """Параметры миниатюры.

    Fields:
        target_size: Размер большей стороны результата, px.
        allow_upscale: Увеличивать ли изображения меньше `target_size`.
        background: Цвет (r, g, b), на который накладываются прозрачные пиксели.
    """
    target_size: int = DEFAULT_TARGET_SIZE
    allow_upscale: bool = True
    background: RGB = DEFAULT_BACKGROUND

    def __post_init__(self) -> None:
        if isinstance(self.target_size, bool) or not isinstance(self.target_size, int) or self.target_size <= 0:
            raise ValueError(f"target_size должен быть положительным целым, получено: {self.target_size!r}")
        if len(self.background) != 3 or any(not 0 <= int(c) <= 255 for c in self.background):
            raise ValueError(f"background должен быть тройкой 0..255, получено: {self.background!r}")


@dataclass(frozen=True)
class BatchConfig:
    input_dir: Path = DEFAULT_INPUT_DIR
    output_dir: Path = DEFAULT_OUTPUT_DIR
    spec: TargetSpec = field(default_factory=TargetSpec)
    workers: int = DEFAULT_WORKERS

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise ValueError(f"workers должен быть >= 1, получено: {self.workers}")


def parse_color(value: str) -> RGB:
    """Разбирает цвет в виде `#RRGGBB` или `R,G,B`.

    Raises:
        ValueError: если строка не распознана или компоненты вне 0..255.
    """
    text = value.strip()
    if text.startswith("#"):
        hex_part = text[1:]
        if len(hex_part) != 6:
            raise ValueError(f"Ожидался цвет вида #RRGGBB: {value!r}")
        rgb = tuple(int(hex_part[i:i + 2], 16) for i in (0, 2, 4))
    else:
        parts = [p.strip() for p in text.split(",")]
        if len(parts) != 3:
            raise ValueError(f"Ожидался цвет вида R,G,B: {value!r}")
        rgb = tuple(int(p) for p in parts)
    if any(not 0 <= c <= 255 for c in rgb):
        raise ValueError(f"Компоненты цвета должны быть в диапазоне 0..255: {value!r}")
    return rgb  # type: ignore[return-value]
