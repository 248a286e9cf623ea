from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from PIL import Image


@pytest.fixture
def input_dir(tmp_path: Path) -> Path:
    path = tmp_path / "originals"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "output"
    path.mkdir()
    return path


@pytest.fixture
def make_image(input_dir: Path) -> Callable[..., Path]:
    """Создаёт изображение в `input_dir` и возвращает путь к нему."""

    def _make(name: str, size=(800, 600), mode: str = "RGB", color=(200, 40, 40), **save_kwargs) -> Path:
        path = input_dir / name
        Image.new(mode, size, color).save(path, **save_kwargs)
        return path

    return _make


@pytest.fixture
def corrupt_file(input_dir: Path) -> Path:
    path = input_dir / "broken.png"
    path.write_bytes(b"definitely not an image")
    return path
