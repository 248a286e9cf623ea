from __future__ import annotations

from typing import Optional

from thumbnailer.controllers.batch_controller import BatchController
from thumbnailer.models.config_model import BatchConfig
from thumbnailer.models.result_model import BatchResult
from thumbnailer.services.format_registry import FormatRegistry
from thumbnailer.services.thumbnail_service import ThumbnailService


class ThumbnailerApp:
    def __init__(self, config: BatchConfig, registry: Optional[FormatRegistry] = None) -> None:
        self._config = config
        self._service = ThumbnailService(registry=registry)
        self._controller = BatchController(service=self._service)

    @property
    def config(self) -> BatchConfig:
        return self._config

    def run(self) -> BatchResult:
        return self._controller.run(self._config)

    def cancel(self) -> None:
        self._controller.cancel()
