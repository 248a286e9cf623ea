"""Точка входа: разбор аргументов, настройка логирования, запуск пакета."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from thumbnailer.app import ThumbnailerApp
from thumbnailer.models.config_model import (
    DEFAULT_INPUT_DIR,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_TARGET_SIZE,
    DEFAULT_WORKERS,
    BatchConfig,
    TargetSpec,
    parse_color,
)
from thumbnailer.models.errors import InputDirectoryMissing, OutputDirectoryError

logger = logging.getLogger("thumbnailer")

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_INTERRUPTED = 130


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"ожидалось целое число: {value!r}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError(f"ожидалось положительное число: {value}")
    return number


def _color(value: str):
    try:
        return parse_color(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="thumbnailer", description="Пакетное создание миниатюр")
    p.add_argument("-i", "--input", type=Path, default=DEFAULT_INPUT_DIR, help="каталог с исходными изображениями")
    p.add_argument("-o", "--output", type=Path, default=DEFAULT_OUTPUT_DIR, help="каталог для миниатюр")
    p.add_argument("-s", "--size", type=_positive_int, default=DEFAULT_TARGET_SIZE, help="размер большей стороны, px")
    p.add_argument("--no-upscale", action="store_true", help="не увеличивать изображения меньше --size")
    p.add_argument("--background", type=_color, default=None, help="цвет фона для прозрачных пикселей: #RRGGBB или R,G,B")
    p.add_argument("-j", "--workers", type=_positive_int, default=DEFAULT_WORKERS, help="число потоков")
    p.add_argument("-v", "--verbose", action="store_true", help="подробный лог")
    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> BatchConfig:
    spec_kwargs = {"target_size": args.size, "allow_upscale": not args.no_upscale}
    if args.background is not None:
        spec_kwargs["background"] = args.background
    return BatchConfig(
        input_dir=args.input,
        output_dir=args.output,
        spec=TargetSpec(**spec_kwargs),
        workers=args.workers,
    )


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Запускает пакетную обработку и возвращает код выхода.

    0 — пакет обработан (ошибки отдельных файлов только в логе),
    1 — нет входного каталога или не создать выходной,
    130 — прервано пользователем.
    """
    args = parse_args(argv)
    configure_logging(args.verbose)
    app = ThumbnailerApp(build_config(args))
    try:
        app.run()
    except (InputDirectoryMissing, OutputDirectoryError) as exc:
        logger.error("%s", exc)
        return EXIT_FATAL
    except KeyboardInterrupt:
        app.cancel()
        logger.warning("Прервано пользователем")
        return EXIT_INTERRUPTED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
