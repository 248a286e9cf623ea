import os
import stat

import pytest
from PIL import Image

from thumbnailer.models.config_model import TargetSpec
from thumbnailer.models.errors import WriteError
from thumbnailer.services.format_registry import JPEG, PNG
from thumbnailer.services.thumbnail_service import ThumbnailService
from thumbnailer.services.writer_service import WriterService


class RecordingImage:
    """Заглушка изображения: запоминает параметры `save`."""

    def __init__(self):
        self.calls = []

    def save(self, fh, format=None, **options):
        self.calls.append((format, options))
        fh.write(b"data")


def test_png_written_without_compression_options(output_dir):
    image = RecordingImage()
    size = WriterService().write(image, output_dir / "a.png", PNG)
    assert image.calls == [("PNG", {})]
    assert size == 4


def test_jpeg_written_with_max_quality(output_dir):
    image = RecordingImage()
    WriterService().write(image, output_dir / "a.jpg", JPEG)
    assert image.calls == [("JPEG", {"quality": 100, "subsampling": 0})]


def test_write_overwrites_existing_file(output_dir):
    target = output_dir / "a.png"
    target.write_bytes(b"old")
    WriterService().write(Image.new("RGB", (10, 10)), target, PNG)
    with Image.open(target) as written:
        assert written.size == (10, 10)


def test_failed_write_leaves_nothing_behind(output_dir):
    target = output_dir / "a.jpg"
    # JPEG не умеет RGBA
    with pytest.raises(WriteError) as excinfo:
        WriterService().write(Image.new("RGBA", (10, 10)), target, JPEG)
    assert excinfo.value.path == target
    assert list(output_dir.iterdir()) == []


def test_failed_write_keeps_previous_output(output_dir):
    target = output_dir / "a.jpg"
    target.write_bytes(b"previous")
    with pytest.raises(WriteError):
        WriterService().write(Image.new("RGBA", (10, 10)), target, JPEG)
    assert target.read_bytes() == b"previous"
    assert list(output_dir.iterdir()) == [target]


def test_missing_output_dir_raises_write_error(tmp_path):
    with pytest.raises(WriteError):
        WriterService().write(Image.new("RGB", (1, 1)), tmp_path / "missing" / "a.png", PNG)


@pytest.fixture
def umask_022():
    previous = os.umask(0o022)
    yield
    os.umask(previous)


def test_new_file_follows_umask(output_dir, umask_022):
    target = output_dir / "a.png"
    WriterService().write(Image.new("RGB", (4, 4)), target, PNG)
    assert stat.S_IMODE(target.stat().st_mode) == 0o644


def test_overwrite_keeps_existing_mode(output_dir, umask_022):
    target = output_dir / "a.png"
    target.write_bytes(b"old")
    os.chmod(target, 0o640)
    WriterService().write(Image.new("RGB", (4, 4)), target, PNG)
    assert stat.S_IMODE(target.stat().st_mode) == 0o640


def test_thumbnail_is_world_readable(make_image, output_dir, umask_022):
    src = make_image("photo.png", size=(300, 200))
    info = ThumbnailService().process(src, output_dir, TargetSpec())
    assert stat.S_IMODE(info.output_path.stat().st_mode) == 0o644
