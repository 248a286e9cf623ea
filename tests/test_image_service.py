import pytest
from PIL import Image

from thumbnailer.models.errors import DecodeError
from thumbnailer.services.image_service import ImageService, has_alpha


def test_load_rgba_png(make_image):
    path = make_image("photo.png", mode="RGBA", color=(1, 2, 3, 100))
    source = ImageService().load_image(path)
    assert (source.width, source.height) == (800, 600)
    assert source.mode == "RGBA"
    assert source.format == "PNG"
    assert source.has_alpha
    assert source.size_bytes == path.stat().st_size


def test_load_jpeg_has_no_alpha(make_image):
    source = ImageService().load_image(make_image("icon.jpg", size=(50, 50)))
    assert source.format == "JPEG"
    assert not source.has_alpha


def test_palette_with_transparency_has_alpha(input_dir):
    path = input_dir / "pal.png"
    Image.new("P", (8, 8), 0).save(path, transparency=0)
    assert ImageService().load_image(path).has_alpha


def test_has_alpha_by_mode():
    assert has_alpha(Image.new("LA", (1, 1)))
    assert not has_alpha(Image.new("L", (1, 1)))


def test_corrupt_file_raises_decode_error(corrupt_file):
    with pytest.raises(DecodeError) as excinfo:
        ImageService().load_image(corrupt_file)
    assert excinfo.value.path == corrupt_file


def test_truncated_file_raises_decode_error(make_image):
    path = make_image("cut.png", size=(200, 200))
    data = path.read_bytes()
    path.write_bytes(data[:60])
    with pytest.raises(DecodeError):
        ImageService().load_image(path)


def test_missing_file_raises_decode_error(input_dir):
    with pytest.raises(DecodeError):
        ImageService().load_image(input_dir / "nope.png")
