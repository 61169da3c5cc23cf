import io

import pytest
from PIL import Image

from reciper.images import FileImageSource, ImageSource, compress_image, decode_image

from .conftest import make_oversized_png, make_png


def test_file_source_reads_bytes(tmp_path, png_bytes: bytes) -> None:
    path = tmp_path / "photo.png"
    path.write_bytes(png_bytes)
    source = FileImageSource(path)
    assert isinstance(source, FileImageSource)
    assert source.capture() == png_bytes


def test_file_source_missing_is_cancel(tmp_path, log_messages: list[str]) -> None:
    assert FileImageSource(tmp_path / "nope.jpg").capture() is None
    assert any("treating as cancelled" in message for message in log_messages)


def test_protocol_accepts_any_capture_callable() -> None:
    class Cancelled:
        def capture(self):
            return None

    source: ImageSource = Cancelled()
    assert source.capture() is None


def test_compress_flattens_transparency_onto_white() -> None:
    transparent = make_png(size=(8, 8), color=(0, 0, 0, 0))
    image = Image.open(io.BytesIO(compress_image(transparent)))
    assert image.mode == "RGB"
    r, g, b = image.getpixel((4, 4))
    assert min(r, g, b) > 240


def test_lower_quality_means_smaller_payload() -> None:
    noisy = Image.effect_noise((64, 64), 80).convert("RGB")
    assert len(compress_image(noisy, quality=10)) < len(compress_image(noisy, quality=95))


def test_compress_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        compress_image(b"definitely not an image")


def test_decode_image() -> None:
    assert decode_image(None) is None
    assert decode_image(b"") is None
    assert decode_image(compress_image(make_png())).size == (32, 24)


def test_oversized_image_is_not_decoded(log_messages: list[str]) -> None:
    assert decode_image(make_oversized_png()) is None
    assert any("Failed to decode image" in message for message in log_messages)


def test_compress_rejects_oversized_image() -> None:
    with pytest.raises(ValueError):
        compress_image(make_oversized_png())
