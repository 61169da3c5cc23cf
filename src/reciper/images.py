"""Image capture and compression for recipe photos.

The core never touches platform image types. A picker is anything with a
``capture()`` method that hands back encoded bytes, or ``None`` when the
user backed out. Pillow handles the decode and JPEG re-encode.
"""

import io
from pathlib import Path
from typing import Optional, Protocol, Union

from PIL import Image

from .logger import get_logger

logger = get_logger("images")

# Lossy quality factor applied to every attached photo (0.5 on a 0-1 scale).
JPEG_QUALITY = 50


class ImageSource(Protocol):
    """Capability that yields a raw image payload."""

    def capture(self) -> Optional[bytes]:
        """Return encoded image bytes, or None if the user cancelled."""
        ...


class FileImageSource:
    """Image source backed by a file on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def capture(self) -> Optional[bytes]:
        if not self.path.is_file():
            logger.warning(f"No image at {self.path}, treating as cancelled")
            return None
        return self.path.read_bytes()


def _flatten_to_rgb(image: Image.Image) -> Image.Image:
    """Convert to RGB, compositing any transparency onto white."""
    if image.mode == "RGB":
        return image

    if image.mode == "P" and "transparency" in image.info:
        image = image.convert("RGBA")

    if image.mode in ("RGBA", "LA"):
        image = image.convert("RGBA")
        background = Image.new("RGB", image.size, (255, 255, 255))
        background.paste(image, mask=image.split()[-1])
        return background

    return image.convert("RGB")


def compress_image(image: Union[Image.Image, bytes], quality: int = JPEG_QUALITY) -> bytes:
    """Re-encode an image as JPEG at the given quality.

    Args:
        image: A decoded Pillow image or encoded image bytes.
        quality: JPEG quality, 1-95.

    Returns:
        The JPEG payload.

    Raises:
        ValueError: If ``image`` is bytes that Pillow cannot read.
    """
    if isinstance(image, (bytes, bytearray)):
        try:
            image = Image.open(io.BytesIO(image))
            image.load()
        except (OSError, Image.DecompressionBombError) as e:
            raise ValueError(f"Unreadable image data: {e}") from e

    buffer = io.BytesIO()
    _flatten_to_rgb(image).save(buffer, "JPEG", quality=quality, optimize=True)
    return buffer.getvalue()


def decode_image(data: Optional[bytes]) -> Optional[Image.Image]:
    """Decode an image payload, returning None when absent or unreadable."""
    if not data:
        return None

    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (OSError, Image.DecompressionBombError) as e:
        logger.error(f"Failed to decode image payload ({len(data)} bytes): {e}")
        return None
    return image
