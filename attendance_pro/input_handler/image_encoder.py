"""
Image Encoder Module.

This module turns chat screenshots into the base64 PNG blobs the
extraction gateway expects. Supports any format Pillow can open.

Author: ML Engineering Team
"""

import base64
import binascii
import io
from pathlib import Path
from typing import Iterable, List, Union

from PIL import Image, ImageOps

from config import get_config
from attendance_pro.utils.logger import get_logger
from attendance_pro.utils.exceptions import ImageEncodingError

logger = get_logger(__name__)

ImageSource = Union[str, Path, bytes, Image.Image]


class ImageEncoder:
    """
    Encoder for screenshot images.

    Attributes:
        max_width: Maximum image width in pixels
        max_height: Maximum image height in pixels
        auto_orient: Whether to apply EXIF orientation

    Example:
        >>> encoder = ImageEncoder()
        >>> blob = encoder.encode("whatsapp_screenshot.jpg")
        >>> blobs = encoder.encode_many(["a.png", "b.png"])
    """

    def __init__(self) -> None:
        """Initialize the image encoder with configuration."""
        self.max_width = get_config("input.image.max_width", 2048)
        self.max_height = get_config("input.image.max_height", 2048)
        self.auto_orient = get_config("input.image.auto_orient", True)

        logger.debug(f"ImageEncoder initialized (max_size={self.max_width}x{self.max_height})")

    def encode(self, source: ImageSource) -> str:
        """
        Encode one image as a base64 PNG string.

        Args:
            source: File path, raw bytes, PIL image, data URL or base64 string.

        Returns:
            Base64-encoded PNG without a data-URL prefix.

        Raises:
            ImageEncodingError: If the image cannot be read.
        """
        image = self._load(source)
        image = self._process_image(image)

        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        encoded = base64.b64encode(buffer.getvalue()).decode("ascii")

        logger.debug(f"Encoded image {image.width}x{image.height} ({len(encoded)} base64 chars)")
        return encoded

    def encode_many(self, sources: Iterable[ImageSource]) -> List[str]:
        """Encode several images, preserving their order."""
        return [self.encode(source) for source in sources]

    @staticmethod
    def to_data_url(encoded: str, mime_type: str = "image/png") -> str:
        """Wrap a base64 blob in a data URL for display."""
        return f"data:{mime_type};base64,{encoded}"

    def _load(self, source: ImageSource) -> Image.Image:
        """
        Open an image from any supported source.

        Raises:
            ImageEncodingError: If the source cannot be opened.
        """
        label = self._describe(source)

        try:
            if isinstance(source, Image.Image):
                return source

            if isinstance(source, Path):
                return self._open(source.read_bytes())

            if isinstance(source, bytes):
                return self._open(source)

            if source.startswith("data:"):
                return self._open(base64.b64decode(source.split(",", 1)[1], validate=True))

            if self._is_file(source):
                return self._open(Path(source).read_bytes())

            return self._open(base64.b64decode(source, validate=True))

        except (OSError, ValueError, IndexError, binascii.Error) as e:
            logger.error(f"Failed to load image {label}: {e}")
            raise ImageEncodingError(label, str(e))

    @staticmethod
    def _is_file(source: str) -> bool:
        try:
            return Path(source).is_file()
        except (OSError, ValueError):
            return False

    @staticmethod
    def _open(data: bytes) -> Image.Image:
        image = Image.open(io.BytesIO(data))
        image.load()
        return image

    @staticmethod
    def _describe(source: ImageSource) -> str:
        if isinstance(source, Image.Image):
            return f"<PIL {source.width}x{source.height}>"
        if isinstance(source, bytes):
            return f"<{len(source)} bytes>"
        text = str(source)
        return text if len(text) <= 60 else text[:57] + "..."

    def _process_image(self, image: Image.Image) -> Image.Image:
        """
        Processing steps:
            1. Fix orientation from EXIF
            2. Convert to RGB
            3. Downscale if too large
        """
        if self.auto_orient:
            image = ImageOps.exif_transpose(image)

        image = self._convert_to_rgb(image)
        return self._resize_if_needed(image)

    def _convert_to_rgb(self, image: Image.Image) -> Image.Image:
        """
        Convert image to RGB, flattening transparency onto white.
        """
        if image.mode == 'RGB':
            return image

        original_mode = image.mode
        if image.mode in ('RGBA', 'LA', 'P'):
            image = image.convert('RGBA')
            background = Image.new('RGB', image.size, (255, 255, 255))
            background.paste(image, mask=image.split()[3])
            image = background
        else:
            image = image.convert('RGB')

        logger.debug(f"Converted image from {original_mode} to RGB")
        return image

    def _resize_if_needed(self, image: Image.Image) -> Image.Image:
        """
        Downscale an image that exceeds the maximum dimensions,
        keeping the aspect ratio.
        """
        width, height = image.size
        if width <= self.max_width and height <= self.max_height:
            return image

        ratio = min(self.max_width / width, self.max_height / height)
        new_size = (max(1, int(width * ratio)), max(1, int(height * ratio)))
        image = image.resize(new_size, Image.LANCZOS)

        logger.debug(f"Resized image from {width}x{height} to {new_size[0]}x{new_size[1]}")
        return image
