import asyncio
import logging
from typing import Optional

import piexif
from PIL import Image, UnidentifiedImageError

from img_meta.core.errors import DecodeError
from img_meta.models.imagemeta import DecodedImageInfo

logger = logging.getLogger(__name__)


class PillowDecoder:
    """Reads image headers with Pillow. Never loads pixel data."""

    async def decode(self, file_path: str) -> DecodedImageInfo:
        return await asyncio.to_thread(self.decode_path, file_path)

    def decode_path(self, file_path: str) -> DecodedImageInfo:
        # Pillow reads lazily from the open file, so only the header is pulled in.
        try:
            with Image.open(file_path) as img:
                width, height = img.size
                orientation = self._get_orientation(img)
                raw_exif = img.info.get("exif")
        except (UnidentifiedImageError, OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
            raise DecodeError(str(e) or e.__class__.__name__) from e

        return DecodedImageInfo(
            raw_width=width or None,
            raw_height=height or None,
            orientation=orientation,
            raw_exif=raw_exif or None,
        )

    def _get_orientation(self, img: Image.Image) -> Optional[int]:
        try:
            value = img.getexif().get(piexif.ImageIFD.Orientation)
        except Exception as e:
            logger.warning(f"Failed to read EXIF orientation: {e}")
            return None
        if isinstance(value, int) and 1 <= value <= 8:
            return value
        return None
