import asyncio
import logging
from typing import Optional

from img_meta.core.errors import DecodeError, ExtractionError
from img_meta.models.imagemeta import ExifFields, ImageMetadata
from img_meta.schemas.enum import ErrorKind
from img_meta.services.decoder import PillowDecoder
from img_meta.services.exif_parser import PiexifParser
from img_meta.utils.gps import build_map_link
from img_meta.utils.image import normalize_orientation

logger = logging.getLogger(__name__)


class MetadataExtractor:
    def __init__(self, decoder=None, exif_parser=None):
        self.decoder = decoder or PillowDecoder()
        self.exif_parser = exif_parser or PiexifParser()

    async def extract(self, file_path: str) -> ImageMetadata:
        """Extracts display dimensions, capture time and map link for one image file."""
        # 1. Decode header. Decoder errors don't say which file they came from.
        try:
            info = await self.decoder.decode(file_path)
        except (DecodeError, OSError) as e:
            logger.error(f"Unexpected error while processing image file {file_path}: {e}")
            raise ExtractionError(ErrorKind.DECODE_FAILURE, file_path, cause=e) from e

        # 2. Dimensions are mandatory
        if not info.raw_width or not info.raw_height:
            logger.error(f"Could not determine dimensions of image file {file_path}")
            raise ExtractionError(ErrorKind.MISSING_DIMENSIONS, file_path)

        # 3. Account for image rotation
        width, height = normalize_orientation(info.raw_width, info.raw_height, info.orientation)

        # 4. Optional EXIF fields
        exif = await self._parse_exif(file_path, info.raw_exif)

        # 5. GPS -> map link
        map_link = None
        if exif.latitude is not None and exif.longitude is not None:
            map_link = build_map_link(exif.latitude, exif.longitude)

        return ImageMetadata(
            width=width,
            height=height,
            captured_at=exif.captured_at,
            map_link=map_link,
        )

    async def _parse_exif(self, file_path: str, raw_exif: Optional[bytes]) -> ExifFields:
        if not raw_exif:
            return ExifFields()
        fields = await asyncio.to_thread(self.exif_parser.parse, raw_exif)
        logger.debug(
            f"EXIF for {file_path}: captured_at={fields.captured_at}, "
            f"gps={'yes' if fields.latitude and fields.longitude else 'no'}"
        )
        return fields
