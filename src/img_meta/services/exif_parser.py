import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import piexif

from img_meta.models.imagemeta import ExifFields, GPSCoordinate

logger = logging.getLogger(__name__)


class PiexifParser:
    """
    Reads the capture timestamp and GPS position out of a raw EXIF block.

    Never raises: anything missing or malformed is left as None.
    """

    def parse(self, raw_exif: bytes) -> ExifFields:
        exif = self._load(raw_exif)
        if exif is None:
            return ExifFields()

        gps = exif.get("GPS") or {}
        return ExifFields(
            captured_at=self._parse_datetime_from_exif(exif),
            latitude=self._parse_coordinate(
                gps.get(piexif.GPSIFD.GPSLatitude), gps.get(piexif.GPSIFD.GPSLatitudeRef), ("N", "S")
            ),
            longitude=self._parse_coordinate(
                gps.get(piexif.GPSIFD.GPSLongitude), gps.get(piexif.GPSIFD.GPSLongitudeRef), ("E", "W")
            ),
        )

    def _load(self, raw_exif: bytes) -> Optional[dict]:
        try:
            return piexif.load(raw_exif)
        except Exception as e:
            logger.warning(f"Failed to load EXIF block: {e}")
            return None

    def _rational_to_float(self, value: Any) -> Optional[float]:
        if isinstance(value, (tuple, list)) and len(value) == 2:
            num, den = value
            try:
                if den == 0:
                    return None
                return float(num) / float(den)
            except (ValueError, TypeError):
                return None
        return None

    def _decode_ascii(self, value: Any) -> Optional[str]:
        if isinstance(value, bytes):
            try:
                value = value.decode("ascii")
            except UnicodeDecodeError:
                return None
        if isinstance(value, str):
            return value.strip("\x00 ")
        return None

    def _parse_coordinate(self, dms: Any, ref: Any, allowed_refs) -> Optional[GPSCoordinate]:
        if not isinstance(dms, (tuple, list)) or len(dms) != 3:
            return None
        parts = [self._rational_to_float(x) for x in dms]
        if any(p is None for p in parts):
            logger.debug(f"Ignoring malformed GPS value: {dms!r}")
            return None

        ref_str = self._decode_ascii(ref)
        ref_str = ref_str.upper() if ref_str else None
        if ref_str not in allowed_refs:
            logger.debug(f"Ignoring GPS value with unknown reference: {ref!r}")
            return None

        degrees, minutes, seconds = parts
        return GPSCoordinate(degrees=degrees, minutes=minutes, seconds=seconds, hemisphere_ref=ref_str)

    def _parse_datetime_from_exif(self, exif: dict) -> Optional[str]:
        exif_exif = exif.get("Exif") or {}
        dt_str = self._decode_ascii(exif_exif.get(piexif.ExifIFD.DateTimeOriginal))
        if not dt_str:
            return None

        try:
            base_dt = datetime.strptime(dt_str, "%Y:%m:%d %H:%M:%S")
        except ValueError:
            logger.debug(f"Ignoring malformed DateTimeOriginal: {dt_str!r}")
            return None

        # Milliseconds
        subsec_str = self._decode_ascii(exif_exif.get(piexif.ExifIFD.SubSecTimeOriginal))
        milliseconds = 0
        if subsec_str and subsec_str.isdigit():
            milliseconds = int(subsec_str.ljust(3, "0")[:3])

        # Timezone. Without an offset the wall-clock time is taken as UTC.
        tz = timezone.utc
        offset_str = self._decode_ascii(exif_exif.get(piexif.ExifIFD.OffsetTimeOriginal))
        if offset_str:
            try:
                sign = -1 if offset_str[0] == "-" else 1
                h = int(offset_str[1:3])
                m = int(offset_str[4:6])
                tz = timezone(sign * timedelta(hours=h, minutes=m))
            except (ValueError, IndexError):
                logger.debug(f"Invalid OffsetTimeOriginal format: {offset_str!r}")

        try:
            dt = base_dt.replace(microsecond=milliseconds * 1000, tzinfo=tz).astimezone(timezone.utc)
        except (OverflowError, ValueError):
            logger.debug(f"DateTimeOriginal {dt_str!r} with offset {offset_str!r} is out of range")
            return None
        return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{milliseconds:03d}Z"
