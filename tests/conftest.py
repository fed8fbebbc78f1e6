import os
import sys
from typing import Optional

import piexif
import pytest
from PIL import Image

# Add src to sys.path
sys.path.append(os.path.join(os.path.dirname(__file__), "../src"))

PRAGUE_LAT = ((50, 1), (5, 1), (1263, 100))
PRAGUE_LON = ((14, 1), (25, 1), (1512, 100))


def build_exif(
    orientation: Optional[int] = None,
    date_time_original: Optional[bytes] = None,
    subsec: Optional[bytes] = None,
    offset: Optional[bytes] = None,
    latitude=None,
    latitude_ref: bytes = b"N",
    longitude=None,
    longitude_ref: bytes = b"E",
) -> bytes:
    zeroth, exif, gps = {}, {}, {}
    if orientation is not None:
        zeroth[piexif.ImageIFD.Orientation] = orientation
    if date_time_original is not None:
        exif[piexif.ExifIFD.DateTimeOriginal] = date_time_original
    if subsec is not None:
        exif[piexif.ExifIFD.SubSecTimeOriginal] = subsec
    if offset is not None:
        exif[piexif.ExifIFD.OffsetTimeOriginal] = offset
    if latitude is not None:
        gps[piexif.GPSIFD.GPSLatitude] = latitude
        gps[piexif.GPSIFD.GPSLatitudeRef] = latitude_ref
    if longitude is not None:
        gps[piexif.GPSIFD.GPSLongitude] = longitude
        gps[piexif.GPSIFD.GPSLongitudeRef] = longitude_ref
    return piexif.dump({"0th": zeroth, "Exif": exif, "GPS": gps})


@pytest.fixture
def make_image(tmp_path):
    """Writes a small real image below tmp_path. Format follows the file extension."""

    def _make(relpath: str, size=(40, 20), exif: Optional[bytes] = None):
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        img = Image.new("RGB", size, color=(200, 120, 40))
        if exif:
            img.save(path, exif=exif)
        else:
            img.save(path)
        return path

    return _make
