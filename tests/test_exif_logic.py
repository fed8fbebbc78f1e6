import os
import sys

# Add src to sys.path
sys.path.append(os.path.join(os.path.dirname(__file__), "../src"))

from conftest import PRAGUE_LAT, PRAGUE_LON, build_exif
from img_meta.models.imagemeta import ExifFields, GPSCoordinate
from img_meta.services.exif_parser import PiexifParser


def test_parse_timestamp_and_gps():
    raw = build_exif(
        date_time_original=b"2023:05:01 12:34:56",
        latitude=PRAGUE_LAT,
        longitude=PRAGUE_LON,
    )

    fields = PiexifParser().parse(raw)

    assert fields.captured_at == "2023-05-01T12:34:56.000Z"
    assert fields.latitude == GPSCoordinate(degrees=50.0, minutes=5.0, seconds=12.63, hemisphere_ref="N")
    assert fields.longitude == GPSCoordinate(degrees=14.0, minutes=25.0, seconds=15.12, hemisphere_ref="E")


def test_parse_timestamp_with_offset_and_subseconds():
    raw = build_exif(date_time_original=b"2023:05:01 12:34:56", subsec=b"25", offset=b"+02:00")

    fields = PiexifParser().parse(raw)

    assert fields.captured_at == "2023-05-01T10:34:56.250Z"
    assert fields.latitude is None
    assert fields.longitude is None


def test_parse_southern_western_refs():
    raw = build_exif(latitude=PRAGUE_LAT, latitude_ref=b"S", longitude=PRAGUE_LON, longitude_ref=b"W")

    fields = PiexifParser().parse(raw)

    assert fields.latitude.hemisphere_ref == "S"
    assert fields.longitude.hemisphere_ref == "W"
    assert fields.captured_at is None


def test_parse_garbage_returns_empty_fields():
    assert PiexifParser().parse(b"definitely not exif") == ExifFields()


def test_parse_drops_malformed_subfields():
    raw = build_exif(
        date_time_original=b"not a date",
        latitude=((50, 1), (5, 0), (1263, 100)),  # zero denominator
        longitude=PRAGUE_LON,
    )

    fields = PiexifParser().parse(raw)

    assert fields.captured_at is None
    assert fields.latitude is None
    assert fields.longitude is not None


def test_parse_rejects_mismatched_reference():
    raw = build_exif(latitude=PRAGUE_LAT, latitude_ref=b"E", longitude=PRAGUE_LON)

    assert PiexifParser().parse(raw).latitude is None


def test_parse_timestamp_out_of_range_after_offset():
    late = build_exif(date_time_original=b"9999:12:31 23:30:00", offset=b"-01:00")
    early = build_exif(date_time_original=b"0001:01:01 00:00:00", offset=b"+01:00", latitude=PRAGUE_LAT)

    assert PiexifParser().parse(late).captured_at is None

    fields = PiexifParser().parse(early)
    assert fields.captured_at is None
    assert fields.latitude is not None
