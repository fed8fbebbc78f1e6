import os
import sys

import pytest

# Add src to sys.path
sys.path.append(os.path.join(os.path.dirname(__file__), "../src"))

from img_meta.models.imagemeta import GPSCoordinate
from img_meta.utils.gps import build_map_link, to_decimal_degrees

LATITUDE = GPSCoordinate(degrees=50, minutes=5, seconds=12.63, hemisphere_ref="N")
LONGITUDE = GPSCoordinate(degrees=14, minutes=25, seconds=15.12, hemisphere_ref="E")


def test_to_decimal_degrees():
    assert to_decimal_degrees(LATITUDE) == "50.0868417"
    assert to_decimal_degrees(GPSCoordinate(50, 5, 12.63, "S")) == "-50.0868417"


@pytest.mark.parametrize("ref, expected", [("E", "14.4208667"), ("W", "-14.4208667")])
def test_to_decimal_degrees_longitude(ref, expected):
    assert to_decimal_degrees(GPSCoordinate(14, 25, 15.12, ref)) == expected


def test_to_decimal_degrees_never_negative_zero():
    assert to_decimal_degrees(GPSCoordinate(0, 0, 0, "S")) == "0.0000000"


def test_build_map_link():
    assert build_map_link(LATITUDE, LONGITUDE) == (
        "https://www.google.com/maps/search/?api=1&query=50.0868417,14.4208667"
    )

    # Negative result from "S" / "W" references
    south = GPSCoordinate(50, 5, 12.63, "S")
    west = GPSCoordinate(14, 25, 15.12, "W")
    assert build_map_link(south, west) == (
        "https://www.google.com/maps/search/?api=1&query=-50.0868417,-14.4208667"
    )


def test_to_decimal_degrees_rounds_ties_away_from_zero():
    # 14.0625" is exactly 0.00390625 degrees
    assert to_decimal_degrees(GPSCoordinate(50, 0, 14.0625, "N")) == "50.0039063"
    assert to_decimal_degrees(GPSCoordinate(50, 0, 14.0625, "S")) == "-50.0039063"


def test_to_decimal_degrees_keeps_sign_of_tiny_negative():
    assert to_decimal_degrees(GPSCoordinate(0, 0, 0.0000036, "W")) == "-0.0000000"
