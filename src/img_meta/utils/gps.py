from decimal import ROUND_HALF_UP, Decimal

from img_meta.models.imagemeta import GPSCoordinate

GOOGLE_MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query={lat},{lon}"
SEVEN_PLACES = Decimal("1e-7")


def to_decimal_degrees(coord: GPSCoordinate) -> str:
    """
    Convert DMS (Degrees Minutes Seconds) to DD (Decimal Degrees),
    formatted to 7 decimal places with ties rounded away from zero.
    """
    dd = coord.degrees + coord.minutes / 60 + coord.seconds / (60 * 60)

    if coord.hemisphere_ref in ("S", "W"):
        dd = -dd

    # -0.0 -> 0.0
    if dd == 0:
        dd = 0.0

    return format(Decimal(dd).quantize(SEVEN_PLACES, rounding=ROUND_HALF_UP), "f")


def build_map_link(latitude: GPSCoordinate, longitude: GPSCoordinate) -> str:
    """Creates a Google Maps search URL from a latitude/longitude pair."""
    return GOOGLE_MAPS_SEARCH_URL.format(
        lat=to_decimal_degrees(latitude),
        lon=to_decimal_degrees(longitude),
    )
