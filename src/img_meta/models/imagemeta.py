from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class GPSCoordinate:
    degrees: float
    minutes: float
    seconds: float
    hemisphere_ref: str  # N, S, E or W


@dataclass(frozen=True)
class ImageMetadata:
    width: int
    height: int
    captured_at: Optional[str] = None  # ISO-8601, UTC
    map_link: Optional[str] = None


@dataclass
class DecodedImageInfo:
    raw_width: Optional[int] = None
    raw_height: Optional[int] = None
    orientation: Optional[int] = None  # EXIF orientation, 1-8
    raw_exif: Optional[bytes] = None


@dataclass
class ExifFields:
    captured_at: Optional[str] = None
    latitude: Optional[GPSCoordinate] = None
    longitude: Optional[GPSCoordinate] = None


# Root-relative "/a/b.jpg" -> metadata, in sorted file order
AggregateReport = Dict[str, ImageMetadata]
