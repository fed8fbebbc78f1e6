from typing import Optional, Tuple


def normalize_orientation(width: int, height: int, orientation: Optional[int] = None) -> Tuple[int, int]:
    """
    Returns the (width, height) of the image as it is displayed.

    EXIF orientation values:
    1 = 0 degrees: the correct orientation, no adjustment is required.
    2 = 0 degrees, mirrored: image has been flipped back-to-front.
    3 = 180 degrees: image is upside down.
    4 = 180 degrees, mirrored: image has been flipped back-to-front and is upside down.
    5 = 90 degrees: image has been flipped back-to-front and is on its side.
    6 = 90 degrees, mirrored: image is on its side.
    7 = 270 degrees: image has been flipped back-to-front and is on its far side.
    8 = 270 degrees, mirrored: image is on its far side.

    Only 5-8 change the bounding box.
    """
    if orientation is not None and orientation >= 5:
        return height, width
    return width, height
