"""img-meta

Scans a directory of images and reports their display dimensions, capture time and location.
"""

__version__ = "1.0.0"
