"""
Error types raised while building a metadata report.
"""
from typing import Optional

from img_meta.schemas.enum import ErrorKind


class DecodeError(Exception):
    """Generic decoder failure. Carries no file context of its own."""
    pass


class ExtractionError(Exception):
    """A fatal error for the whole batch, always attributed to a path."""

    def __init__(self, kind: ErrorKind, file_path: str, cause: Optional[BaseException] = None):
        self.kind = kind
        self.file_path = str(file_path)
        self.cause = cause
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        if self.kind == ErrorKind.ROOT_UNREADABLE:
            msg = f"Could not read directory {self.file_path}"
        elif self.kind == ErrorKind.MISSING_DIMENSIONS:
            msg = f"Could not determine width and height of image {self.file_path}"
        else:
            msg = f"Could not decode image file {self.file_path}"
        if self.cause is not None:
            msg += f": {self.cause}"
        return msg
