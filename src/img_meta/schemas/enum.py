from enum import Enum


class ErrorKind(str, Enum):
    ROOT_UNREADABLE = "ROOT_UNREADABLE"
    DECODE_FAILURE = "DECODE_FAILURE"
    MISSING_DIMENSIONS = "MISSING_DIMENSIONS"


class OutputFormat(str, Enum):
    DATA = "data"
    SOURCE = "source"
