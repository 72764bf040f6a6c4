"""Fixed set of error kinds used to label workflow faults."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType


class ErrorKind(str, Enum):
    """What caused a fault. Presentation is decided separately by ``is_safe``."""

    INVALID_ARGUMENT = "InvalidArgument"
    INVALID_SETTING = "InvalidSetting"
    INVALID_PYTHON = "InvalidPython"
    INVALID_FILE_PATH = "InvalidFilePath"
    INVALID_API_RESPONSE = "InvalidAPIResponse"
    PARSER_ERROR = "ParserError"
    TODOIST_API_ERROR = "TodoistAPIError"
    EXTERNAL = "External"

    @property
    def label(self) -> str:
        return ERROR_LABELS[self]


ERROR_LABELS = MappingProxyType(
    {
        ErrorKind.INVALID_ARGUMENT: "Invalid argument error",
        ErrorKind.INVALID_SETTING: "Invalid setting error",
        ErrorKind.INVALID_PYTHON: "Invalid Python version error",
        ErrorKind.INVALID_FILE_PATH: "Invalid file path error",
        ErrorKind.INVALID_API_RESPONSE: "Invalid API response error",
        ErrorKind.PARSER_ERROR: "Parser error",
        ErrorKind.TODOIST_API_ERROR: "Todoist API error",
        ErrorKind.EXTERNAL: "External error",
    },
)
