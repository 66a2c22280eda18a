"""codeqlkit utilities package."""

from .constants import (
    BUILDLESS_ENV,
    GH_CODEQL_EXTENSION,
    GH_EXECUTABLE,
    MAX_OUTPUT_BYTES,
    NO_TIMEOUT,
    TIMEOUT_EXIT_CODE,
)
from .error_handler import handle_exceptions
from .logging import get_request_id, get_subprocess_env, logger
from .temp_manager import TempManager

__all__ = [
    "BUILDLESS_ENV",
    "GH_CODEQL_EXTENSION",
    "GH_EXECUTABLE",
    "MAX_OUTPUT_BYTES",
    "NO_TIMEOUT",
    "TIMEOUT_EXIT_CODE",
    "handle_exceptions",
    "get_request_id",
    "get_subprocess_env",
    "logger",
    "TempManager",
]
