"""Centralized logging configuration using Loguru.

Usage:
    from codeqlkit.utils.logging import logger
    logger.info("Message")
    logger.debug("Debug message")  # Only shows if CODEQLKIT_LOG_LEVEL=DEBUG

Environment Variables:
    CODEQLKIT_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: INFO)
    CODEQLKIT_LOG_JSON: 0|1 (default: 0, human-readable)
    CODEQLKIT_LOG_FILE: path to log file (optional, always NDJSON)
    CODEQLKIT_REQUEST_ID: correlation ID passed down to subprocesses
"""

import json
import os
import sys
import uuid

from loguru import logger

from .constants import ENV_LOG_FILE, ENV_LOG_JSON, ENV_LOG_LEVEL, ENV_REQUEST_ID

# Remove default handler
logger.remove()

# Numeric levels for NDJSON records
JSON_LEVELS = {
    "TRACE": 10,
    "DEBUG": 20,
    "INFO": 30,
    "SUCCESS": 35,
    "WARNING": 40,
    "ERROR": 50,
    "CRITICAL": 60,
}

_log_level = os.environ.get(ENV_LOG_LEVEL, "INFO").upper()
_json_mode = os.environ.get(ENV_LOG_JSON, "0") == "1"
_log_file = os.environ.get(ENV_LOG_FILE)
_request_id = os.environ.get(ENV_REQUEST_ID) or str(uuid.uuid4())


def _json_record(record) -> str:
    """Render a loguru record as one NDJSON line."""
    payload = {
        "level": JSON_LEVELS.get(record["level"].name, 30),
        "time": int(record["time"].timestamp() * 1000),
        "msg": record["message"],
        "pid": record["process"].id,
        "request_id": record["extra"].get("request_id", _request_id),
    }

    for key, value in record["extra"].items():
        if key != "request_id":
            payload[key] = value

    if record["exception"]:
        payload["err"] = {
            "type": record["exception"].type.__name__ if record["exception"].type else "Error",
            "message": str(record["exception"].value) if record["exception"].value else "",
        }

    return json.dumps(payload, default=str) + "\n"


def json_stdout_sink(message):
    """Write NDJSON records to stdout.

    Never call logger.* inside a sink - causes infinite recursion.
    """
    sys.stdout.write(_json_record(message.record))
    sys.stdout.flush()


_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

if _json_mode:
    logger.add(json_stdout_sink, level=_log_level, colorize=False)
else:
    logger.add(
        sys.stderr,
        level=_log_level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )

if _log_file:

    def _file_json_sink(message):
        """Append NDJSON records to the configured log file."""
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(_json_record(message.record))

    logger.add(_file_json_sink, level="DEBUG")


def get_request_id() -> str:
    """Get the current request ID for correlation."""
    return _request_id


def get_subprocess_env() -> dict[str, str]:
    """Get environment dict with the request ID for subprocess calls.

    Example:
        env = get_subprocess_env()
        run_tool(["gh", "codeql", "version"], env=env)
    """
    env = os.environ.copy()
    env[ENV_REQUEST_ID] = _request_id
    return env


__all__ = [
    "logger",
    "get_request_id",
    "get_subprocess_env",
]
