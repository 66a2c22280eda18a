"""Centralized constants for codeqlkit.

This module provides a single source of truth for the launcher name,
subprocess limits, and environment variable names used across the package.
"""

# ============================================================================
# LAUNCHER
# ============================================================================

# The GitHub CLI runs the CodeQL CLI through this extension
GH_EXECUTABLE = "gh"
GH_CODEQL_EXTENSION = "github/gh-codeql"
RELEASE_CHANNEL = "release"

# Extractor options forced on for every CodeQL invocation (buildless Java/C#)
BUILDLESS_ENV = {
    "CODEQL_EXTRACTOR_JAVA_OPTION_BUILDLESS": "true",
    "CODEQL_EXTRACTOR_CSHARP_OPTION_BUILDLESS": "true",
}

# ============================================================================
# SUBPROCESS LIMITS
# ============================================================================

# Sentinel timeout meaning "wait forever"
NO_TIMEOUT = -1

# Exit code reported for timed-out or oversized runs (matches coreutils timeout)
TIMEOUT_EXIT_CODE = 124

# Hard cap on captured stdout/stderr size (1 GiB)
MAX_OUTPUT_BYTES = 1024 * 1024 * 1024

# ============================================================================
# ENVIRONMENT VARIABLES
# ============================================================================

ENV_PREFIX = "CODEQLKIT"
ENV_LOG_LEVEL = "CODEQLKIT_LOG_LEVEL"
ENV_LOG_JSON = "CODEQLKIT_LOG_JSON"
ENV_LOG_FILE = "CODEQLKIT_LOG_FILE"
ENV_REQUEST_ID = "CODEQLKIT_REQUEST_ID"

CONFIG_FILE_NAME = ".codeqlkit.json"
