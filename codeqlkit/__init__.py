"""codeqlkit - a thin wrapper around the CodeQL CLI with pinned versions."""

__version__ = "0.1.0"

from codeqlkit.codeql import CodeQL
from codeqlkit.config import CodeQLConfig
from codeqlkit.errors import (
    ClassifierUnresolvedError,
    CodeQLError,
    CommandExecutionError,
    ConfigError,
    MissingPackVersionError,
    QueryResolutionError,
    ToolNotFoundError,
    UnsupportedLanguageError,
    VersionMismatchError,
    WrapperNotReadyError,
)
from codeqlkit.languages import (
    LANGUAGE_ID_TO_LANGUAGE,
    LANGUAGE_TO_LANGUAGE_ID,
    SUPPORTED_LANGUAGE_IDS,
    SUPPORTED_LANGUAGES,
    is_supported_language,
    is_supported_language_id,
    language_from_query_id,
)
from codeqlkit.runner import run_tool
from codeqlkit.suite import QuerySuite

__all__ = [
    "__version__",
    "CodeQL",
    "CodeQLConfig",
    "QuerySuite",
    "run_tool",
    "LANGUAGE_ID_TO_LANGUAGE",
    "LANGUAGE_TO_LANGUAGE_ID",
    "SUPPORTED_LANGUAGES",
    "SUPPORTED_LANGUAGE_IDS",
    "is_supported_language",
    "is_supported_language_id",
    "language_from_query_id",
    "CodeQLError",
    "ConfigError",
    "ToolNotFoundError",
    "VersionMismatchError",
    "CommandExecutionError",
    "MissingPackVersionError",
    "ClassifierUnresolvedError",
    "QueryResolutionError",
    "UnsupportedLanguageError",
    "WrapperNotReadyError",
]
