"""Exception hierarchy for the CodeQL wrapper.

Every failure surfaced by codeqlkit derives from CodeQLError so callers can
catch the whole family at once. None of these are retried internally.
"""


class CodeQLError(Exception):
    """Base class for all codeqlkit errors."""


class ConfigError(CodeQLError, ValueError):
    """Raised when wrapper configuration is invalid (e.g. timeout below -1)."""


class ToolNotFoundError(CodeQLError):
    """Raised when the gh launcher cannot be executed at all."""


class VersionMismatchError(CodeQLError):
    """Raised when the requested CodeQL CLI version could not be installed.

    Attributes:
        expected: The version that was requested
        actual: The version the CLI reported after the switch attempt
    """

    def __init__(self, expected: str, actual: str):
        super().__init__(
            f"Failed to install CodeQL version {expected} (CLI reports {actual or 'nothing'})"
        )
        self.expected = expected
        self.actual = actual


class CommandExecutionError(CodeQLError):
    """Raised when an external invocation exits with a nonzero code.

    Attributes:
        command: The argument vector that was executed
        exit_code: The process exit code (124 for timeouts)
        stderr: Captured standard error of the process
    """

    def __init__(self, command: list[str], exit_code: int, stderr: str = ""):
        message = f"Command failed with exit code {exit_code}: {' '.join(command)}"
        if stderr.strip():
            message += f"\n{stderr.strip()}"
        super().__init__(message)
        self.command = list(command)
        self.exit_code = exit_code
        self.stderr = stderr


class MissingPackVersionError(CodeQLError):
    """Raised when no version is configured for a language's default query pack."""

    def __init__(self, language: str, pack_name: str):
        super().__init__(f"No default query pack version found for {language} ({pack_name})")
        self.language = language
        self.pack_name = pack_name


class ClassifierUnresolvedError(CodeQLError):
    """Raised when the file-classifier query cannot be resolved for a language."""


class QueryResolutionError(CodeQLError):
    """Raised when `resolve queries` output cannot be matched to the requested IDs."""


class UnsupportedLanguageError(CodeQLError, ValueError):
    """Raised for a language name outside the supported set."""


class WrapperNotReadyError(CodeQLError):
    """Raised when a facade operation runs before ensure_ready() succeeded."""
