"""GitHub CLI launcher and CodeQL version management.

The CodeQL CLI is reached through `gh codeql`, provided by the
github/gh-codeql extension. ensure_cli_version() makes sure the extension is
installed and that the CLI reports exactly the requested version, switching
to it once if needed.
"""

from pathlib import Path

from codeqlkit.errors import CommandExecutionError, ToolNotFoundError, VersionMismatchError
from codeqlkit.runner import run_tool
from codeqlkit.utils.constants import (
    GH_CODEQL_EXTENSION,
    GH_EXECUTABLE,
    MAX_OUTPUT_BYTES,
    NO_TIMEOUT,
    RELEASE_CHANNEL,
)
from codeqlkit.utils.logging import get_subprocess_env, logger


class GhLauncher:
    """Runs `gh` subcommands through the subprocess runner.

    All invocations share one timeout, output cap and temp directory.
    """

    def __init__(
        self,
        executable: str = GH_EXECUTABLE,
        timeout: int = NO_TIMEOUT,
        max_output_bytes: int = MAX_OUTPUT_BYTES,
        temp_dir: str | Path | None = None,
    ):
        self.executable = executable
        self.timeout = timeout
        self.max_output_bytes = max_output_bytes
        self.temp_dir = temp_dir

    def run(
        self,
        args: list[str],
        cwd: str | Path | None = None,
        env: dict[str, str] | None = None,
    ) -> tuple[int, str, str]:
        """Run `gh <args>` and return (exit_code, stdout, stderr).

        Raises:
            ToolNotFoundError: The gh executable could not be spawned
        """
        cmd = [self.executable, *args]
        try:
            return run_tool(
                cmd,
                cwd=cwd,
                env=env if env is not None else get_subprocess_env(),
                timeout=self.timeout,
                max_output_bytes=self.max_output_bytes,
                temp_dir=self.temp_dir,
            )
        except OSError as e:
            raise ToolNotFoundError(f"Failed to execute: {' '.join(cmd)}: {e}") from e

    def check(self, args: list[str], cwd: str | Path | None = None) -> str:
        """Run `gh <args>`, raising on a nonzero exit, and return stdout."""
        exit_code, stdout, stderr = self.run(args, cwd=cwd)
        if exit_code != 0:
            raise CommandExecutionError([self.executable, *args], exit_code, stderr)
        return stdout


def ensure_gh_installed(launcher: GhLauncher) -> str:
    """Check that gh can be run at all and return its version banner."""
    try:
        exit_code, stdout, _stderr = launcher.run(["--version"])
    except ToolNotFoundError as e:
        raise ToolNotFoundError(f"Cannot find gh CLI ({launcher.executable}).") from e
    if exit_code != 0:
        raise ToolNotFoundError(
            f"Cannot find gh CLI ({launcher.executable}): --version exited with {exit_code}."
        )

    banner = stdout.strip().splitlines()[0] if stdout.strip() else ""
    logger.debug(f"Found gh CLI version {banner}")
    return banner


def ensure_codeql_extension(launcher: GhLauncher) -> None:
    """Install the gh-codeql extension unless it is already present."""
    ensure_gh_installed(launcher)
    logger.debug("Ensuring gh CLI extension for CodeQL is installed")

    extensions = launcher.check(["extensions", "list"])
    if GH_CODEQL_EXTENSION in extensions:
        logger.debug("gh CLI extension for CodeQL is already installed")
        return

    logger.info(f"Installing gh CLI extension {GH_CODEQL_EXTENSION}")
    launcher.check(["extensions", "install", GH_CODEQL_EXTENSION])


def get_cli_version(launcher: GhLauncher) -> str:
    """Get the version of the CodeQL CLI, e.g. `2.20.0`."""
    ensure_codeql_extension(launcher)
    return launcher.check(["codeql", "version", "--format", "terse"]).strip()


def ensure_cli_version(launcher: GhLauncher, version: str) -> str:
    """Check that the given CodeQL version is installed, and if not install it.

    Only a single switch attempt is made.

    Returns:
        The installed version (equal to `version`)

    Raises:
        ToolNotFoundError: gh is missing
        CommandExecutionError: Listing/installing the extension or querying the version failed
        VersionMismatchError: The CLI still reports another version after switching
    """
    current = get_cli_version(launcher)
    if current == version:
        logger.debug(f"CodeQL CLI version {current} already installed")
        return current

    logger.info(f"Expected CodeQL version {version}, got {current}. Trying to install it.")
    for args in (["codeql", "set-channel", RELEASE_CHANNEL], ["codeql", "set-version", version]):
        exit_code, _stdout, stderr = launcher.run(args)
        if exit_code != 0:
            logger.warning(f"gh {' '.join(args)} exited with {exit_code}: {stderr.strip()}")

    current = get_cli_version(launcher)
    if current != version:
        raise VersionMismatchError(version, current)

    logger.info(f"Installed CodeQL CLI version {current}")
    return current
