"""CodeQL CLI wrapper with pinned CLI and query pack versions.

Construction is two-phase: CodeQL(config) performs no I/O, ensure_ready()
installs/switches the CLI version. Every operation that runs the CLI
requires a ready instance.

Usage:
    from codeqlkit import CodeQL

    codeql = CodeQL.make("2.20.0", {"codeql/javascript-queries": "1.2.5"}, timeout=600)
    codeql.create_database("javascript", "/src/app", "/tmp/app-db")
    with codeql.make_suite("javascript", "js/xss") as suite:
        codeql.analyze_database("/tmp/app-db", "/tmp/results.sarif", suite.name)
    classification = codeql.classify_files("/tmp/app-db", "javascript")
"""

import json
import os
import sys
from collections.abc import Mapping
from pathlib import Path

from codeqlkit.bqrs import load_decoded_results, parse_file_classification
from codeqlkit.config import CodeQLConfig
from codeqlkit.errors import (
    ClassifierUnresolvedError,
    CommandExecutionError,
    MissingPackVersionError,
    QueryResolutionError,
    WrapperNotReadyError,
)
from codeqlkit.languages import LANGUAGE_TO_LANGUAGE_ID, require_language
from codeqlkit.launcher import GhLauncher, ensure_cli_version
from codeqlkit.query_cache import ResolvedQueryCache
from codeqlkit.suite import QuerySuite, build_suite, default_query_pack_name
from codeqlkit.utils.constants import BUILDLESS_ENV, NO_TIMEOUT
from codeqlkit.utils.logging import get_subprocess_env, logger
from codeqlkit.utils.temp_manager import TempManager


def _absolute(path: str | Path) -> Path:
    """Resolve against our working directory; commands run with cwd set elsewhere."""
    return Path(path).resolve()


class CodeQL:
    """A wrapper for interacting with the CodeQL CLI, with fixed versions of the
    CLI and query packs."""

    def __init__(self, config: CodeQLConfig, launcher: GhLauncher | None = None):
        self.config = config
        self.launcher = launcher or GhLauncher(
            executable=config.gh_executable,
            timeout=config.timeout,
            max_output_bytes=config.max_output_bytes,
            temp_dir=config.temp_dir,
        )
        self._resolved_queries = ResolvedQueryCache()
        self._cli_version: str | None = None

    @classmethod
    def make(
        cls,
        codeql_version: str,
        pack_versions: Mapping[str, str],
        timeout: int = NO_TIMEOUT,
        **options,
    ) -> "CodeQL":
        """Validate the configuration, build a wrapper and make it ready.

        Args:
            codeql_version: The version of the CodeQL CLI to use, e.g. `2.20.0`
            pack_versions: Query pack names to versions, e.g.
                `codeql/javascript-queries` -> `1.2.5`
            timeout: Per-subprocess timeout in seconds, -1 for none
            **options: Remaining CodeQLConfig fields (gh_executable, temp_dir, ...)
        """
        config = CodeQLConfig(
            codeql_version=codeql_version,
            pack_versions=pack_versions,
            timeout=timeout,
            **options,
        )
        codeql = cls(config)
        codeql.ensure_ready()
        return codeql

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def ready(self) -> bool:
        return self._cli_version is not None

    @property
    def cli_version(self) -> str | None:
        """The verified CLI version, or None before ensure_ready()."""
        return self._cli_version

    def ensure_ready(self) -> str:
        """Make sure the configured CodeQL CLI version is installed.

        Idempotent; the check runs once per instance.
        """
        if self._cli_version is None:
            self._cli_version = ensure_cli_version(self.launcher, self.config.codeql_version)
        return self._cli_version

    def _require_ready(self) -> None:
        if not self.ready:
            raise WrapperNotReadyError(
                "CodeQL wrapper is not ready; call ensure_ready() before running commands"
            )

    # ------------------------------------------------------------------
    # Query packs and suites
    # ------------------------------------------------------------------

    @staticmethod
    def default_query_pack_name(language: str) -> str:
        """Gets the name of the default query pack for the given language."""
        return default_query_pack_name(language)

    def default_query_pack_version(self, language: str) -> str:
        """Gets the configured version of the default query pack for the language."""
        pack_name = default_query_pack_name(language)
        if pack_name not in self.config.pack_versions:
            raise MissingPackVersionError(language, pack_name)
        return self.config.pack_versions[pack_name]

    def make_suite(self, language: str, *query_ids: str) -> QuerySuite:
        """Create a temporary `.qls` file referencing the given queries.

        The caller owns the returned suite and must remove() it (or use it
        as a context manager).
        """
        require_language(language)
        definition = build_suite(
            default_query_pack_name(language),
            self.default_query_pack_version(language),
            list(query_ids),
        )
        return QuerySuite.write(definition, temp_dir=self.config.temp_dir)

    # ------------------------------------------------------------------
    # Command execution
    # ------------------------------------------------------------------

    def _codeql(self, cwd: str | Path | None, args: list[str], env: dict[str, str]) -> str:
        """Run `gh codeql <args>`, pass its stderr through, raise on failure, return stdout."""
        cmd = ["codeql", *args]
        logger.debug(f"Running {' '.join(cmd)}")
        exit_code, stdout, stderr = self.launcher.run(cmd, cwd=cwd, env=env)
        if stderr:
            sys.stderr.write(stderr)
            sys.stderr.flush()
        if exit_code != 0:
            raise CommandExecutionError([self.launcher.executable, *cmd], exit_code, stderr)
        return stdout

    def run_command(self, cwd: str | Path, category: str, command: str, *args: str) -> None:
        """Run a CodeQL CLI command.

        For example,

            run_command(".", "database", "create", "--language", "cpp", "--source-root", ".", "db")

        will run `codeql database create --language cpp --source-root . db`.

        Buildless extraction (build mode none) is enabled for Java and C#.
        The command's stdout is discarded and its stderr is passed through
        once the command has exited, so a long `database create` shows no
        progress while it runs.

        Relative arguments are resolved by the CLI against `cwd`; the
        create/analyze/classify helpers pass absolute paths.

        Raises:
            CommandExecutionError: The command exited with a nonzero code
        """
        self._require_ready()
        env = get_subprocess_env()
        env.update(BUILDLESS_ENV)
        self._codeql(cwd, [category, command, *args], env)

    def create_database(self, language: str, source_root: str | Path, database_path: str | Path) -> None:
        """
        Create a CodeQL database.

        Args:
            language: The language of the database
            source_root: The root of the source code to analyze
            database_path: The path to the database to create. Should be an
                empty (or non-existent) directory.
        """
        require_language(language)
        source_root = _absolute(source_root)
        database_path = _absolute(database_path)
        self.run_command(
            source_root,
            "database",
            "create",
            "-j0",
            "--language",
            language,
            "--source-root",
            str(source_root),
            str(database_path),
        )

    def analyze_database(self, database_path: str | Path, output: str | Path, *queries: str) -> None:
        """Run one or more CodeQL queries against a database and export the results as SARIF.

        Queries naming an existing file or directory (e.g. a suite from
        make_suite) are passed as absolute paths; anything else, such as a
        pack reference, is passed unchanged.
        """
        database_path = _absolute(database_path)
        self.run_command(
            database_path,
            "database",
            "analyze",
            str(database_path),
            "-j0",
            "--download",
            "--format=sarif-latest",
            "--sarif-add-query-help",
            "--output",
            str(_absolute(output)),
            *(str(_absolute(query)) if os.path.exists(query) else query for query in queries),
        )

    def resolve_queries(self, language: str, *query_ids: str) -> list[str | None]:
        """Resolve a list of query IDs to their corresponding `.ql` files.

        Only IDs missing from the cache are sent to `resolve queries`, in one
        batch. The CLI returns paths in suite order, which is zipped back
        onto the IDs.

        Returns:
            One path per requested ID, in request order; None for IDs the
            CLI could not resolve.

        Raises:
            QueryResolutionError: The CLI returned a different number of
                paths than IDs requested, or output that is not a JSON list
        """
        self._require_ready()
        require_language(language)

        unresolved = self._resolved_queries.missing(query_ids)
        if unresolved:
            suite = self.make_suite(language, *unresolved)
            try:
                # resolve queries has no --output option, so read stdout directly
                stdout = self._codeql(
                    None,
                    ["resolve", "queries", "--format=json", suite.name],
                    get_subprocess_env(),
                )
            finally:
                suite.remove()

            try:
                resolved = json.loads(stdout)
            except json.JSONDecodeError as e:
                raise QueryResolutionError(f"resolve queries returned invalid JSON: {e}") from e
            if not isinstance(resolved, list):
                raise QueryResolutionError(
                    f"resolve queries returned {type(resolved).__name__}, expected a list"
                )

            if resolved and len(resolved) != len(unresolved):
                raise QueryResolutionError(
                    f"resolve queries returned {len(resolved)} paths for "
                    f"{len(unresolved)} query IDs: {', '.join(unresolved)}"
                )

            self._resolved_queries.update(zip(unresolved, resolved))
            logger.debug(f"Resolved {len(resolved)} of {len(unresolved)} queries for {language}")

        return self._resolved_queries.lookup(query_ids)

    def classify_files(self, database_path: str | Path, language: str) -> dict[str, str]:
        """
        Run the file-classifier query to identify files that are not plain
        source files (e.g., test files or generated files).

        Returns:
            A dict from absolute file paths to the classification of the file.
        """
        require_language(language)
        database_path = _absolute(database_path)
        classifier_id =f"{LANGUAGE_TO_LANGUAGE_ID[language]}/file-classifier"
        [classifier] = self.resolve_queries(language, classifier_id)
        if not classifier:
            raise ClassifierUnresolvedError(
                f"Could not resolve file-classifier query for {language}"
            )

        temp_dir = self.config.temp_dir
        bqrs_path = json_path = None
        try:
            bqrs_path = TempManager.create_empty_file(suffix=".bqrs", prefix="classify", temp_dir=temp_dir)
            self.run_command(
                database_path,
                "query",
                "run",
                "--threads",
                "-1",
                "--output",
                str(bqrs_path),
                "--database",
                str(database_path),
                classifier,
            )

            json_path = TempManager.create_empty_file(suffix=".json", prefix="classify", temp_dir=temp_dir)
            self.run_command(
                database_path,
                "bqrs",
                "decode",
                "--format",
                "json",
                "--output",
                str(json_path),
                str(bqrs_path),
            )

            classification = parse_file_classification(load_decoded_results(json_path))
        finally:
            TempManager.remove(bqrs_path)
            TempManager.remove(json_path)

        logger.debug(f"Classified {len(classification)} files in {database_path}")
        return classification
