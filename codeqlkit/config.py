"""Runtime configuration for codeqlkit - centralized configuration management."""

import copy
import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from codeqlkit.errors import ConfigError
from codeqlkit.utils.constants import (
    CONFIG_FILE_NAME,
    ENV_PREFIX,
    GH_EXECUTABLE,
    MAX_OUTPUT_BYTES,
    NO_TIMEOUT,
)
from codeqlkit.utils.logging import logger

DEFAULTS = {
    "codeql": {
        "version": "",
        "gh_executable": GH_EXECUTABLE,
    },
    "packs": {},
    "limits": {
        "timeout": NO_TIMEOUT,
        "max_output_bytes": MAX_OUTPUT_BYTES,
    },
    "paths": {
        "temp_dir": "",
    },
}


@dataclass(frozen=True)
class CodeQLConfig:
    """Validated construction parameters for a CodeQL wrapper.

    Building one performs no I/O; validation errors surface here, before
    any subprocess is spawned.

    Attributes:
        codeql_version: CodeQL CLI version to pin, e.g. `2.20.0`
        pack_versions: Query pack name -> version, e.g.
            `codeql/javascript-queries` -> `1.2.5`
        timeout: Per-subprocess timeout in seconds; -1 (or 0) disables it
        gh_executable: GitHub CLI launcher used to run `gh codeql`
        temp_dir: Directory for suites and query results (system temp when None)
        max_output_bytes: Cap on captured stdout/stderr per subprocess
    """

    codeql_version: str
    pack_versions: Mapping[str, str] = field(default_factory=dict)
    timeout: int = NO_TIMEOUT
    gh_executable: str = GH_EXECUTABLE
    temp_dir: str | None = None
    max_output_bytes: int = MAX_OUTPUT_BYTES

    def __post_init__(self):
        if not isinstance(self.codeql_version, str) or not self.codeql_version.strip():
            raise ConfigError("codeql_version must be a non-empty version string")

        if isinstance(self.timeout, bool) or not isinstance(self.timeout, int):
            raise ConfigError(f"timeout must be an integer, got {self.timeout!r}")
        if self.timeout < NO_TIMEOUT:
            raise ConfigError(
                f"timeout must be >= 0 seconds or {NO_TIMEOUT} for no timeout, got {self.timeout}"
            )

        if self.max_output_bytes <= 0:
            raise ConfigError(f"max_output_bytes must be positive, got {self.max_output_bytes}")

        for name, version in self.pack_versions.items():
            if not isinstance(name, str) or not isinstance(version, str):
                raise ConfigError(f"Invalid pack version entry: {name!r} -> {version!r}")

        # Frozen dataclass: go through object.__setattr__ to store the read-only copy
        object.__setattr__(self, "codeql_version", self.codeql_version.strip())
        object.__setattr__(self, "pack_versions", MappingProxyType(dict(self.pack_versions)))


def parse_pack_specs(specs: list[str] | tuple[str, ...]) -> dict[str, str]:
    """Parse `NAME=VERSION` strings (CLI --pack values) into a dict."""
    packs = {}
    for spec in specs:
        name, sep, version = spec.partition("=")
        if not sep or not name.strip() or not version.strip():
            raise ConfigError(f"Invalid pack spec '{spec}', expected NAME=VERSION")
        packs[name.strip()] = version.strip()
    return packs


def load_runtime_config(root: str = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .codeqlkit.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (CODEQLKIT_<SECTION>_<KEY>)
    2. <root>/.codeqlkit.json file
    3. Built-in defaults

    Pack versions come from the file only; their names contain characters
    that do not survive as environment variable names.

    Args:
        root: Root directory to look for config file

    Returns:
        Configuration dictionary with merged values
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / CONFIG_FILE_NAME
    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in ["codeql", "limits", "paths"]:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key in cfg[section] and isinstance(value, type(cfg[section][key])):
                                cfg[section][key] = value
                if isinstance(user.get("packs"), dict):
                    cfg["packs"] = {
                        str(name): str(version) for name, version in user["packs"].items()
                    }
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config file from {path}: {e}")
        logger.info("Continuing with default configuration")

    for section in ["codeql", "limits", "paths"]:
        for key in cfg[section]:
            env_var = f"{ENV_PREFIX}_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                value = os.environ[env_var]
                try:
                    if isinstance(cfg[section][key], int):
                        cfg[section][key] = int(value)
                    else:
                        cfg[section][key] = value
                except ValueError:
                    logger.warning(f"Invalid value for environment variable {env_var}: {value}")

    return cfg


def config_from_runtime(
    cfg: dict[str, Any],
    codeql_version: str | None = None,
    packs: Mapping[str, str] | None = None,
    timeout: int | None = None,
) -> CodeQLConfig:
    """Build a CodeQLConfig from a runtime config dict plus explicit overrides."""
    pack_versions = dict(cfg["packs"])
    if packs:
        pack_versions.update(packs)

    return CodeQLConfig(
        codeql_version=codeql_version or cfg["codeql"]["version"],
        pack_versions=pack_versions,
        timeout=timeout if timeout is not None else cfg["limits"]["timeout"],
        gh_executable=cfg["codeql"]["gh_executable"],
        temp_dir=cfg["paths"]["temp_dir"] or None,
        max_output_bytes=cfg["limits"]["max_output_bytes"],
    )
