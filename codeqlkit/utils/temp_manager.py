"""Centralized temporary file management for codeqlkit."""

import os
import tempfile
import uuid
from pathlib import Path


class TempManager:
    """Creates exclusive temp files for suites, query results and subprocess capture."""

    @staticmethod
    def get_temp_dir(temp_dir: str | Path | None = None) -> Path:
        """Get the temp directory, creating it when a custom one is configured."""
        if temp_dir is None:
            return Path(tempfile.gettempdir())

        path = Path(temp_dir)
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def create_temp_file(
        suffix: str = ".txt", prefix: str = "codeqlkit", temp_dir: str | Path | None = None
    ) -> tuple[Path, int]:
        """Create a temporary file and return its path with an open descriptor."""
        directory = TempManager.get_temp_dir(temp_dir)

        unique_id = uuid.uuid4().hex[:8]
        file_path = directory / f"{prefix}_{unique_id}{suffix}"

        fd = os.open(str(file_path), os.O_RDWR | os.O_CREAT | os.O_EXCL, 0o600)

        return file_path, fd

    @staticmethod
    def create_empty_file(
        suffix: str = ".txt", prefix: str = "codeqlkit", temp_dir: str | Path | None = None
    ) -> Path:
        """Create a temporary file for another process to write into."""
        path, fd = TempManager.create_temp_file(suffix=suffix, prefix=prefix, temp_dir=temp_dir)
        os.close(fd)
        return path

    @staticmethod
    def remove(path: str | Path | None) -> None:
        """Delete a temporary file if it still exists."""
        if path is None:
            return
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass

    @staticmethod
    def create_temp_files_for_subprocess(
        tool_name: str = "process", temp_dir: str | Path | None = None
    ) -> tuple[Path, Path]:
        """Create stdout and stderr temp files for subprocess capture."""

        safe_tool_name = tool_name.replace("/", "_").replace("\\", "_").replace(":", "_")
        safe_tool_name = safe_tool_name.replace("(", "").replace(")", "").replace(" ", "_")

        safe_tool_name = safe_tool_name[:50]

        stdout_path = TempManager.create_empty_file(
            suffix=f"_{safe_tool_name}_stdout.txt", prefix="subprocess", temp_dir=temp_dir
        )
        try:
            stderr_path = TempManager.create_empty_file(
                suffix=f"_{safe_tool_name}_stderr.txt", prefix="subprocess", temp_dir=temp_dir
            )
        except OSError:
            TempManager.remove(stdout_path)
            raise

        return stdout_path, stderr_path
