"""Subprocess runner - executes external commands with temp-file capture.

Output goes to temp files instead of pipes so a chatty or long-running
process never grows an in-memory buffer while it runs. The files are read
back once the process has finished, unless they grew past the size cap.

On POSIX each command runs in its own session, so a timeout kills the whole
process group: `gh codeql` starts the CodeQL CLI as a grandchild, and that
must not outlive the 124 result.
"""

import os
import signal
import subprocess
from pathlib import Path

from codeqlkit.utils.constants import MAX_OUTPUT_BYTES, NO_TIMEOUT, TIMEOUT_EXIT_CODE
from codeqlkit.utils.logging import logger
from codeqlkit.utils.temp_manager import TempManager

# Process groups (os.killpg) only exist on POSIX
USE_PROCESS_GROUP = hasattr(os, "killpg")


def _read_capture(path: Path) -> str:
    with open(path, encoding="utf-8", errors="replace") as f:
        return f.read()


def _kill_process_tree(process: subprocess.Popen) -> None:
    """Kill the process and everything it started, then reap it."""
    if USE_PROCESS_GROUP:
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            # Group already empty
            pass
    else:
        process.kill()
    process.wait()


def run_tool(
    cmd: list[str],
    cwd: str | Path | None = None,
    env: dict[str, str] | None = None,
    timeout: int = NO_TIMEOUT,
    max_output_bytes: int = MAX_OUTPUT_BYTES,
    temp_dir: str | Path | None = None,
) -> tuple[int, str, str]:
    """
    Run a command to completion and capture its output.

    Args:
        cmd: Argument vector; cmd[0] is the executable
        cwd: Working directory for the process
        env: Full environment for the process (inherits ours when None)
        timeout: Seconds before the process (and its children) is killed;
            <= 0 waits forever
        max_output_bytes: Cap on either captured stream
        temp_dir: Directory for the capture files (system temp when None)

    Returns:
        Tuple of (exit_code, stdout, stderr). Exit code is 124 when the
        process timed out or its output exceeded max_output_bytes.

    Raises:
        OSError: The executable could not be spawned. A nonzero exit code
            is never raised; interpreting it is the caller's job.
    """
    tool_name = Path(cmd[0]).name if cmd else "process"
    stdout_path, stderr_path = TempManager.create_temp_files_for_subprocess(
        tool_name, temp_dir=temp_dir
    )

    try:
        with open(stdout_path, "wb") as out_tmp, open(stderr_path, "wb") as err_tmp:
            process = subprocess.Popen(
                cmd,
                cwd=str(cwd) if cwd is not None else None,
                stdin=subprocess.DEVNULL,
                stdout=out_tmp,
                stderr=err_tmp,
                env=env,
                start_new_session=USE_PROCESS_GROUP,
            )

            try:
                returncode = process.wait(timeout=timeout if timeout > 0 else None)
            except subprocess.TimeoutExpired:
                _kill_process_tree(process)
                logger.warning(f"Command timed out after {timeout}s: {' '.join(cmd)}")
                return TIMEOUT_EXIT_CODE, "", f"Command exceeded {timeout}s timeout"

        for stream, path in (("stdout", stdout_path), ("stderr", stderr_path)):
            size = os.path.getsize(path)
            if size > max_output_bytes:
                logger.warning(
                    f"Command {stream} exceeded {max_output_bytes} bytes ({size}): {' '.join(cmd)}"
                )
                return (
                    TIMEOUT_EXIT_CODE,
                    "",
                    f"Command {stream} exceeded the {max_output_bytes} byte output limit "
                    f"({size} bytes); output discarded",
                )

        stdout = _read_capture(stdout_path)
        stderr = _read_capture(stderr_path)
    finally:
        TempManager.remove(stdout_path)
        TempManager.remove(stderr_path)

    return returncode or 0, stdout, stderr
