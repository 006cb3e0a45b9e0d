#
# src/refenv/execution/subprocess_runner.py
#
"""
Process runners built on asyncio.subprocess.
"""
import asyncio
import contextlib
import time
from collections.abc import Sequence

import structlog

from refenv.exceptions import CaptureError, LaunchError
from refenv.execution.protocols import ProcessResult, ProcessRunner

log = structlog.get_logger("execution.runner")

DEFAULT_COVERAGE_COMMAND = ("coverage", "/SaveMergeData", "/SaveMergeTextData")


class SubprocessProcessRunner(ProcessRunner):
    """
    Implements the ProcessRunner protocol by executing the command in a subprocess.
    """
    def _effective_command(self, command: list[str]) -> list[str]:
        return list(command)

    async def run(self, command: list[str]) -> ProcessResult:
        """
        Executes the command using asyncio.create_subprocess_exec and waits for it to exit.

        A CaptureError raised here never carries `partial_stderr`; runners
        that read the pipes incrementally may attach what they collected.
        """
        effective = self._effective_command(command)
        runner_log = log.bind(command=" ".join(effective))
        runner_log.debug("Launching interpreter process", emoji_key="run")

        started_at = time.monotonic()
        try:
            process = await asyncio.create_subprocess_exec(
                *effective,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            runner_log.error("Interpreter executable not found", executable=effective[0])
            raise LaunchError(
                f"Executable not found: '{effective[0]}'", command=effective, details=e
            ) from e
        except OSError as e:
            runner_log.error("Failed to launch interpreter process", error=str(e))
            raise LaunchError("Failed to launch process", command=effective, details=e) from e

        try:
            stdout_bytes, stderr_bytes = await process.communicate()
        except OSError as e:
            # communicate() keeps no partial buffers, so there is no stderr to
            # attach here and grading falls back to the generic diagnostic.
            runner_log.error("Failed to read interpreter output", error=str(e))
            if process.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    process.kill()
            raise CaptureError(
                "Failed to read process output", command=effective, details=e
            ) from e
        finished_at = time.monotonic()

        exit_code = process.returncode if process.returncode is not None else -1
        runner_log.debug(
            "Interpreter process finished",
            exit_code=exit_code,
            stdout_len=len(stdout_bytes),
            stderr_len=len(stderr_bytes),
            elapsed=round(finished_at - started_at, 3),
        )
        return ProcessResult(
            exit_code=exit_code,
            stdout=stdout_bytes,
            stderr=stderr_bytes,
            started_at=started_at,
            finished_at=finished_at,
        )


class CoverageProcessRunner(SubprocessProcessRunner):
    """
    Runs the command under a code coverage wrapper.
    """
    def __init__(self, coverage_command: Sequence[str] = DEFAULT_COVERAGE_COMMAND):
        self.coverage_command = list(coverage_command)

    def _effective_command(self, command: list[str]) -> list[str]:
        return [*self.coverage_command, *command]

# 🔼⚙️
