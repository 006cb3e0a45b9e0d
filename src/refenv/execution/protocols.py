#
# src/refenv/execution/protocols.py
#
"""
Defines protocols and data structures for running the interpreter process.
"""
from typing import Protocol, runtime_checkable

from attrs import define


@define(frozen=True, slots=True)
class ProcessResult:
    """
    Everything captured from one finished interpreter process.

    Timestamps come from `time.monotonic()` and are only meaningful relative
    to each other.
    """
    exit_code: int
    stdout: bytes
    stderr: bytes
    started_at: float
    finished_at: float

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


@runtime_checkable
class ProcessRunner(Protocol):
    """
    Protocol for a facade that launches a process and captures its output.
    """
    async def run(self, command: list[str]) -> ProcessResult:
        """
        Runs `command` to completion.

        Args:
            command: The executable and its arguments.

        Returns:
            A ProcessResult with exit code, captured streams and timestamps.

        Raises:
            LaunchError: The process could not be started.
            CaptureError: Reading the process streams failed.
        """
        ...


def build_command(executable: str, helper_functions: str, test_file: str) -> list[str]:
    """Command line of the reference shell: helper functions first, then the test."""
    return [executable, "-f", helper_functions, "-f", test_file]

# 🔼⚙️
