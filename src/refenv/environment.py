# src/refenv/environment.py
"""
Runs one test file in the reference shell and grades the result.
"""
import time
from typing import Protocol, runtime_checkable

import structlog

from refenv.config.models import DriverConfig
from refenv.exceptions import ExecutionError
from refenv.execution import ProcessRunner, build_command
from refenv.grading import ResultGrader
from refenv.protocol import parse_output
from refenv.protocol.parser import DiagnosticSink
from refenv.records import ExecutionState, TestFile, TestSuite
from refenv.telemetry import StructLogger, log_sink

log: StructLogger = structlog.get_logger("environment")


@runtime_checkable
class TestEnvironment(Protocol):
    """An environment the driver can execute a single test file in."""

    async def run_test(self) -> None: ...

    def close(self) -> None: ...


class RefEnv(TestEnvironment):
    """
    Executes a test file with the reference shell and parses its tagged output.

    `run_test` never raises: launch, capture and protocol problems all end up
    as a grading decision on the file and suite.
    """

    def __init__(
        self,
        file: TestFile,
        suite: TestSuite,
        driver_config: DriverConfig,
        runner: ProcessRunner,
        sink: DiagnosticSink | None = None,
        grader: ResultGrader | None = None,
    ):
        self.file = file
        self.suite = suite
        self.driver_config = driver_config
        self.runner = runner
        self.sink = sink or log_sink(file=file.name)
        self.grader = grader or ResultGrader(driver_config.negative_suffix)
        self._log = log.bind(file=file.name, suite=suite.name)

    def command(self) -> list[str]:
        test_path = self.file.file_path if self.file.file_path is not None else self.file.name
        return build_command(
            self.driver_config.executable,
            self.driver_config.helper_functions,
            str(test_path),
        )

    async def run_test(self) -> None:
        """Launches the shell, waits for it, then parses and grades its output."""
        if self.file.state is not ExecutionState.NOT_RUN:
            # A single execution attempt is terminal.
            self._log.warning("Test file already executed, skipping", state=self.file.state.name)
            return

        self.file.transition(ExecutionState.RUNNING)
        self.file.start_time = time.monotonic()

        try:
            self.sink(self.file.name)
            result = await self.runner.run(self.command())
        except ExecutionError as e:
            self.file.end_time = time.monotonic()
            self._log.warning("Interpreter execution failed", error=str(e))
            self.sink(str(e))
            self.grader.grade_execution_error(self.file, self.suite, e)
            return
        except Exception as e:
            self.file.end_time = time.monotonic()
            self._log.error("Unexpected error while running interpreter", error=str(e), exc_info=True)
            self.grader.grade_unexpected_error(self.file, self.suite, e)
            return

        self.file.start_time = result.started_at
        self.file.end_time = result.finished_at

        try:
            self.grader.grade_exit_code(self.file, self.suite, result.exit_code)
            parsed = parse_output(result.stdout_text, sink=self.sink)
            self.grader.grade_parse(self.file, self.suite, parsed, result.stderr_text)
        except Exception as e:
            self._log.error("Unexpected error while grading test file", error=str(e), exc_info=True)
            self.grader.grade_unexpected_error(self.file, self.suite, e)
            return

        self._log.info(
            "Test file finished",
            passed=self.file.passed,
            exit_code=result.exit_code,
            total_cases=self.file.total_cases,
            parsed_cases=len(self.file.cases),
            duration=round(self.file.duration or 0.0, 3),
            emoji_key="pass" if self.file.passed else "fail",
        )

    def close(self) -> None:
        """Nothing to release; the process is gone once `run_test` returns."""
        return None


# 🔼⚙️
