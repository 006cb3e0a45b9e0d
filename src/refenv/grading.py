# src/refenv/grading.py
#
"""
Pass/fail policy for test files and suites.

A file is graded in one of two modes, chosen by its name:

* direct mode: a failing case, a non-zero exit code, unparseable output or a
  file without cases fails the file and the suite.
* negative mode (name ends with the negative suffix): the same conditions are
  the expected outcome, so they pass the file and leave the suite alone.
"""

import structlog

from refenv.exceptions import CaptureError, ExecutionError
from refenv.protocol import ParseFailure, ParseResult
from refenv.records import ExecutionState, TestFile, TestSuite
from refenv.telemetry import StructLogger

log: StructLogger = structlog.get_logger("grading")

DEFAULT_NEGATIVE_SUFFIX = "-n.js"
NO_CASES_REASON = "File contains no testcases. "
UNKNOWN_PROCESS_EXCEPTION = "Unknown process exception."


class ResultGrader:
    """Applies the direct or negative policy to a file and its suite."""

    def __init__(self, negative_suffix: str = DEFAULT_NEGATIVE_SUFFIX):
        self.negative_suffix = negative_suffix

    def is_negative(self, file: TestFile) -> bool:
        return file.name.endswith(self.negative_suffix)

    def _trigger(self, file: TestFile, suite: TestSuite, cause: str) -> None:
        """Records one failure condition according to the file's mode."""
        if self.is_negative(file):
            log.debug("Expected failure in negative test", file=file.name, cause=cause)
            file.passed = True
        else:
            log.info("Test file failed", file=file.name, suite=suite.name, cause=cause)
            file.passed = False
            suite.mark_failed()

    def grade_exit_code(self, file: TestFile, suite: TestSuite, exit_code: int) -> None:
        if exit_code != 0:
            self._trigger(file, suite, f"exit code {exit_code}")

    def grade_parse(
        self,
        file: TestFile,
        suite: TestSuite,
        result: ParseResult,
        stderr_text: str = "",
    ) -> None:
        """Stores parsed records on the file and grades them."""
        if isinstance(result, ParseFailure):
            file.transition(ExecutionState.PARSE_FAILED)
            self._trigger(file, suite, f"parse failure: {result.reason}")
            file.exception = stderr_text
            file.transition(ExecutionState.GRADED)
            return

        file.transition(ExecutionState.PARSE_SUCCEEDED)
        file.total_cases = result.total_cases
        file.cases.extend(result.cases)
        if result.cases:
            file.bugnumber = result.bugnumber

        for case in result.cases:
            if case.failed:
                self._trigger(file, suite, f"case failed: {case.name}")

        if file.total_cases == 0:
            if not self.is_negative(file):
                file.reason = NO_CASES_REASON + file.reason
            self._trigger(file, suite, "no test cases")

        file.transition(ExecutionState.GRADED)

    def grade_execution_error(self, file: TestFile, suite: TestSuite, error: ExecutionError) -> None:
        """Grades a file whose process could not be launched or read."""
        partial = error.partial_stderr if isinstance(error, CaptureError) else None
        if partial:
            file.exception = partial.decode("utf-8", errors="replace")
        else:
            file.exception = UNKNOWN_PROCESS_EXCEPTION
        self._trigger(file, suite, f"execution error: {error}")
        self._finish(file)

    def grade_unexpected_error(self, file: TestFile, suite: TestSuite, error: Exception) -> None:
        """
        Fails the file and suite for an error outside the execution taxonomy.

        Negative mode does not apply: such an error is a fault of the
        harness, not an expected failure of the script.
        """
        log.error("Test file failed with unexpected error", file=file.name, suite=suite.name, error=str(error))
        file.exception = UNKNOWN_PROCESS_EXCEPTION
        file.passed = False
        suite.mark_failed()
        self._finish(file)

    def _finish(self, file: TestFile) -> None:
        if file.state is ExecutionState.NOT_RUN:
            file.transition(ExecutionState.RUNNING)
        if file.state is not ExecutionState.GRADED:
            file.transition(ExecutionState.GRADED)


# 🔼⚙️
