# src/refenv/records.py
#
"""
Record models for test cases, test files and test suites.

TestCase records are produced by the protocol parser and never change after
creation. TestFile and TestSuite are mutable because the grader updates them
while a file executes.
"""

import threading
from enum import Enum, auto
from pathlib import Path

import structlog
from attrs import define, field, mutable

log: structlog.stdlib.BoundLogger = structlog.get_logger("records")

FAILED_VALUE = "false"


class ExecutionState(Enum):
    """Lifecycle of a single test file execution."""

    NOT_RUN = auto()
    RUNNING = auto()
    PARSE_FAILED = auto()
    PARSE_SUCCEEDED = auto()
    GRADED = auto()


# Allowed transitions; a single execution attempt is terminal.
_TRANSITIONS: dict[ExecutionState, frozenset[ExecutionState]] = {
    ExecutionState.NOT_RUN: frozenset({ExecutionState.RUNNING}),
    ExecutionState.RUNNING: frozenset(
        {ExecutionState.PARSE_FAILED, ExecutionState.PARSE_SUCCEEDED, ExecutionState.GRADED}
    ),
    ExecutionState.PARSE_FAILED: frozenset({ExecutionState.GRADED}),
    ExecutionState.PARSE_SUCCEEDED: frozenset({ExecutionState.GRADED}),
    ExecutionState.GRADED: frozenset(),
}


@define(frozen=True, slots=True)
class TestCase:
    """One reported result unit from the interpreter output."""

    __test__ = False  # keep pytest from collecting this class

    passed: str
    name: str
    expected: str
    actual: str
    description: str
    reason: str

    @property
    def failed(self) -> bool:
        return self.passed == FAILED_VALUE


@mutable(slots=True)
class TestFile:
    """
    One test script under evaluation.

    `passed` starts out True and is only written by the grader. `cases` holds
    the successfully parsed records in stream order, so it can be shorter than
    `total_cases` when parsing stopped early.
    """

    __test__ = False

    name: str = field()
    file_path: Path | None = field(default=None)
    total_cases: int = field(default=0)
    passed: bool = field(default=True)
    reason: str = field(default="")
    exception: str | None = field(default=None)
    bugnumber: str | None = field(default=None)
    cases: list[TestCase] = field(factory=list)
    start_time: float | None = field(default=None)
    end_time: float | None = field(default=None)
    state: ExecutionState = field(default=ExecutionState.NOT_RUN)

    @classmethod
    def from_path(cls, path: Path) -> "TestFile":
        return cls(name=path.name, file_path=path)

    @property
    def duration(self) -> float | None:
        if self.start_time is None or self.end_time is None:
            return None
        return self.end_time - self.start_time

    @property
    def failed_cases(self) -> list[TestCase]:
        return [case for case in self.cases if case.failed]

    def transition(self, new_state: ExecutionState) -> None:
        """Moves the file to `new_state`, rejecting transitions the lifecycle does not allow."""
        if new_state not in _TRANSITIONS[self.state]:
            raise ValueError(
                f"Invalid state transition for '{self.name}': "
                f"{self.state.name} -> {new_state.name}"
            )
        log.debug(
            "Test file state changed",
            file=self.name,
            old_state=self.state.name,
            new_state=new_state.name,
        )
        self.state = new_state


@mutable(slots=True)
class TestSuite:
    """
    Aggregate over many test files.

    `passed` is monotonic: `mark_failed` is the only writer and it never sets
    the flag back to True. The lock makes the write safe when files of the
    same suite run concurrently.
    """

    __test__ = False

    name: str = field()
    files: list[TestFile] = field(factory=list)
    passed: bool = field(default=True)
    _lock: threading.Lock = field(factory=threading.Lock, init=False, repr=False, eq=False)

    def mark_failed(self) -> None:
        with self._lock:
            if self.passed:
                log.info("Suite marked as failed", suite=self.name)
            self.passed = False

    @property
    def failed_files(self) -> list[TestFile]:
        return [f for f in self.files if not f.passed]


# 🔼⚙️
