# src/refenv/driver.py

"""
Runs whole suites of test files through the reference environment.

Each suite is a directory of test scripts. Files of one suite may run
concurrently; every execution works on its own TestFile and only shares the
suite's monotonic `passed` flag.
"""

import asyncio
from collections.abc import Iterable, Sequence
from pathlib import Path

import structlog
from attrs import define, field

from refenv.config import RefEnvConfig
from refenv.environment import RefEnv
from refenv.execution import ProcessRunner, get_process_runner
from refenv.protocol.parser import DiagnosticSink
from refenv.records import TestFile, TestSuite
from refenv.telemetry import StructLogger

log: StructLogger = structlog.get_logger("driver")


def discover_suite(path: Path, pattern: str = "*.js", exclude: Iterable[str] = ()) -> TestSuite:
    """Collects the test files of a suite directory in sorted order."""
    excluded = set(exclude)
    files = [
        TestFile.from_path(p)
        for p in sorted(path.glob(pattern))
        if p.is_file() and p.name not in excluded
    ]
    log.debug("Discovered test files", suite=path.name, count=len(files))
    return TestSuite(name=path.name, files=files)


@define(frozen=True, slots=True)
class DriverSummary:
    """Outcome of a driver run over one or more suites."""
    suites: tuple[TestSuite, ...] = field(converter=tuple)

    @property
    def passed(self) -> bool:
        return all(suite.passed for suite in self.suites)

    @property
    def total_files(self) -> int:
        return sum(len(suite.files) for suite in self.suites)

    @property
    def failed_files(self) -> list[TestFile]:
        return [f for suite in self.suites for f in suite.failed_files]

    @property
    def total_cases(self) -> int:
        return sum(len(f.cases) for suite in self.suites for f in suite.files)


class RefDriver:
    """Runs test files with the configured reference shell."""

    def __init__(
        self,
        config: RefEnvConfig,
        runner: ProcessRunner | None = None,
        sink: DiagnosticSink | None = None,
    ):
        self.config = config
        self.runner = runner or get_process_runner(
            config.driver.runner, coverage_command=config.driver.coverage_command
        )
        self.sink = sink
        log.debug(
            "RefDriver initialized",
            executable=config.driver.executable,
            runner=type(self.runner).__name__,
            concurrency=config.driver.concurrency,
        )

    def discover(self, path: Path) -> TestSuite:
        return discover_suite(path, self.config.driver.file_pattern, self.config.driver.exclude)

    async def run_file(self, file: TestFile, suite: TestSuite) -> TestFile:
        env = RefEnv(file, suite, self.config.driver, self.runner, sink=self.sink)
        try:
            await env.run_test()
        finally:
            env.close()
        return file

    async def run_suite(self, suite: TestSuite) -> TestSuite:
        """Runs every file of `suite`, at most `concurrency` at a time."""
        suite_log = log.bind(suite=suite.name, files=len(suite.files))
        suite_log.info("Running suite", emoji_key="run")
        semaphore = asyncio.Semaphore(self.config.driver.concurrency)

        async def _bounded(file: TestFile) -> TestFile:
            async with semaphore:
                return await self.run_file(file, suite)

        await asyncio.gather(*(_bounded(f) for f in suite.files))

        suite_log.info(
            "Suite finished",
            passed=suite.passed,
            failed_files=len(suite.failed_files),
            emoji_key="pass" if suite.passed else "fail",
        )
        return suite

    async def run_suites(self, suites: Sequence[TestSuite]) -> DriverSummary:
        for suite in suites:
            await self.run_suite(suite)
        return DriverSummary(suites=suites)


# 🔼⚙️
