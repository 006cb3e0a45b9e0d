#
# tests/unit/test_environment.py
#
"""
Tests for RefEnv, the single-file execution environment.
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from conftest import FakeRunner, make_case, make_stream

from refenv.config import DriverConfig
from refenv.environment import RefEnv
from refenv.exceptions import CaptureError, LaunchError
from refenv.execution import SubprocessProcessRunner
from refenv.grading import UNKNOWN_PROCESS_EXCEPTION
from refenv.records import ExecutionState, TestFile, TestSuite


@pytest.mark.asyncio
class TestRefEnv:
    async def test_passing_file(self, direct_file: TestFile, suite: TestSuite, driver_config: DriverConfig) -> None:
        runner = FakeRunner(stdout=make_stream([make_case()]))
        env = RefEnv(direct_file, suite, driver_config, runner, sink=MagicMock())

        await env.run_test()

        assert runner.commands == [["js", "-f", "shell.js", "-f", str(Path("suite/t.js"))]]
        assert direct_file.passed is True
        assert suite.passed is True
        assert direct_file.total_cases == 1
        assert direct_file.start_time == 10.0
        assert direct_file.end_time == 12.5
        assert direct_file.duration == 2.5
        assert direct_file.state is ExecutionState.GRADED

    async def test_failing_case_direct(self, direct_file: TestFile, suite: TestSuite, driver_config: DriverConfig) -> None:
        runner = FakeRunner(stdout=make_stream([make_case(passed="false")]))

        await RefEnv(direct_file, suite, driver_config, runner).run_test()

        assert direct_file.passed is False
        assert suite.passed is False

    async def test_failing_case_negative(
        self, negative_file: TestFile, suite: TestSuite, driver_config: DriverConfig
    ) -> None:
        runner = FakeRunner(stdout=make_stream([make_case(passed="false")]))

        await RefEnv(negative_file, suite, driver_config, runner).run_test()

        assert negative_file.passed is True
        assert suite.passed is True

    async def test_crash_records_stderr(self, direct_file: TestFile, suite: TestSuite, driver_config: DriverConfig) -> None:
        runner = FakeRunner(stdout="", stderr="t.js:3: SyntaxError", exit_code=3)

        await RefEnv(direct_file, suite, driver_config, runner).run_test()

        assert direct_file.passed is False
        assert suite.passed is False
        assert direct_file.exception == "t.js:3: SyntaxError"

    async def test_negative_crash_passes(self, negative_file: TestFile, suite: TestSuite, driver_config: DriverConfig) -> None:
        runner = FakeRunner(stdout="", stderr="uncaught exception", exit_code=3)

        await RefEnv(negative_file, suite, driver_config, runner).run_test()

        assert negative_file.passed is True
        assert suite.passed is True

    async def test_nonzero_exit_with_good_output(
        self, direct_file: TestFile, suite: TestSuite, driver_config: DriverConfig
    ) -> None:
        runner = FakeRunner(stdout=make_stream([make_case()]), exit_code=1)

        await RefEnv(direct_file, suite, driver_config, runner).run_test()

        assert direct_file.passed is False
        assert direct_file.exception is None
        assert len(direct_file.cases) == 1

    async def test_launch_error_is_graded(self, direct_file: TestFile, suite: TestSuite, driver_config: DriverConfig) -> None:
        runner = FakeRunner(error=LaunchError("Executable not found: 'js'"))
        sink = MagicMock()

        await RefEnv(direct_file, suite, driver_config, runner, sink=sink).run_test()

        assert direct_file.passed is False
        assert suite.passed is False
        assert direct_file.exception == UNKNOWN_PROCESS_EXCEPTION
        assert direct_file.state is ExecutionState.GRADED
        sink.assert_any_call("t.js")

    async def test_capture_error_is_graded(self, direct_file: TestFile, suite: TestSuite, driver_config: DriverConfig) -> None:
        runner = FakeRunner(error=CaptureError("pipe broke", partial_stderr=b"half"))

        await RefEnv(direct_file, suite, driver_config, runner).run_test()

        assert direct_file.passed is False
        assert direct_file.exception == "half"

    async def test_unexpected_runner_error_does_not_escape(
        self, direct_file: TestFile, suite: TestSuite, driver_config: DriverConfig
    ) -> None:
        runner = AsyncMock()
        runner.run.side_effect = RuntimeError("unexpected")

        await RefEnv(direct_file, suite, driver_config, runner).run_test()

        assert direct_file.passed is False
        assert direct_file.exception == UNKNOWN_PROCESS_EXCEPTION

    async def test_unexpected_runner_error_fails_negative_file(
        self, negative_file: TestFile, suite: TestSuite, driver_config: DriverConfig
    ) -> None:
        runner = AsyncMock()
        runner.run.side_effect = RuntimeError("unexpected")

        await RefEnv(negative_file, suite, driver_config, runner).run_test()

        assert negative_file.passed is False
        assert suite.passed is False
        assert negative_file.state is ExecutionState.GRADED

    async def test_grading_error_fails_negative_file(
        self, negative_file: TestFile, suite: TestSuite, driver_config: DriverConfig
    ) -> None:
        runner = FakeRunner(stdout=make_stream([make_case()]))
        env = RefEnv(negative_file, suite, driver_config, runner)
        env.grader.grade_exit_code = MagicMock(side_effect=AttributeError("broken grader"))

        await env.run_test()

        assert negative_file.passed is False
        assert suite.passed is False
        assert negative_file.exception == UNKNOWN_PROCESS_EXCEPTION

    async def test_launch_error_records_timestamps(
        self, direct_file: TestFile, suite: TestSuite, driver_config: DriverConfig
    ) -> None:
        runner = FakeRunner(error=LaunchError("Executable not found: 'js'"))

        await RefEnv(direct_file, suite, driver_config, runner).run_test()

        assert direct_file.start_time is not None
        assert direct_file.end_time is not None
        assert direct_file.end_time >= direct_file.start_time
        assert direct_file.duration is not None and direct_file.duration >= 0

    async def test_second_run_is_skipped(
        self, direct_file: TestFile, suite: TestSuite, driver_config: DriverConfig
    ) -> None:
        runner = FakeRunner(stdout=make_stream([make_case()]))
        env = RefEnv(direct_file, suite, driver_config, runner)

        await env.run_test()
        await env.run_test()

        assert len(runner.commands) == 1
        assert len(direct_file.cases) == 1
        assert direct_file.passed is True
        assert direct_file.state is ExecutionState.GRADED

    async def test_sink_receives_file_name_and_output(
        self, direct_file: TestFile, suite: TestSuite, driver_config: DriverConfig
    ) -> None:
        seen: list[str] = []
        runner = FakeRunner(stdout="banner\n" + make_stream([make_case()]))

        await RefEnv(direct_file, suite, driver_config, runner, sink=seen.append).run_test()

        assert seen[:3] == ["t.js", "banner", "<#TEST CASES SIZE>"]

    async def test_custom_negative_suffix(self, suite: TestSuite) -> None:
        file = TestFile(name="t.neg.js")
        config = DriverConfig(negative_suffix=".neg.js")
        runner = FakeRunner(stdout="", exit_code=1)

        await RefEnv(file, suite, config, runner).run_test()

        assert file.passed is True
        assert suite.passed is True

    async def test_real_process(self, tmp_path: Path, fake_shell: Path, suite: TestSuite) -> None:
        test_path = tmp_path / "real.js"
        test_path.write_text(make_stream([make_case(name="real")]), encoding="utf-8")
        config = DriverConfig(executable=str(fake_shell), helper_functions=str(tmp_path / "shell.js"))
        file = TestFile.from_path(test_path)

        await RefEnv(file, suite, config, SubprocessProcessRunner()).run_test()

        assert file.passed is True
        assert [c.name for c in file.cases] == ["real"]
        assert file.duration is not None and file.duration >= 0


def test_close_is_noop(direct_file: TestFile, suite: TestSuite, driver_config: DriverConfig) -> None:
    env = RefEnv(direct_file, suite, driver_config, FakeRunner())
    assert env.close() is None
