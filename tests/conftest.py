import sys
from collections.abc import Sequence
from pathlib import Path

import pytest

from refenv.config import DriverConfig, GlobalConfig, RefEnvConfig
from refenv.execution import ProcessResult
from refenv.records import TestFile, TestSuite

FAKE_SHELL = """\
import sys

# Mimics `js -f helper.js -f test.js`: prints the test file, exits with the
# code found on a `#exit N` first line.
path = sys.argv[-1]
with open(path, encoding="utf-8") as fh:
    body = fh.read()
code = 0
first = body.splitlines()[0] if body else ""
if first.startswith("#exit "):
    code = int(first.split()[1])
    body = body.split("\\n", 1)[1] if "\\n" in body else ""
sys.stdout.write(body)
sys.stderr.write("stderr of " + path)
sys.exit(code)
"""


def make_case(
    passed: str = "true",
    name: str = "foo",
    expected: str = "1",
    actual: str = "1",
    description: str = "d",
    reason: str = "r",
    bugnumber: str = "b",
) -> list[str]:
    return [
        "<#TEST CASE PASSED>",
        passed,
        "<#TEST CASE NAME>",
        name,
        "<#TEST CASE EXPECTED>",
        expected,
        "<#TEST CASE ACTUAL>",
        actual,
        "<#TEST CASE DESCRIPTION>",
        description,
        "<#TEST CASE REASON>",
        reason,
        "<#TEST CASE BUGNUMBER>",
        bugnumber,
    ]


def make_stream(cases: Sequence[list[str]], declared: int | None = None, preamble: str = "") -> str:
    lines: list[str] = preamble.splitlines()
    lines.append("<#TEST CASES SIZE>")
    lines.append(str(len(cases) if declared is None else declared))
    for case in cases:
        lines.extend(case)
    lines.append("<#TEST CASES DONE>")
    return "\n".join(lines) + "\n"


class FakeRunner:
    """ProcessRunner returning canned output and recording commands."""

    def __init__(self, stdout: str = "", stderr: str = "", exit_code: int = 0, error: Exception | None = None):
        self.stdout = stdout
        self.stderr = stderr
        self.exit_code = exit_code
        self.error = error
        self.commands: list[list[str]] = []

    async def run(self, command: list[str]) -> ProcessResult:
        self.commands.append(command)
        if self.error is not None:
            raise self.error
        return ProcessResult(
            exit_code=self.exit_code,
            stdout=self.stdout.encode("utf-8"),
            stderr=self.stderr.encode("utf-8"),
            started_at=10.0,
            finished_at=12.5,
        )


@pytest.fixture
def direct_file() -> TestFile:
    return TestFile(name="t.js", file_path=Path("suite/t.js"))


@pytest.fixture
def negative_file() -> TestFile:
    return TestFile(name="t-n.js", file_path=Path("suite/t-n.js"))


@pytest.fixture
def suite() -> TestSuite:
    return TestSuite(name="suite")


@pytest.fixture
def driver_config() -> DriverConfig:
    return DriverConfig(executable="js", helper_functions="shell.js")


@pytest.fixture
def fake_shell(tmp_path: Path) -> Path:
    """An executable that behaves like the reference shell for the tests."""
    if sys.platform == "win32":
        pytest.skip("Fake shell script requires a POSIX shebang")
    script = tmp_path / "fake_js"
    script.write_text(f"#!{sys.executable}\n{FAKE_SHELL}", encoding="utf-8")
    script.chmod(0o755)
    return script


@pytest.fixture
def shell_config(fake_shell: Path, tmp_path: Path) -> RefEnvConfig:
    helper = tmp_path / "shell.js"
    helper.write_text("// helper functions\n", encoding="utf-8")
    return RefEnvConfig(
        driver=DriverConfig(executable=str(fake_shell), helper_functions=str(helper)),
        global_config=GlobalConfig(),
    )
