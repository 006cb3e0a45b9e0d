# src/refenv/cli/report.py

"""
Rich renderings of graded suites and files for the CLI.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from refenv.driver import DriverSummary
from refenv.records import TestFile

_PASS = "[green]PASS[/green]"
_FAIL = "[red]FAIL[/red]"


def _mark(passed: bool) -> str:
    return _PASS if passed else _FAIL


def render_summary(console: Console, summary: DriverSummary) -> None:
    table = Table(title="refenv results")
    table.add_column("Suite")
    table.add_column("Files", justify="right")
    table.add_column("Failed", justify="right")
    table.add_column("Result")
    for suite in summary.suites:
        table.add_row(escape(suite.name), str(len(suite.files)), str(len(suite.failed_files)), _mark(suite.passed))
    console.print(table)

    for suite in summary.suites:
        for file in suite.failed_files:
            console.print(f"{_FAIL} {escape(suite.name)}/{escape(file.name)}")
            if file.reason:
                console.print(f"  reason: {file.reason}", markup=False)
            if file.exception:
                console.print(f"  exception: {file.exception.strip()}", markup=False)
            for case in file.failed_cases:
                console.print(f"  case: {case.name} ({case.reason})", markup=False)

    console.print(
        f"{summary.total_files} files, {summary.total_cases} cases, "
        f"{len(summary.failed_files)} failed files: {_mark(summary.passed)}"
    )


def render_file(console: Console, file: TestFile) -> None:
    table = Table(title=escape(file.name))
    table.add_column("#", justify="right")
    table.add_column("Passed")
    table.add_column("Name")
    table.add_column("Expected")
    table.add_column("Actual")
    table.add_column("Reason")
    for index, case in enumerate(file.cases, start=1):
        table.add_row(
            str(index),
            _mark(not case.failed),
            escape(case.name),
            escape(case.expected),
            escape(case.actual),
            escape(case.reason),
        )
    console.print(table)
    console.print(
        f"declared cases: {file.total_cases}, parsed: {len(file.cases)}, "
        f"bugnumber: {file.bugnumber or '-'}",
        markup=False,
    )
    if file.reason:
        console.print(f"reason: {file.reason}", markup=False)
    if file.exception:
        console.print(f"exception: {file.exception.strip()}", markup=False)
    console.print(f"file result: {_mark(file.passed)}")

# 🔼⚙️
