# src/refenv/cli/parse_cmds.py

from pathlib import Path

import click
import structlog
from rich.console import Console

from refenv.cli.report import render_file
from refenv.cli.utils import configure_logging, logging_options
from refenv.grading import DEFAULT_NEGATIVE_SUFFIX, ResultGrader
from refenv.protocol import parse_output
from refenv.records import ExecutionState, TestFile, TestSuite
from refenv.telemetry import StructLogger, log_sink

log: StructLogger = structlog.get_logger("cli.parse")


@click.command(name="parse")
@click.argument(
    "output_file",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path),
)
@click.option("-n", "--name", default=None, help="Test file name used for grading (defaults to the output file name).")
@click.option("--exit-code", type=int, default=0, show_default=True, help="Exit code the shell returned.")
@click.option(
    "--negative-suffix",
    default=DEFAULT_NEGATIVE_SUFFIX,
    show_default=True,
    help="File name suffix marking tests that are expected to fail.",
)
@logging_options
@click.pass_context
def parse_cli(
    ctx: click.Context,
    output_file: Path,
    name: str | None,
    exit_code: int,
    negative_suffix: str,
    **kwargs,
):
    """Parse and grade captured shell output from OUTPUT_FILE."""
    configure_logging(ctx, kwargs, default_level="WARNING")

    file = TestFile(name=name or output_file.name, file_path=output_file)
    suite = TestSuite(name=output_file.parent.name)
    grader = ResultGrader(negative_suffix)

    text = output_file.read_text(encoding="utf-8", errors="replace")
    file.transition(ExecutionState.RUNNING)
    grader.grade_exit_code(file, suite, exit_code)
    result = parse_output(text, sink=log_sink(file=file.name))
    grader.grade_parse(file, suite, result)
    if not result.ok:
        file.exception = result.reason

    render_file(Console(), file)
    ctx.exit(0 if file.passed else 1)

# 🔼⚙️
