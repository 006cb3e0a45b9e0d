# src/refenv/cli/run_cmds.py

import asyncio
from pathlib import Path

import attrs
import click
import structlog
from rich.console import Console

from refenv.cli.report import render_summary
from refenv.cli.utils import config_path_option, configure_logging, logging_options
from refenv.config import load_config
from refenv.driver import RefDriver
from refenv.exceptions import ConfigurationError
from refenv.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.run")


@click.command(name="run")
@click.argument(
    "suite_dirs",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@config_path_option
@click.option("-e", "--executable", default=None, help="Reference shell executable.")
@click.option("-f", "--helper-functions", default=None, help="Helper script loaded before each test.")
@click.option("-j", "--concurrency", type=click.IntRange(min=1), default=None, help="Files run in parallel per suite.")
@click.option("--coverage", is_flag=True, default=False, help="Run the shell under the coverage wrapper.")
@logging_options
@click.pass_context
def run_cli(
    ctx: click.Context,
    suite_dirs: tuple[Path, ...],
    config_path: Path | None,
    executable: str | None,
    helper_functions: str | None,
    concurrency: int | None,
    coverage: bool,
    **kwargs,
):
    """Run every test file of the given suite directories."""
    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        click.echo(f"Error: Configuration problem: {e}", err=True)
        ctx.exit(2)

    configure_logging(ctx, kwargs, default_level=config.global_config.log_level)

    overrides = {
        "executable": executable,
        "helper_functions": helper_functions,
        "concurrency": concurrency,
        "runner": "coverage" if coverage else None,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides:
        config = attrs.evolve(config, driver=attrs.evolve(config.driver, **overrides))
        log.debug("Applied command line overrides", **overrides)

    try:
        driver = RefDriver(config)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(2)

    suites = [driver.discover(path) for path in suite_dirs]
    summary = asyncio.run(driver.run_suites(suites))

    render_summary(Console(), summary)
    ctx.exit(0 if summary.passed else 1)

# 🔼⚙️
