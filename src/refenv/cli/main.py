# src/refenv/cli/main.py

"""
Main CLI entry point for refenv using Click.
Handles global options like logging level.
"""

from importlib.metadata import PackageNotFoundError, version

import click
import structlog

from refenv.cli.config_cmds import config_cli
from refenv.cli.parse_cmds import parse_cli
from refenv.cli.run_cmds import run_cli
from refenv.cli.utils import LOGGING_KEY, LoggingSettings, logging_options
from refenv.telemetry import StructLogger

try:
    __version__ = version("refenv")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

log: StructLogger = structlog.get_logger("cli.main")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", package_name="refenv")
@logging_options
@click.pass_context
def cli(
    ctx: click.Context,
    log_level: str | None,
    log_file: str | None,
    json_logs: bool | None,
):
    """
    Refenv: run test scripts in a reference interpreter shell.

    Parses the tagged test case output of each script and grades files and
    suites, treating '-n.js' scripts as expected failures.
    Configuration precedence: CLI options > Environment Variables > Config File > Defaults.
    """
    ctx.ensure_object(dict)

    ctx.obj[LOGGING_KEY] = LoggingSettings(level=log_level, file=log_file, json=json_logs)


cli.add_command(config_cli)
cli.add_command(parse_cli)
cli.add_command(run_cli)

if __name__ == "__main__":
    cli()

# 🖥️⚙️
