#
# src/refenv/execution/factory.py
#
"""
Factory for creating ProcessRunner instances.
"""
from collections.abc import Sequence

import structlog

from refenv.exceptions import ConfigurationError
from refenv.execution.protocols import ProcessRunner
from refenv.execution.subprocess_runner import (
    DEFAULT_COVERAGE_COMMAND,
    CoverageProcessRunner,
    SubprocessProcessRunner,
)

log = structlog.get_logger("execution.factory")

RUNNER_MAP = {
    "subprocess": SubprocessProcessRunner,
    "coverage": CoverageProcessRunner,
}


def get_process_runner(
    runner_name: str,
    coverage_command: Sequence[str] = DEFAULT_COVERAGE_COMMAND,
) -> ProcessRunner:
    """
    Factory function to get an instance of a ProcessRunner.
    """
    runner_key = runner_name.lower()
    runner_class = RUNNER_MAP.get(runner_key)

    if not runner_class:
        log.error("Unsupported process runner specified", runner=runner_name)
        raise ConfigurationError(
            f"Unsupported process runner: '{runner_name}'. "
            f"Available runners: {list(RUNNER_MAP.keys())}"
        )

    log.debug("Instantiating process runner", runner=runner_name)
    if runner_class is CoverageProcessRunner:
        return CoverageProcessRunner(coverage_command)
    return runner_class()

# 🔼⚙️
