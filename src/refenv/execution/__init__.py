#
# src/refenv/execution/__init__.py
#
"""
Process execution facade for the interpreter under test.
"""
from .factory import get_process_runner
from .protocols import ProcessResult, ProcessRunner, build_command
from .subprocess_runner import CoverageProcessRunner, SubprocessProcessRunner

__all__ = [
    "CoverageProcessRunner",
    "ProcessResult",
    "ProcessRunner",
    "SubprocessProcessRunner",
    "build_command",
    "get_process_runner",
]

# 🔼⚙️
