#
# src/refenv/telemetry/__init__.py
#
"""
Logging setup and the diagnostic sink used while parsing interpreter output.
"""
from .logger import StructLogger, log_sink, setup_logging

__all__ = [
    "StructLogger",
    "log_sink",
    "setup_logging",
]

# 🔼⚙️
