#
# src/refenv/telemetry/logger/__init__.py
#
from .base import StructLogger, log_sink, setup_logging

__all__ = ["StructLogger", "log_sink", "setup_logging"]

# 🔼⚙️
