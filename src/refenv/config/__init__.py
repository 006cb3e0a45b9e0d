#
# config/__init__.py
#
"""
Configuration handling sub-package for refenv.

Exports the loading function and core configuration models.
"""

from .loader import config_from_mapping, load_config
from .models import DriverConfig, GlobalConfig, RefEnvConfig

__all__ = [
    "DriverConfig",
    "GlobalConfig",
    "RefEnvConfig",
    "config_from_mapping",
    "load_config",
]

# 🔼⚙️
