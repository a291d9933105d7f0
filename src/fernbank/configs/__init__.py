"""Configuration system for survey profiles."""

# Submodules are available for import but not loaded at package level
# Import submodules explicitly when needed:
#   from fernbank.configs.base import BaseConfig
#   from fernbank.configs.ferns import FernConfig

__all__ = [
    "base",
    "config_loader",
    "ferns",
]
