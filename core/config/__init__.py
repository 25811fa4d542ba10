"""
Runtime Configuration Module

Provides configuration loading for hashing, leaf encoding and logging.
"""

from .runtime import ENV_PREFIX, RuntimeConfig

__all__ = [
    "ENV_PREFIX",
    "RuntimeConfig",
]
