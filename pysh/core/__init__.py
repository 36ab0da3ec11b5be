"""
pysh Core Module

Configuration shared by every executor component.
"""

from .config_loader import (
    Config,
    ConfigLoader,
    ExecutorConfig,
    LoggingConfig,
    get_config,
)

__all__ = [
    'Config',
    'ConfigLoader',
    'ExecutorConfig',
    'LoggingConfig',
    'get_config',
]
