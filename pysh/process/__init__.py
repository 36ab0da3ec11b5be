"""
pysh Process Module

Provides process lifecycle primitives:
- Exit status constants and wait-status decoding
- fork/exec/wait through ProcessLauncher
"""

from .status import (
    SUCCESS,
    FAILURE,
    INVALID_NODE,
    SHELL_EXIT,
    ChildOutcome,
    classify_wait_status,
    decode_wait_status,
    to_exit_code,
)
from .launcher import ProcessLauncher, flush_std_streams

__all__ = [
    # Status
    'SUCCESS',
    'FAILURE',
    'INVALID_NODE',
    'SHELL_EXIT',
    'ChildOutcome',
    'classify_wait_status',
    'decode_wait_status',
    'to_exit_code',
    # Launcher
    'ProcessLauncher',
    'flush_std_streams',
]
