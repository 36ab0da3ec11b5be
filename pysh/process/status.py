"""
Exit Status Module

Exit statuses are plain signed integers throughout pysh: 0 is success,
anything else is failure. The constants below are the statuses the
executor produces itself; everything else is a program's own exit code.

Author: YSNRFD
Version: 1.0.0
"""

import os
from enum import Enum, auto


SUCCESS = 0
FAILURE = 1

# Evaluating a missing node
INVALID_NODE = -1

# Unknown operator tag; never produced by a running program
SHELL_EXIT = -100


class ChildOutcome(Enum):
    """How a reaped child process ended."""

    EXITED = auto()
    """Child called exit() / returned from main."""

    SIGNALED = auto()
    """Child was killed by a signal."""

    UNKNOWN = auto()
    """Status word that is neither of the above."""


def classify_wait_status(status: int) -> ChildOutcome:
    """Classify a raw waitpid() status word."""
    if os.WIFEXITED(status):
        return ChildOutcome.EXITED
    if os.WIFSIGNALED(status):
        return ChildOutcome.SIGNALED
    return ChildOutcome.UNKNOWN


def decode_wait_status(status: int, signal_base: int = 128) -> int:
    """
    Turn a raw waitpid() status word into an exit status.

    Args:
        status: Status word returned by os.waitpid
        signal_base: Offset added to the signal number for killed children

    Returns:
        The child's exit code, ``signal_base + signum`` for signal death,
        or ``signal_base`` when the status word cannot be interpreted.
    """
    outcome = classify_wait_status(status)
    if outcome is ChildOutcome.EXITED:
        return os.WEXITSTATUS(status)
    if outcome is ChildOutcome.SIGNALED:
        return signal_base + os.WTERMSIG(status)
    return signal_base


def to_exit_code(status: int) -> int:
    """Truncate a status to what a process exit code can carry (0-255)."""
    return status & 0xFF
