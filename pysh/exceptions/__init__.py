"""
pysh Exception Hierarchy

Architecture:
    ShellException
    ├── TreeFormatError
    ├── ConfigLoadError
    ├── ConfigValidationError
    └── RedirectionError
    ProcessException
    ├── ForkError
    ├── ExecError
    └── WaitError
    IPCException
    └── PipeError

None of these cross a process boundary. The evaluator turns them into
integer exit statuses at the operator that observed them.
"""

from .shell_exceptions import (
    ShellException,
    TreeFormatError,
    ConfigLoadError,
    ConfigValidationError,
    RedirectionError,
)

from .process_exceptions import (
    ProcessException,
    ForkError,
    ExecError,
    WaitError,
)

from .ipc_exceptions import (
    IPCException,
    PipeError,
)

__all__ = [
    # Shell exceptions
    "ShellException",
    "TreeFormatError",
    "ConfigLoadError",
    "ConfigValidationError",
    "RedirectionError",
    # Process exceptions
    "ProcessException",
    "ForkError",
    "ExecError",
    "WaitError",
    # IPC exceptions
    "IPCException",
    "PipeError",
]
