"""
Process Exceptions

Exceptions related to creating, replacing and reaping OS processes.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class ProcessException(Exception):
    """
    Base exception for all process-related errors.

    Attributes:
        message: Human-readable error description
        pid: Process ID associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
    """

    def __init__(
        self,
        message: str,
        pid: Optional[int] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.pid = pid
        self.error_code = error_code or 2000
        self.context = context or {}
        if pid is not None:
            self.context["pid"] = pid

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.pid is not None:
            base = f"{base} (pid={self.pid})"
        return base


class ForkError(ProcessException):
    """
    Error during the fork() system call.

    Common causes include:
    - Process limit exceeded (EAGAIN)
    - Memory allocation failure for the child (ENOMEM)

    Example:
        >>> raise ForkError("Resource temporarily unavailable", parent_pid=1)
    """

    def __init__(
        self,
        message: str,
        parent_pid: int,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            pid=parent_pid,
            error_code=2005,
            context=context
        )
        self.parent_pid = parent_pid


class ExecError(ProcessException):
    """
    Error during the exec() system call.

    Common causes include:
    - File not found
    - Permission denied
    - Invalid executable format

    Example:
        >>> raise ExecError("No such file or directory", pid=42, path="nosuchcmd")
    """

    def __init__(
        self,
        message: str,
        pid: int,
        path: Optional[str] = None,
        not_found: bool = False,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(
            message=message,
            pid=pid,
            error_code=2006,
            context=ctx
        )
        self.path = path
        self.not_found = not_found


class WaitError(ProcessException):
    """
    Error while waiting for a child process to terminate.

    Example:
        >>> raise WaitError("No child processes", pid=42)
    """

    def __init__(
        self,
        message: str,
        pid: int,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            pid=pid,
            error_code=2007,
            context=context
        )
