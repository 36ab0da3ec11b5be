"""
Shell Exceptions

Exceptions raised while loading configuration, decoding command trees and
preparing I/O redirections for a simple command.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class ShellException(Exception):
    """
    Base exception for all shell-level errors.

    Attributes:
        message: Human-readable error description
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error

    Example:
        >>> raise ShellException("Evaluation failed", error_code=1000)
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or 1000
        self.context = context or {}

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({context_str})"
        return base

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code})"
        )


class TreeFormatError(ShellException):
    """
    A serialized command tree could not be decoded.

    Raised by ``CommandNode.from_dict`` when a node has an unknown
    operator, a leaf lacks its verb, or a word has the wrong shape.

    Example:
        >>> raise TreeFormatError("Unknown operator: XOR", path="root.left")
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(
            message=message,
            error_code=1001,
            context=ctx
        )
        self.path = path


class ConfigLoadError(ShellException):
    """
    The configuration file is missing, unreadable or not valid JSON.

    Example:
        >>> raise ConfigLoadError("Configuration file not found", path="pysh.json")
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(
            message=message,
            error_code=1002,
            context=ctx
        )
        self.path = path


class ConfigValidationError(ShellException):
    """Raised when a configuration key or value is invalid."""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        super().__init__(
            message=message,
            error_code=1003,
            context=ctx
        )
        self.key = key


class RedirectionError(ShellException):
    """
    A redirection target could not be opened.

    Raised in the child process before the program image is replaced.
    The child converts it into an exit status; it never reaches the
    parent as an exception.

    Example:
        >>> raise RedirectionError("Permission denied", path="/etc/shadow")
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(
            message=message,
            error_code=1004,
            context=ctx
        )
        self.path = path
