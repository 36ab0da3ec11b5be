"""
I/O Redirection Module

Decides which files a simple command's standard descriptors are bound to
and performs the binding in the child process before exec().

Author: YSNRFD
Version: 1.0.0
"""

import fcntl
import os
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from .command import IOFlag, SimpleCommand
from .resolver import WordResolver
from pysh.exceptions import RedirectionError
from pysh.logger import get_logger


STDIN_FILENO = 0
STDOUT_FILENO = 1
STDERR_FILENO = 2

_logger = get_logger('redirect')


class OpenMode(Enum):
    """How a redirection target is opened."""
    READ = os.O_RDONLY
    TRUNCATE = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
    APPEND = os.O_WRONLY | os.O_CREAT | os.O_APPEND


@dataclass(frozen=True)
class Redirection:
    """One file bound to one or more standard descriptor slots."""
    path: str
    mode: OpenMode
    slots: Tuple[int, ...]


def plan_redirections(cmd: SimpleCommand, resolver: WordResolver) -> List[Redirection]:
    """
    Resolve the redirections of ``cmd`` into an ordered plan.

    Input redirection is independent of the rest. Output and error
    redirections follow a first-match rule list:

    1. ``out`` with OUT_APPEND          -> append to out on stdout
    2. ``err`` with ERR_APPEND          -> append to err on stderr
    3. ``out`` and ``err``, same path   -> one truncated file on both
    4. ``out`` and ``err``, different   -> each truncated on its slot
    5. ``out`` only                     -> truncate out on stdout
    6. ``err`` only                     -> truncate err on stderr

    Paths are compared after resolution.
    """
    plan: List[Redirection] = []

    in_path = resolver.expand_word(cmd.in_)
    if in_path is not None:
        plan.append(Redirection(in_path, OpenMode.READ, (STDIN_FILENO,)))

    out_path = resolver.expand_word(cmd.out)
    err_path = resolver.expand_word(cmd.err)

    if out_path is not None and IOFlag.OUT_APPEND in cmd.io_flags:
        plan.append(Redirection(out_path, OpenMode.APPEND, (STDOUT_FILENO,)))
    elif err_path is not None and IOFlag.ERR_APPEND in cmd.io_flags:
        plan.append(Redirection(err_path, OpenMode.APPEND, (STDERR_FILENO,)))
    elif out_path is not None and err_path is not None:
        if out_path == err_path:
            plan.append(Redirection(out_path, OpenMode.TRUNCATE, (STDOUT_FILENO, STDERR_FILENO)))
        else:
            plan.append(Redirection(out_path, OpenMode.TRUNCATE, (STDOUT_FILENO,)))
            plan.append(Redirection(err_path, OpenMode.TRUNCATE, (STDERR_FILENO,)))
    elif out_path is not None:
        plan.append(Redirection(out_path, OpenMode.TRUNCATE, (STDOUT_FILENO,)))
    elif err_path is not None:
        plan.append(Redirection(err_path, OpenMode.TRUNCATE, (STDERR_FILENO,)))

    return plan


def _open_target(redirection: Redirection, file_mode: int) -> int:
    fd = os.open(redirection.path, redirection.mode.value, file_mode)
    # Keep the descriptor clear of the standard slots until dup2 time
    if fd <= STDERR_FILENO:
        high_fd = fcntl.fcntl(fd, fcntl.F_DUPFD_CLOEXEC, STDERR_FILENO + 1)
        os.close(fd)
        fd = high_fd
    return fd


def apply_redirections(plan: List[Redirection], file_mode: int = 0o644) -> None:
    """
    Open every target of ``plan`` and bind it to its standard slots.

    All files are opened before any slot is touched, so a failure leaves
    stdin/stdout/stderr as they were. Each opened descriptor is closed
    once duplicated.

    Raises:
        RedirectionError: If a target cannot be opened
    """
    opened: List[Tuple[int, Redirection]] = []
    for redirection in plan:
        try:
            fd = _open_target(redirection, file_mode)
        except OSError as e:
            for fd, _ in opened:
                os.close(fd)
            _logger.warning(
                f"Cannot open {redirection.path}: {e.strerror}",
                pid=os.getpid(),
                context={'mode': redirection.mode.name}
            )
            raise RedirectionError(
                f"{redirection.path}: {e.strerror}",
                path=redirection.path
            ) from e
        opened.append((fd, redirection))

    for fd, redirection in opened:
        for slot in redirection.slots:
            os.dup2(fd, slot)
        os.close(fd)


def truncate_target(path: str, file_mode: int = 0o644) -> None:
    """
    Create or empty ``path`` without writing to it.

    Raises:
        RedirectionError: If the file cannot be opened
    """
    try:
        fd = os.open(path, OpenMode.TRUNCATE.value, file_mode)
    except OSError as e:
        raise RedirectionError(f"{path}: {e.strerror}", path=path) from e
    os.close(fd)
