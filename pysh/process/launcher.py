"""
Process Launcher Module

Thin layer over the OS process primitives used by the executor:
- fork() with standard stream flushing
- running a callable in a child and exiting with its status
- exec() of an external program
- blocking wait on one specific child

Author: YSNRFD
Version: 1.0.0
"""

import os
import sys
from typing import Any, Callable, NoReturn, Optional, Sequence

from .status import decode_wait_status, to_exit_code
from pysh.core.config_loader import ExecutorConfig, get_config
from pysh.exceptions import ForkError, ExecError, WaitError
from pysh.logger import get_logger


def flush_std_streams() -> None:
    """Flush Python-level stdout/stderr buffers."""
    for stream in (sys.stdout, sys.stderr):
        if stream is not None and not stream.closed:
            stream.flush()


class ProcessLauncher:
    """
    Creates, replaces and reaps OS processes.

    A child created through :meth:`spawn` always leaves through
    ``os._exit``; it never unwinds into the caller's stack, atexit
    handlers or a test runner.

    Example:
        >>> launcher = ProcessLauncher()
        >>> pid = launcher.spawn(lambda: 3)
        >>> launcher.wait(pid)
        3
    """

    def __init__(self, config: Optional[ExecutorConfig] = None):
        self._config = config or get_config().executor
        self._logger = get_logger('process')

    @property
    def config(self) -> ExecutorConfig:
        return self._config

    def fork(self) -> int:
        """
        Fork the current process.

        Returns:
            0 in the child, the child's PID in the parent

        Raises:
            ForkError: If the OS refuses to create the process
        """
        flush_std_streams()
        try:
            pid = os.fork()
        except OSError as e:
            self._logger.error(f"fork failed: {e.strerror}", pid=os.getpid())
            raise ForkError(f"fork failed: {e.strerror}", parent_pid=os.getpid()) from e

        if pid:
            self._logger.debug("Forked child", pid=pid)
        return pid

    def spawn(self, target: Callable[..., int], *args: Any) -> int:
        """
        Run ``target(*args)`` in a new child process.

        The child exits with the callable's return value. An exception
        escaping the callable exits the child with the internal error
        status instead.

        Returns:
            PID of the child (only ever returns in the parent)
        """
        pid = self.fork()
        if pid == 0:
            status = self._config.internal_error_status
            try:
                status = target(*args)
            except Exception as e:
                self._logger.exception(
                    f"Child raised {type(e).__name__}", exc=e, pid=os.getpid()
                )
            finally:
                self.exit(status)
        return pid

    def exec(self, file: str, argv: Sequence[str]) -> NoReturn:
        """
        Replace the current program image, searching PATH for ``file``.

        Raises:
            ExecError: If the program cannot be executed
        """
        try:
            os.execvp(file, list(argv))
        except OSError as e:
            not_found = isinstance(e, (FileNotFoundError, NotADirectoryError))
            raise ExecError(
                f"{file}: {e.strerror}",
                pid=os.getpid(),
                path=file,
                not_found=not_found
            ) from e

    def exec_or_exit(self, file: str, argv: Sequence[str]) -> NoReturn:
        """Replace the program image; on failure exit with the exec status."""
        try:
            self.exec(file, argv)
        except ExecError as e:
            self._logger.warning(str(e), pid=e.pid, context={'path': e.path})
            if e.not_found:
                self.exit(self._config.exec_not_found_status)
            self.exit(self._config.exec_failure_status)

    def wait(self, pid: int) -> int:
        """
        Block until child ``pid`` terminates and return its exit status.

        Raises:
            WaitError: If ``pid`` is not a child of this process
        """
        try:
            _, raw_status = os.waitpid(pid, 0)
        except ChildProcessError as e:
            raise WaitError(f"waitpid failed: {e.strerror}", pid=pid) from e

        status = decode_wait_status(raw_status, self._config.signal_status_base)
        self._logger.debug("Reaped child", pid=pid, context={'status': status})
        return status

    def exit(self, status: int) -> NoReturn:
        """Terminate the current process immediately with ``status``."""
        flush_std_streams()
        os._exit(to_exit_code(status))
