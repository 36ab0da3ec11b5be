"""
Pipe Module

An anonymous unidirectional OS pipe connecting two pipeline stages.

Author: YSNRFD
Version: 1.0.0
"""

import os
from dataclasses import dataclass
from typing import Optional

from pysh.exceptions import PipeError
from pysh.logger import get_logger


_logger = get_logger('ipc')


@dataclass
class Pipe:
    """
    A pipe for one-way communication between two processes.

    Both descriptors are non-inheritable, as returned by ``os.pipe``;
    only copies made with :meth:`attach_read` / :meth:`attach_write`
    onto a standard slot survive exec().

    Example:
        >>> pipe = Pipe.create()
        >>> pipe.close()
    """
    read_fd: Optional[int] = None
    write_fd: Optional[int] = None

    @classmethod
    def create(cls) -> 'Pipe':
        """
        Create a new anonymous pipe.

        Raises:
            PipeError: If the OS cannot allocate the pipe
        """
        try:
            read_fd, write_fd = os.pipe()
        except OSError as e:
            raise PipeError(f"Cannot create pipe: {e.strerror}") from e

        _logger.debug("Created pipe", context={'read_fd': read_fd, 'write_fd': write_fd})
        return cls(read_fd=read_fd, write_fd=write_fd)

    @property
    def closed(self) -> bool:
        return self.read_fd is None and self.write_fd is None

    def close_read(self) -> None:
        """Close the read end if still open."""
        if self.read_fd is not None:
            os.close(self.read_fd)
            self.read_fd = None

    def close_write(self) -> None:
        """Close the write end if still open."""
        if self.write_fd is not None:
            os.close(self.write_fd)
            self.write_fd = None

    def close(self) -> None:
        """Close both ends."""
        self.close_read()
        self.close_write()

    def attach_write(self, slot: int) -> None:
        """
        Make ``slot`` (usually stdout) the write end of the pipe.

        Closes the read end first, then the original write descriptor,
        leaving only ``slot`` connected to the pipe in this process.
        """
        if self.write_fd is None:
            raise PipeError("Write end already closed", read_fd=self.read_fd)
        self.close_read()
        os.dup2(self.write_fd, slot)
        if self.write_fd != slot:
            self.close_write()
        else:
            self.write_fd = None

    def attach_read(self, slot: int) -> None:
        """
        Make ``slot`` (usually stdin) the read end of the pipe.

        Closes the write end first so that end-of-stream is observed once
        every writer has terminated.
        """
        if self.read_fd is None:
            raise PipeError("Read end already closed", write_fd=self.write_fd)
        self.close_write()
        os.dup2(self.read_fd, slot)
        if self.read_fd != slot:
            self.close_read()
        else:
            self.read_fd = None
