"""
Shell Built-in Commands

Built-ins run inside the evaluating process, so their effects (working
directory, environment) are visible to everything that process runs or
forks afterwards, and to nothing already running.

Author: YSNRFD
Version: 1.0.0
"""

import os
from typing import Callable, Optional

from .command import SimpleCommand
from .redirect import truncate_target
from .resolver import WordResolver
from pysh.core.config_loader import ExecutorConfig
from pysh.exceptions import RedirectionError
from pysh.logger import get_logger
from pysh.process import FAILURE, SUCCESS, flush_std_streams


class BuiltinCommands:
    """
    Built-in shell commands.

    These commands are executed directly by the shell without
    creating a new process.
    """

    def __init__(self, resolver: WordResolver, config: ExecutorConfig):
        self._resolver = resolver
        self._config = config
        self._logger = get_logger('builtins')
        self._commands: dict[str, Callable[[SimpleCommand], int]] = {
            'cd': self.cmd_cd,
            'exit': self.cmd_exit,
            'quit': self.cmd_exit,
        }

    def get_commands(self) -> dict[str, Callable[[SimpleCommand], int]]:
        """Get all built-in commands."""
        return self._commands

    def is_builtin(self, name: str) -> bool:
        """Check if a command is built-in."""
        return name in self._commands

    def execute(self, name: str, cmd: SimpleCommand) -> int:
        """
        Execute a built-in command.

        Returns:
            Exit code (127 if ``name`` is not a built-in)
        """
        handler = self._commands.get(name)
        if handler is None:
            return self._config.exec_not_found_status
        return handler(cmd)

    @staticmethod
    def is_assignment(verb: str) -> bool:
        """A verb containing '=' is a variable assignment."""
        return '=' in verb

    # Command implementations

    def cmd_cd(self, cmd: SimpleCommand) -> int:
        """
        Change the working directory of the current process.

        An output redirection target is created/truncated even though cd
        writes nothing to it.
        """
        out_path = self._resolver.expand_word(cmd.out)
        if out_path is not None:
            try:
                truncate_target(out_path, self._config.file_mode)
            except RedirectionError as e:
                self._logger.warning(str(e), context={'verb': 'cd'})
                return self._config.redirect_failure_status

        target: Optional[str] = None
        if cmd.params:
            target = self._resolver.expand_word(cmd.params[0])
        if target is None:
            self._logger.debug("cd: no directory given")
            return FAILURE

        try:
            os.chdir(target)
        except OSError as e:
            self._logger.debug(f"cd: {target}: {e.strerror}")
            return FAILURE

        self._logger.debug("Changed directory", context={'cwd': target})
        return SUCCESS

    def cmd_exit(self, cmd: SimpleCommand) -> int:
        """Terminate the whole process with status 0. Never returns."""
        self._logger.debug("exit requested", pid=os.getpid())
        flush_std_streams()
        os._exit(SUCCESS)

    def assign(self, verb: str) -> int:
        """
        Apply a ``name=value`` assignment to the process environment.

        Only the first '=' separates name from value.
        """
        name, _, value = verb.partition('=')
        if not name:
            self._logger.debug(f"Invalid assignment: {verb!r}")
            return FAILURE

        try:
            os.environ[name] = value
        except (ValueError, OSError) as e:
            self._logger.debug(f"Assignment rejected: {e}", context={'name': name})
            return FAILURE

        return SUCCESS
