"""
Simple Command Executor

Runs one leaf of the command tree: a built-in or an assignment in the
current process, or an external program in a forked child.

Author: YSNRFD
Version: 1.0.0
"""

import os
from typing import NoReturn, Optional

from .builtins import BuiltinCommands
from .command import CommandNode, SimpleCommand
from .redirect import apply_redirections, plan_redirections
from .resolver import WordResolver
from pysh.exceptions import ProcessException, RedirectionError
from pysh.logger import get_logger
from pysh.process import SUCCESS, ProcessLauncher


class SimpleCommandExecutor:
    """
    Executes simple commands.

    Example:
        >>> executor = SimpleCommandExecutor(DefaultWordResolver(), ProcessLauncher())
        >>> executor.execute(SimpleCommand.create('true'))
        0
    """

    def __init__(self, resolver: WordResolver, launcher: ProcessLauncher):
        self._resolver = resolver
        self._launcher = launcher
        self._config = launcher.config
        self._builtins = BuiltinCommands(resolver, self._config)
        self._logger = get_logger('executor')

    @property
    def builtins(self) -> BuiltinCommands:
        return self._builtins

    def execute(
        self,
        cmd: Optional[SimpleCommand],
        level: int = 0,
        father: Optional[CommandNode] = None
    ) -> int:
        """
        Execute a simple command.

        Args:
            cmd: The command; None is a no-op
            level: Depth in the tree (diagnostics only)
            father: Enclosing node (diagnostics only)

        Returns:
            Exit status
        """
        if cmd is None or cmd.verb is None:
            return SUCCESS

        verb = self._resolver.expand_word(cmd.verb)
        if not verb:
            return SUCCESS

        context = {'verb': verb, 'level': level}
        if father is not None:
            context['father'] = father.op.name

        if self._builtins.is_builtin(verb):
            status = self._builtins.execute(verb, cmd)
            self._logger.debug("Built-in finished", context={**context, 'status': status})
            return status

        if self._builtins.is_assignment(verb):
            status = self._builtins.assign(verb)
            self._logger.debug("Assignment finished", context={**context, 'status': status})
            return status

        return self._execute_external(verb, cmd, context)

    def _execute_external(self, verb: str, cmd: SimpleCommand, context: dict) -> int:
        """Fork, exec ``verb`` in the child and wait for it."""
        try:
            pid = self._launcher.fork()
        except ProcessException as e:
            self._logger.error(str(e), context=context)
            return self._config.internal_error_status

        if pid == 0:
            self._run_child(verb, cmd)

        try:
            status = self._launcher.wait(pid)
        except ProcessException as e:
            self._logger.error(str(e), context=context)
            return self._config.internal_error_status

        self._logger.debug("External command finished", pid=pid, context={**context, 'status': status})
        return status

    def _run_child(self, verb: str, cmd: SimpleCommand) -> NoReturn:
        """Child side: redirect, build argv, exec. Never returns."""
        status = self._config.internal_error_status
        try:
            apply_redirections(plan_redirections(cmd, self._resolver), self._config.file_mode)
            argv = self._resolver.build_argv(cmd)
            self._launcher.exec_or_exit(verb, argv)
        except RedirectionError:
            status = self._config.redirect_failure_status
        except Exception as e:
            self._logger.exception(f"{verb}: child setup failed", exc=e, pid=os.getpid())
        finally:
            self._launcher.exit(status)
