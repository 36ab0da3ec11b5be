"""
pysh Shell Module

Bundles the resolver, the simple command executor and the tree evaluator
behind one object.

Author: YSNRFD
Version: 1.0.0
"""

import json
from pathlib import Path
from typing import Any, Optional

from .command import CommandNode
from .evaluator import CommandEvaluator
from .executor import SimpleCommandExecutor
from .resolver import DefaultWordResolver, WordResolver
from pysh.core.config_loader import Config, get_config
from pysh.exceptions import TreeFormatError
from pysh.logger import get_logger
from pysh.process import ProcessLauncher


class Shell:
    """
    Executes already-parsed command trees.

    Environment and working directory are those of the current process;
    built-ins such as ``cd`` and ``NAME=value`` change them for good.

    Example:
        >>> shell = Shell()
        >>> shell.execute(CommandNode.and_then(CommandNode.leaf('true'),
        ...                                    CommandNode.leaf('echo', 'ok')))
        0
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        resolver: Optional[WordResolver] = None
    ):
        self._config = config or get_config()
        self._logger = get_logger('shell')
        self._resolver = resolver or DefaultWordResolver()
        self._launcher = ProcessLauncher(self._config.executor)
        self._executor = SimpleCommandExecutor(self._resolver, self._launcher)
        self._evaluator = CommandEvaluator(self._executor, self._launcher)

    @property
    def config(self) -> Config:
        return self._config

    @property
    def resolver(self) -> WordResolver:
        return self._resolver

    @property
    def executor(self) -> SimpleCommandExecutor:
        return self._executor

    @property
    def evaluator(self) -> CommandEvaluator:
        return self._evaluator

    def execute(self, tree: Optional[CommandNode]) -> int:
        """
        Evaluate a command tree.

        Args:
            tree: Root of the tree

        Returns:
            Exit status of the tree
        """
        status = self._evaluator.evaluate(tree, 0, None)
        self._logger.debug("Tree evaluated", context={'status': status})
        return status

    def execute_dict(self, data: Any) -> int:
        """Evaluate a tree given in its dict form."""
        return self.execute(CommandNode.from_dict(data))

    def execute_file(self, path: str) -> int:
        """
        Evaluate a tree stored as JSON.

        Raises:
            TreeFormatError: If the file is unreadable or malformed
        """
        try:
            with open(Path(path), 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TreeFormatError(f"Invalid JSON in command tree: {e}", path=path)
        except OSError as e:
            raise TreeFormatError(f"Cannot read command tree: {e}", path=path)

        return self.execute_dict(data)


def create_shell(config: Optional[Config] = None, resolver: Optional[WordResolver] = None) -> Shell:
    """Factory function to create a shell."""
    return Shell(config, resolver)
