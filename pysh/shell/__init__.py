"""
pysh Shell Module

Executes parsed command trees:
- Command tree data model
- Word resolution
- I/O redirection
- Built-in commands
- Sequential, conditional, parallel and pipeline evaluation
"""

from .command import CommandNode, IOFlag, Operator, SimpleCommand, Word
from .resolver import DefaultWordResolver, WordResolver
from .redirect import OpenMode, Redirection, apply_redirections, plan_redirections
from .builtins import BuiltinCommands
from .executor import SimpleCommandExecutor
from .evaluator import CommandEvaluator
from .shell import Shell, create_shell

__all__ = [
    'CommandNode',
    'IOFlag',
    'Operator',
    'SimpleCommand',
    'Word',
    'DefaultWordResolver',
    'WordResolver',
    'OpenMode',
    'Redirection',
    'apply_redirections',
    'plan_redirections',
    'BuiltinCommands',
    'SimpleCommandExecutor',
    'CommandEvaluator',
    'Shell',
    'create_shell',
]
