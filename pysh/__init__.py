"""
pysh - a command-tree executor

Evaluates already-parsed shell command trees (sequence, &&, ||, pipes
and parallel branches) on real OS processes and returns the exit status.
Implemented in Python 3.10+ using only the standard library.
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

from .shell.command import CommandNode, IOFlag, Operator, SimpleCommand, Word
from .shell.resolver import DefaultWordResolver, WordResolver
from .shell.shell import Shell, create_shell

__all__ = [
    'CommandNode',
    'IOFlag',
    'Operator',
    'SimpleCommand',
    'Word',
    'DefaultWordResolver',
    'WordResolver',
    'Shell',
    'create_shell',
]
