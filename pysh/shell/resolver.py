"""
Word Resolver Module

The executor never interprets words itself. It asks a WordResolver to
turn a Word into a literal string and a SimpleCommand into an argument
vector, at the moment the value is needed.

Author: YSNRFD
Version: 1.0.0
"""

import os
import re
from abc import ABC, abstractmethod
from typing import List, Mapping, Optional

from .command import SimpleCommand, Word


class WordResolver(ABC):
    """
    Abstract base for word resolution.

    Implementations must return a fresh string on every call; callers own
    the result.
    """

    @abstractmethod
    def expand_word(self, word: Optional[Word]) -> Optional[str]:
        """Resolve a word to a literal string, or None if absent."""
        pass

    @abstractmethod
    def build_argv(self, cmd: SimpleCommand) -> List[str]:
        """Build the argument vector (verb first) for a simple command."""
        pass


class DefaultWordResolver(WordResolver):
    """
    Concatenates word parts and expands ``$VAR`` / ``${VAR}``.

    Variables are looked up in ``environ`` (the live process environment
    by default), so assignments made earlier in an evaluation are seen
    by words resolved later. Unset variables expand to ''.

    Example:
        >>> resolver = DefaultWordResolver({'USER': 'root'})
        >>> resolver.expand_word(Word('hello $USER'))
        'hello root'
    """

    _VARIABLE = re.compile(r'\$(\w+|\{(\w+)\})')

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def expand_variables(self, text: str) -> str:
        """Expand environment variables in text."""
        environ = self.environ

        def replace_var(match):
            name = match.group(2) or match.group(1)
            return environ.get(name, '')

        return self._VARIABLE.sub(replace_var, text)

    def expand_word(self, word: Optional[Word]) -> Optional[str]:
        if word is None:
            return None
        return ''.join(
            self.expand_variables(part.text) if part.expand else part.text
            for part in word.parts()
        )

    def build_argv(self, cmd: SimpleCommand) -> List[str]:
        argv = [self.expand_word(cmd.verb) or '']
        for param in cmd.params:
            value = self.expand_word(param)
            if value is not None:
                argv.append(value)
        return argv
