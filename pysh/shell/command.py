"""
Command Tree Module

Data model for an already-parsed command line: words, simple commands
and the binary operator tree that combines them.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Any, Optional, Tuple, Union

from pysh.exceptions import TreeFormatError


class IOFlag(IntFlag):
    """Redirection modifiers of a simple command."""
    NONE = 0
    OUT_APPEND = 1
    ERR_APPEND = 2


class Operator(Enum):
    """Operator at a command tree node."""
    NONE = "none"                        # leaf: simple command
    SEQUENTIAL = "sequential"            # a ; b
    PARALLEL = "parallel"                # a & b
    PIPE = "pipe"                        # a | b
    COND_IF_ZERO = "cond_if_zero"        # a && b
    COND_IF_NONZERO = "cond_if_nonzero"  # a || b


@dataclass(frozen=True)
class Word:
    """
    A word of the command line.

    A shell word can be glued together from several parts, e.g.
    ``"$HOME"/bin`` is an expanded part followed by a literal one.
    ``next_part`` links those parts in order.
    """
    text: str
    expand: bool = True
    next_part: Optional['Word'] = None

    @classmethod
    def literal(cls, text: str) -> 'Word':
        """A word that is never variable-expanded."""
        return cls(text, expand=False)

    @classmethod
    def join(cls, *parts: 'Word') -> 'Word':
        """Chain parts into one word, keeping their order."""
        if not parts:
            raise ValueError("join() needs at least one part")
        word: Optional[Word] = None
        for part in reversed(parts):
            word = cls(part.text, part.expand, word)
        return word

    def parts(self) -> Tuple['Word', ...]:
        """All parts of the word, first to last."""
        result = []
        part: Optional[Word] = self
        while part is not None:
            result.append(part)
            part = part.next_part
        return tuple(result)


WordLike = Union[Word, str, None]


def as_word(value: WordLike) -> Optional[Word]:
    """Promote a plain string to an expandable Word."""
    if value is None or isinstance(value, Word):
        return value
    return Word(value)


@dataclass
class SimpleCommand:
    """A single program invocation or built-in with its redirections."""
    verb: Word
    params: Tuple[Word, ...] = ()
    in_: Optional[Word] = None
    out: Optional[Word] = None
    err: Optional[Word] = None
    io_flags: IOFlag = IOFlag.NONE

    @classmethod
    def create(
        cls,
        verb: WordLike,
        *params: WordLike,
        stdin: WordLike = None,
        stdout: WordLike = None,
        stderr: WordLike = None,
        io_flags: IOFlag = IOFlag.NONE
    ) -> 'SimpleCommand':
        """
        Build a simple command from words or plain strings.

        Example:
            >>> SimpleCommand.create('printf', 'hi', stdout='out.txt')
        """
        return cls(
            verb=as_word(verb),
            params=tuple(as_word(p) for p in params),
            in_=as_word(stdin),
            out=as_word(stdout),
            err=as_word(stderr),
            io_flags=IOFlag(io_flags),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            'verb': _word_to_data(self.verb),
            'params': [_word_to_data(p) for p in self.params],
        }
        for key, word in (('in', self.in_), ('out', self.out), ('err', self.err)):
            if word is not None:
                data[key] = _word_to_data(word)
        flags = [flag.name for flag in (IOFlag.OUT_APPEND, IOFlag.ERR_APPEND)
                 if flag in self.io_flags]
        if flags:
            data['io_flags'] = flags
        return data

    @classmethod
    def from_dict(cls, data: Any, path: str = 'root') -> 'SimpleCommand':
        if not isinstance(data, dict):
            raise TreeFormatError("Simple command must be an object", path=path)
        if data.get('verb') is None:
            raise TreeFormatError("Simple command has no verb", path=path)

        params = data.get('params', [])
        if not isinstance(params, list):
            raise TreeFormatError("'params' must be a list", path=f"{path}.params")

        flag_names = data.get('io_flags', [])
        if not isinstance(flag_names, list):
            raise TreeFormatError("'io_flags' must be a list", path=f"{path}.io_flags")

        io_flags = IOFlag.NONE
        for name in flag_names:
            try:
                io_flags |= IOFlag[name]
            except (KeyError, TypeError):
                raise TreeFormatError(f"Unknown I/O flag: {name}", path=f"{path}.io_flags")

        return cls(
            verb=_word_from_data(data['verb'], f"{path}.verb"),
            params=tuple(
                _word_from_data(p, f"{path}.params[{i}]") for i, p in enumerate(params)
            ),
            in_=_word_from_data(data.get('in'), f"{path}.in"),
            out=_word_from_data(data.get('out'), f"{path}.out"),
            err=_word_from_data(data.get('err'), f"{path}.err"),
            io_flags=io_flags,
        )


@dataclass
class CommandNode:
    """
    A node of the command tree.

    Leaves carry ``scmd`` and ``op == Operator.NONE``; internal nodes carry
    an operator and two children. ``father`` points back at the enclosing
    node for diagnostics only.
    """
    op: Operator = Operator.NONE
    scmd: Optional[SimpleCommand] = None
    left: Optional['CommandNode'] = None
    right: Optional['CommandNode'] = None
    father: Optional['CommandNode'] = field(default=None, repr=False, compare=False)

    @property
    def is_leaf(self) -> bool:
        return self.op is Operator.NONE

    @classmethod
    def leaf(cls, verb: Union[SimpleCommand, WordLike], *params: WordLike, **redirects: Any) -> 'CommandNode':
        """
        Build a leaf node.

        Accepts either a ready SimpleCommand or the arguments of
        :meth:`SimpleCommand.create`.
        """
        if isinstance(verb, SimpleCommand):
            return cls(scmd=verb)
        return cls(scmd=SimpleCommand.create(verb, *params, **redirects))

    @classmethod
    def compound(cls, op: Operator, left: 'CommandNode', right: 'CommandNode') -> 'CommandNode':
        """Build an internal node and link the children back to it."""
        if op is Operator.NONE:
            raise ValueError("compound() needs a binary operator")
        node = cls(op=op, left=left, right=right)
        left.father = node
        right.father = node
        return node

    @classmethod
    def sequence(cls, left: 'CommandNode', right: 'CommandNode') -> 'CommandNode':
        return cls.compound(Operator.SEQUENTIAL, left, right)

    @classmethod
    def parallel(cls, left: 'CommandNode', right: 'CommandNode') -> 'CommandNode':
        return cls.compound(Operator.PARALLEL, left, right)

    @classmethod
    def pipe(cls, left: 'CommandNode', right: 'CommandNode') -> 'CommandNode':
        return cls.compound(Operator.PIPE, left, right)

    @classmethod
    def and_then(cls, left: 'CommandNode', right: 'CommandNode') -> 'CommandNode':
        return cls.compound(Operator.COND_IF_ZERO, left, right)

    @classmethod
    def or_else(cls, left: 'CommandNode', right: 'CommandNode') -> 'CommandNode':
        return cls.compound(Operator.COND_IF_NONZERO, left, right)

    def to_dict(self) -> dict[str, Any]:
        """Convert the subtree rooted here to a JSON-compatible dict."""
        if self.is_leaf:
            return {'op': self.op.name, 'command': self.scmd.to_dict() if self.scmd else None}
        return {
            'op': self.op.name,
            'left': self.left.to_dict() if self.left else None,
            'right': self.right.to_dict() if self.right else None,
        }

    @classmethod
    def from_dict(cls, data: Any, path: str = 'root') -> 'CommandNode':
        """
        Rebuild a tree from :meth:`to_dict` output.

        Raises:
            TreeFormatError: If the data does not describe a command tree
        """
        if not isinstance(data, dict):
            raise TreeFormatError("Node must be an object", path=path)

        op_name = data.get('op', Operator.NONE.name)
        try:
            op = Operator[op_name]
        except (KeyError, TypeError):
            raise TreeFormatError(f"Unknown operator: {op_name}", path=path)

        if op is Operator.NONE:
            if 'command' in data and data['command'] is None:
                return cls()
            return cls(scmd=SimpleCommand.from_dict(data.get('command'), f"{path}.command"))

        for side in ('left', 'right'):
            if data.get(side) is None:
                raise TreeFormatError(f"{op.name} node has no {side} child", path=path)

        return cls.compound(
            op,
            cls.from_dict(data['left'], f"{path}.left"),
            cls.from_dict(data['right'], f"{path}.right"),
        )


def _word_to_data(word: Word) -> Any:
    if word.next_part is None and word.expand:
        return word.text
    data: dict[str, Any] = {'text': word.text, 'expand': word.expand}
    if word.next_part is not None:
        data['next'] = _word_to_data(word.next_part)
    return data


def _word_from_data(data: Any, path: str) -> Optional[Word]:
    if data is None:
        return None
    if isinstance(data, str):
        return Word(data)
    if isinstance(data, dict) and isinstance(data.get('text'), str):
        return Word(
            data['text'],
            expand=bool(data.get('expand', True)),
            next_part=_word_from_data(data.get('next'), f"{path}.next"),
        )
    raise TreeFormatError("Word must be a string or an object with 'text'", path=path)
