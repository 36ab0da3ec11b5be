"""
Command Tree Model Tests
"""

import unittest

from pysh.exceptions import TreeFormatError
from pysh.shell import CommandNode, IOFlag, Operator, SimpleCommand, Word


class TestWord(unittest.TestCase):
    """Word parts."""

    def test_join_keeps_order(self):
        word = Word.join(Word('$HOME'), Word.literal('/bin'))
        self.assertEqual([p.text for p in word.parts()], ['$HOME', '/bin'])
        self.assertEqual([p.expand for p in word.parts()], [True, False])

    def test_join_requires_parts(self):
        with self.assertRaises(ValueError):
            Word.join()


class TestCommandNode(unittest.TestCase):
    """Tree builders and the dict form."""

    def test_compound_sets_father(self):
        """Children point back to the node that contains them."""
        left = CommandNode.leaf('true')
        right = CommandNode.leaf('false')
        node = CommandNode.and_then(left, right)

        self.assertIs(left.father, node)
        self.assertIs(right.father, node)
        self.assertEqual(node.op, Operator.COND_IF_ZERO)
        self.assertFalse(node.is_leaf)

    def test_father_not_compared(self):
        """Equality ignores the back-reference."""
        linked = CommandNode.leaf('true')
        CommandNode.sequence(linked, CommandNode.leaf('true'))
        self.assertEqual(linked, CommandNode.leaf('true'))

    def test_compound_rejects_none(self):
        with self.assertRaises(ValueError):
            CommandNode.compound(Operator.NONE, CommandNode.leaf('a'), CommandNode.leaf('b'))

    def test_leaf_from_simple_command(self):
        scmd = SimpleCommand.create('ls', '-l')
        self.assertIs(CommandNode.leaf(scmd).scmd, scmd)

    def test_dict_round_trip(self):
        """to_dict / from_dict preserve the whole tree."""
        tree = CommandNode.pipe(
            CommandNode.leaf('printf', Word.join(Word('$A'), Word.literal('-$B')), stdin='in'),
            CommandNode.parallel(
                CommandNode.leaf('cat', stdout='out', stderr='err', io_flags=IOFlag.ERR_APPEND),
                CommandNode.leaf('X=1'),
            ),
        )
        rebuilt = CommandNode.from_dict(tree.to_dict())

        self.assertEqual(rebuilt, tree)
        self.assertIs(rebuilt.right.left.father, rebuilt.right)

    def test_empty_leaf_round_trip(self):
        """A leaf without a command survives the dict form."""
        tree = CommandNode.sequence(CommandNode(), CommandNode.leaf('true'))
        data = tree.to_dict()
        self.assertIsNone(data['left']['command'])
        rebuilt = CommandNode.from_dict(data)
        self.assertEqual(rebuilt, tree)
        self.assertIsNone(rebuilt.left.scmd)

    def test_dict_shape(self):
        data = CommandNode.leaf('cat', stdout='out', io_flags=IOFlag.OUT_APPEND).to_dict()
        self.assertEqual(data, {
            'op': 'NONE',
            'command': {'verb': 'cat', 'params': [], 'out': 'out', 'io_flags': ['OUT_APPEND']},
        })


class TestTreeFormatErrors(unittest.TestCase):
    """Malformed dict input."""

    def assertBadTree(self, data, path=None):
        with self.assertRaises(TreeFormatError) as ctx:
            CommandNode.from_dict(data)
        if path is not None:
            self.assertEqual(ctx.exception.path, path)

    def test_not_an_object(self):
        self.assertBadTree(['NONE'], path='root')

    def test_unknown_operator(self):
        self.assertBadTree({'op': 'XOR', 'left': {}, 'right': {}}, path='root')

    def test_missing_child(self):
        self.assertBadTree({'op': 'PIPE', 'left': {'command': {'verb': 'a'}}}, path='root')

    def test_missing_verb(self):
        self.assertBadTree({'op': 'NONE', 'command': {'params': []}}, path='root.command')

    def test_bad_word(self):
        self.assertBadTree({'command': {'verb': 'a', 'params': [42]}}, path='root.command.params[0]')

    def test_bad_flag(self):
        self.assertBadTree({'command': {'verb': 'a', 'io_flags': ['IN_APPEND']}}, path='root.command.io_flags')

    def test_flags_not_a_list(self):
        self.assertBadTree({'command': {'verb': 'true', 'io_flags': 1}}, path='root.command.io_flags')

    def test_missing_command(self):
        self.assertBadTree({'op': 'NONE'}, path='root.command')

    def test_error_code(self):
        self.assertEqual(TreeFormatError('x').error_code, 1001)


if __name__ == '__main__':
    unittest.main()
