"""
Simple Command Executor Tests

External programs, exec failures and redirections applied in the child.
"""

import os
import unittest

from pysh.shell import IOFlag, SimpleCommand, Word
from pysh.tests.support import ShellTestCase


def sh(script: str, **redirects) -> SimpleCommand:
    return SimpleCommand.create('sh', '-c', Word.literal(script), **redirects)


class TestExternalCommands(ShellTestCase):
    """Fork, exec and wait."""

    def setUp(self):
        super().setUp()
        self.executor = self.shell.executor

    def test_none_is_noop(self):
        """A missing command or empty verb succeeds without running anything."""
        self.assertEqual(self.executor.execute(None), 0)
        self.assertEqual(self.executor.execute(SimpleCommand.create('')), 0)

    def test_unset_variable_verb(self):
        """A verb that expands to nothing is nothing to run."""
        os.environ.pop('PYSH_NO_SUCH_VAR', None)
        self.assertEqual(self.executor.execute(SimpleCommand.create('$PYSH_NO_SUCH_VAR')), 0)

    def test_exit_code_propagates(self):
        """The program's own exit code is returned."""
        self.assertEqual(self.executor.execute(sh('exit 0')), 0)
        self.assertEqual(self.executor.execute(sh('exit 3')), 3)
        self.assertEqual(self.executor.execute(SimpleCommand.create('false')), 1)

    def test_command_not_found(self):
        """An unknown program yields the not-found status."""
        cmd = SimpleCommand.create('pysh-definitely-not-a-command')
        self.assertEqual(self.executor.execute(cmd), self.config.executor.exec_not_found_status)

    def test_command_not_executable(self):
        """A file without execute permission yields the exec-failure status."""
        with open(self.path('script'), 'w') as f:
            f.write('#!/bin/sh\nexit 0\n')
        os.chmod(self.path('script'), 0o644)

        cmd = SimpleCommand.create('./script')
        self.assertEqual(self.executor.execute(cmd), self.config.executor.exec_failure_status)

    def test_killed_by_signal(self):
        """A child killed by a signal reports 128 + signal number."""
        self.assertEqual(self.executor.execute(sh('kill -9 $$')), 128 + 9)

    def test_arguments_are_resolved(self):
        """Parameters are expanded before exec."""
        os.environ['GREETING'] = 'hello'
        cmd = SimpleCommand.create('printf', '%s-%s', '$GREETING', Word.literal('$GREETING'), stdout='args.txt')
        self.assertEqual(self.executor.execute(cmd), 0)
        self.assertEqual(self.read('args.txt'), 'hello-$GREETING')


class TestRedirection(ShellTestCase):
    """Redirections seen through real programs."""

    def setUp(self):
        super().setUp()
        self.executor = self.shell.executor

    def test_input(self):
        """< file feeds the program's stdin."""
        with open(self.path('in.txt'), 'w') as f:
            f.write('from file')
        cmd = SimpleCommand.create('cat', stdin='in.txt', stdout='copy.txt')
        self.assertEqual(self.executor.execute(cmd), 0)
        self.assertEqual(self.read('copy.txt'), 'from file')

    def test_truncate_replaces(self):
        """Without the append flag the second run replaces the first."""
        self.executor.execute(SimpleCommand.create('printf', 'first', stdout='out.txt'))
        self.executor.execute(SimpleCommand.create('printf', 'second', stdout='out.txt'))
        self.assertEqual(self.read('out.txt'), 'second')

    def test_append_accumulates(self):
        """With OUT_APPEND both runs end up in the file, in order."""
        for text in ('one', 'two'):
            cmd = SimpleCommand.create('printf', text, stdout='log.txt', io_flags=IOFlag.OUT_APPEND)
            self.assertEqual(self.executor.execute(cmd), 0)
        self.assertEqual(self.read('log.txt'), 'onetwo')

    def test_error_truncate_and_append(self):
        """2> truncates, 2>> appends."""
        self.executor.execute(sh('printf a >&2', stderr='err.txt'))
        self.executor.execute(sh('printf b >&2', stderr='err.txt'))
        self.assertEqual(self.read('err.txt'), 'b')

        self.executor.execute(sh('printf c >&2', stderr='err.txt', io_flags=IOFlag.ERR_APPEND))
        self.assertEqual(self.read('err.txt'), 'bc')

    def test_same_target_shares_file(self):
        """out and err naming the same path share one open file."""
        cmd = SimpleCommand(
            verb=Word('sh'),
            params=(Word('-c'), Word.literal('echo out; echo err >&2')),
            out=Word('both.txt'),
            err=Word('both.txt'),
        )
        self.assertIsNot(cmd.out, cmd.err)
        self.assertEqual(self.executor.execute(cmd), 0)
        self.assertEqual(self.read('both.txt'), 'out\nerr\n')

    def test_different_targets(self):
        """out and err naming different paths go to separate files."""
        self.executor.execute(sh('echo out; echo err >&2', stdout='o.txt', stderr='e.txt'))
        self.assertEqual(self.read('o.txt'), 'out\n')
        self.assertEqual(self.read('e.txt'), 'err\n')

    def test_output_append_takes_precedence(self):
        """With OUT_APPEND set, a plain err target is not applied."""
        cmd = sh('echo out', stdout='o.txt', stderr='e.txt', io_flags=IOFlag.OUT_APPEND)
        self.executor.execute(cmd)
        self.assertEqual(self.read('o.txt'), 'out\n')
        self.assertFalse(os.path.exists(self.path('e.txt')))

    def test_missing_input_fails(self):
        """An input file that does not exist fails before exec."""
        cmd = SimpleCommand.create('printf', 'never', stdin='missing.txt', stdout='out.txt')
        status = self.executor.execute(cmd)
        self.assertEqual(status, self.config.executor.redirect_failure_status)
        self.assertFalse(os.path.exists(self.path('out.txt')))

    def test_unwritable_output_fails(self):
        """A directory as output target fails with the redirect status."""
        os.mkdir(self.path('adir'))
        cmd = SimpleCommand.create('printf', 'never', stdout='adir')
        self.assertEqual(self.executor.execute(cmd), self.config.executor.redirect_failure_status)

    def test_created_file_mode(self):
        """New targets are created with the configured mode."""
        old_umask = os.umask(0)
        try:
            self.executor.execute(SimpleCommand.create('true', stdout='mode.txt'))
        finally:
            os.umask(old_umask)
        self.assertEqual(os.stat(self.path('mode.txt')).st_mode & 0o777, 0o644)


if __name__ == '__main__':
    unittest.main()
