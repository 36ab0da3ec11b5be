"""
Logger Tests
"""

import logging
import unittest

from pysh.logger import LogFormatter, Logger, LogLevel, get_logger
from pysh.shell import CommandNode
from pysh.tests.support import ShellTestCase


class TestLogger(unittest.TestCase):
    """Test the logging system."""

    def tearDown(self):
        Logger.shutdown()

    def test_logger_creation(self):
        """Same subsystem, same instance."""
        self.assertIs(Logger('test1'), get_logger('test1'))
        self.assertIsNot(Logger('test1'), Logger('test2'))
        self.assertEqual(Logger('test1').subsystem, 'test1')

    def test_log_levels(self):
        self.assertTrue(LogLevel.ERROR > LogLevel.INFO)
        self.assertEqual(LogLevel.from_name('debug'), LogLevel.DEBUG)
        with self.assertRaises(ValueError):
            LogLevel.from_name('chatty')

    def test_buffer_filtering(self):
        Logger.initialize(level=LogLevel.DEBUG, console_output=False)
        get_logger('alpha').debug("first", context={'k': 1})
        get_logger('beta').error("second", pid=7)

        self.assertEqual([l['message'] for l in Logger.get_logs(subsystem='alpha')], ['first'])
        errors = Logger.get_logs(level='ERROR')
        self.assertEqual(errors[-1]['pid'], 7)

    def test_uninitialized_is_silent(self):
        """Without initialize() there is no buffer to read."""
        get_logger('quiet').error("dropped")
        self.assertEqual(Logger.get_logs(), [])

    def test_formatter(self):
        record = logging.LogRecord('pysh.x', logging.WARNING, __file__, 1, "hello", None, None)
        record.subsystem = 'executor'
        record.pid = 12
        record.context = {'verb': 'ls'}
        line = LogFormatter(use_colors=False).format(record)
        self.assertIn('WARNING', line)
        self.assertIn('[executor] (pid=12) hello {verb=ls}', line)


class TestEvaluationLogging(ShellTestCase):
    """Evaluation leaves a trace in the log buffer."""

    def tearDown(self):
        Logger.shutdown()
        super().tearDown()

    def test_operator_logged(self):
        Logger.initialize(level=LogLevel.DEBUG, console_output=False)
        self.shell.execute(CommandNode.sequence(CommandNode.leaf('true'), CommandNode.leaf('true')))

        ops = [l['context'].get('op') for l in Logger.get_logs(subsystem='evaluator')]
        self.assertIn('SEQUENTIAL', ops)
        self.assertTrue(Logger.get_logs(subsystem='executor'))

    def test_missing_node_warning(self):
        Logger.initialize(level=LogLevel.DEBUG, console_output=False)
        self.shell.execute(None)
        self.assertTrue(Logger.get_logs(level='WARNING', subsystem='evaluator'))


if __name__ == '__main__':
    unittest.main()
