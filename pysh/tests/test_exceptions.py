"""
Exception Hierarchy Tests
"""

import unittest

from pysh.exceptions import (
    ConfigLoadError,
    ExecError,
    ForkError,
    IPCException,
    PipeError,
    ProcessException,
    RedirectionError,
    ShellException,
    WaitError,
)


class TestExceptions(unittest.TestCase):
    """Test the exception hierarchy."""

    def test_shell_exception(self):
        exc = ShellException("Test error", error_code=1000, context={'verb': 'ls'})
        self.assertEqual(exc.message, "Test error")
        self.assertEqual(str(exc), "[Error 1000] Test error (verb=ls)")

    def test_redirection_error(self):
        exc = RedirectionError("No such file", path="/missing")
        self.assertIsInstance(exc, ShellException)
        self.assertEqual(exc.path, "/missing")
        self.assertEqual(exc.error_code, 1004)
        self.assertIn("path=/missing", str(exc))

    def test_config_load_error(self):
        self.assertEqual(ConfigLoadError("x", path="a.json").context, {'path': 'a.json'})

    def test_process_exceptions(self):
        exc = ForkError("EAGAIN", parent_pid=1)
        self.assertIsInstance(exc, ProcessException)
        self.assertEqual(exc.parent_pid, 1)
        self.assertIn("pid=1", str(exc))

        exc = ExecError("not found", pid=42, path="nosuch", not_found=True)
        self.assertTrue(exc.not_found)
        self.assertEqual(exc.context['path'], "nosuch")

        self.assertEqual(WaitError("ECHILD", pid=3).error_code, 2007)

    def test_pipe_error(self):
        exc = PipeError("EMFILE", read_fd=3)
        self.assertIsInstance(exc, IPCException)
        self.assertEqual(exc.context, {'read_fd': 3})
        self.assertEqual(str(exc), "[Error 6001] EMFILE")


if __name__ == '__main__':
    unittest.main()
