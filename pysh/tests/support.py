"""
Shared fixtures for pysh tests.

Every test runs in its own temporary working directory with a saved
copy of the environment, so built-ins such as cd and NAME=value cannot
leak between tests.
"""

import os
import tempfile
import unittest

from pysh.core.config_loader import Config
from pysh.process import ProcessLauncher
from pysh.shell import Shell


class ShellTestCase(unittest.TestCase):
    """Base class providing a scratch directory and a fresh Shell."""

    def setUp(self):
        self._old_cwd = os.getcwd()
        self._old_environ = dict(os.environ)
        self._tmp = tempfile.TemporaryDirectory()
        self.tmpdir = os.path.realpath(self._tmp.name)
        os.chdir(self.tmpdir)
        self.config = Config()
        self.shell = Shell(self.config)
        self.launcher = ProcessLauncher(self.config.executor)

    def tearDown(self):
        os.chdir(self._old_cwd)
        os.environ.clear()
        os.environ.update(self._old_environ)
        self._tmp.cleanup()

    def path(self, name: str) -> str:
        return os.path.join(self.tmpdir, name)

    def read(self, name: str) -> str:
        with open(self.path(name), 'r', encoding='utf-8') as f:
            return f.read()

    def run_in_child(self, target, *args) -> int:
        """Run ``target(*args)`` in a forked child and return its status."""
        pid = self.launcher.spawn(target, *args)
        return self.launcher.wait(pid)
