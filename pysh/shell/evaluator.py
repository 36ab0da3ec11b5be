"""
Command Tree Evaluator

Walks a command tree top-down. Leaves go to the simple command executor;
internal nodes combine the exit statuses of their children according to
their operator:

    SEQUENTIAL       a ; b    run a, then b; status of b
    COND_IF_ZERO     a && b   run b only if a returned 0
    COND_IF_NONZERO  a || b   run b only if a returned non-zero
    PARALLEL         a & b    a in a child, b here; status of b
    PIPE             a | b    a's stdout feeds b's stdin; status of b

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional

from .command import CommandNode, Operator
from .executor import SimpleCommandExecutor
from .redirect import STDIN_FILENO, STDOUT_FILENO
from pysh.exceptions import PipeError, ProcessException
from pysh.ipc import Pipe
from pysh.logger import get_logger
from pysh.process import INVALID_NODE, SHELL_EXIT, ProcessLauncher


class CommandEvaluator:
    """
    Recursive evaluator for command trees.

    Example:
        >>> evaluator = CommandEvaluator(executor, launcher)
        >>> evaluator.evaluate(CommandNode.pipe(CommandNode.leaf('printf', 'hi'),
        ...                                     CommandNode.leaf('cat')))
        0
    """

    def __init__(self, executor: SimpleCommandExecutor, launcher: ProcessLauncher):
        self._executor = executor
        self._launcher = launcher
        self._config = launcher.config
        self._logger = get_logger('evaluator')

    def evaluate(
        self,
        node: Optional[CommandNode],
        level: int = 0,
        father: Optional[CommandNode] = None
    ) -> int:
        """
        Evaluate a (sub)tree and return its exit status.

        Args:
            node: Root of the subtree
            level: Depth of ``node`` in the whole tree
            father: Node that contains ``node``

        Returns:
            Exit status; INVALID_NODE for a missing node, SHELL_EXIT for
            an unknown operator
        """
        if node is None:
            self._logger.warning("Evaluate called without a node", context={'level': level})
            return INVALID_NODE

        if not isinstance(node.op, Operator):
            self._logger.error(f"Unknown operator: {node.op!r}", context={'level': level})
            return SHELL_EXIT

        if node.op is Operator.NONE:
            return self._executor.execute(node.scmd, level, father)

        self._logger.debug("Evaluating node", context={'op': node.op.name, 'level': level})

        if node.op is Operator.SEQUENTIAL:
            self.evaluate(node.left, level + 1, node)
            return self.evaluate(node.right, level + 1, node)

        if node.op is Operator.COND_IF_ZERO:
            status = self.evaluate(node.left, level + 1, node)
            if status == 0:
                status = self.evaluate(node.right, level + 1, node)
            return status

        if node.op is Operator.COND_IF_NONZERO:
            status = self.evaluate(node.left, level + 1, node)
            if status != 0:
                status = self.evaluate(node.right, level + 1, node)
            return status

        if node.op is Operator.PARALLEL:
            return self.run_parallel(node.left, node.right, level + 1, node)

        if node.op is Operator.PIPE:
            return self.run_pipe(node.left, node.right, level + 1, node)

        self._logger.error(f"Unhandled operator: {node.op.name}", context={'level': level})
        return SHELL_EXIT

    def run_parallel(
        self,
        left: Optional[CommandNode],
        right: Optional[CommandNode],
        level: int,
        father: Optional[CommandNode]
    ) -> int:
        """
        Run ``left`` in a child while this process runs ``right``.

        Returns only once the child has terminated. The status is the
        one of ``right``; the child's status is only logged.
        """
        try:
            pid = self._launcher.spawn(self.evaluate, left, level, father)
        except ProcessException as e:
            self._logger.error(f"Parallel branch not started: {e}", context={'level': level})
            return self._config.internal_error_status

        try:
            status = self.evaluate(right, level, father)
        finally:
            left_status = self._reap(pid)

        self._logger.debug(
            "Parallel branches joined",
            pid=pid,
            context={'left': left_status, 'right': status}
        )
        return status

    def run_pipe(
        self,
        left: Optional[CommandNode],
        right: Optional[CommandNode],
        level: int,
        father: Optional[CommandNode]
    ) -> int:
        """
        Connect ``left``'s stdout to ``right``'s stdin through a pipe.

        Both stages run in their own child; this process holds neither
        pipe end once they are started. Returns ``right``'s status.
        """
        try:
            pipe = Pipe.create()
        except PipeError as e:
            self._logger.error(str(e), context={'level': level})
            return self._config.internal_error_status

        try:
            left_pid = self._launcher.spawn(
                self._run_stage, pipe, STDOUT_FILENO, left, level, father
            )
        except ProcessException as e:
            pipe.close()
            self._logger.error(f"Pipe writer not started: {e}", context={'level': level})
            return self._config.internal_error_status

        try:
            right_pid = self._launcher.spawn(
                self._run_stage, pipe, STDIN_FILENO, right, level, father
            )
        except ProcessException as e:
            pipe.close()
            self._reap(left_pid)
            self._logger.error(f"Pipe reader not started: {e}", context={'level': level})
            return self._config.internal_error_status

        pipe.close()

        left_status = self._reap(left_pid)
        status = self._reap(right_pid)
        self._logger.debug(
            "Pipeline finished",
            context={'left': left_status, 'right': status, 'level': level}
        )
        return status

    def _run_stage(
        self,
        pipe: Pipe,
        slot: int,
        node: Optional[CommandNode],
        level: int,
        father: Optional[CommandNode]
    ) -> int:
        """Child side of a pipeline stage."""
        if slot == STDOUT_FILENO:
            pipe.attach_write(slot)
        else:
            pipe.attach_read(slot)
        return self.evaluate(node, level, father)

    def _reap(self, pid: int) -> int:
        try:
            return self._launcher.wait(pid)
        except ProcessException as e:
            self._logger.error(str(e), pid=pid)
            return self._config.internal_error_status
