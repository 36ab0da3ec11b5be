#!/usr/bin/env python3
"""
pysh - command-tree executor

Main entry point. Evaluates one command tree stored as JSON and exits
with its status:

    python -m pysh tree.json [--config pysh.json] [--log-level DEBUG]

Author: YSNRFD
Version: 1.0.0
"""

import argparse
import sys
from typing import List, Optional

from pysh.core.config_loader import ConfigLoader
from pysh.exceptions import ConfigLoadError, ConfigValidationError, TreeFormatError
from pysh.logger import Logger, LogLevel, get_logger
from pysh.process import to_exit_code
from pysh.shell.shell import Shell


USAGE_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pysh',
        description='Execute a parsed command tree (JSON) and exit with its status.'
    )
    parser.add_argument('tree', help='Path to the JSON command tree')
    parser.add_argument('--config', help='Path to a JSON configuration file')
    parser.add_argument('--log-level', help='Override the configured log level')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for pysh.

    Sequence:
    1. Load configuration
    2. Initialize logging
    3. Read the command tree
    4. Evaluate it

    Returns:
        Exit status of the tree, truncated to 0-255, or 2 on usage errors
    """
    args = build_parser().parse_args(argv)

    loader = ConfigLoader()
    if args.config:
        try:
            loader.load(args.config)
        except (ConfigLoadError, ConfigValidationError) as e:
            print(f"pysh: {e}", file=sys.stderr)
            return USAGE_ERROR
    config = loader.config

    try:
        level = LogLevel.from_name(args.log_level or config.logging.level)
    except ValueError as e:
        print(f"pysh: {e}", file=sys.stderr)
        return USAGE_ERROR

    Logger.initialize(
        level=level,
        log_file=config.logging.log_file,
        use_colors=config.logging.use_colors,
        console_output=config.logging.console_output,
    )
    logger = get_logger('main')

    shell = Shell(config)
    try:
        status = shell.execute_file(args.tree)
    except TreeFormatError as e:
        logger.error(str(e))
        print(f"pysh: {e}", file=sys.stderr)
        return USAGE_ERROR

    logger.info("Finished", context={'status': status})
    return to_exit_code(status)


if __name__ == '__main__':
    sys.exit(main())
