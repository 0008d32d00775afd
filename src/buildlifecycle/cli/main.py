"""
Command-line interface for the buildlifecycle tool.

Runs the lifecycle configuration pass for the requested tasks, reports the
registered lifecycle tasks, stamped properties and armed timeout, and
optionally runs a build command guarded by the diagnostic monitor.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..config import get_config, set_config_path
from ..lifecycle import EARLY_FEEDBACK_TASKS, PROMOTION_TASKS
from ..orchestration import BuildSession
from ..system import run_build_process
from ..validation import LifecycleError, ValidationError, handle_cli_error

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="buildlifecycle",
        description="Configure CI lifecycle tasks, global properties and the timeout monitor.",
    )
    parser.add_argument(
        "tasks",
        nargs="*",
        help="Requested task names, plain or qualified (e.g. 'sanityCheck', ':docs:platformTest').",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config.toml (defaults to conf/config.toml).",
    )
    ci_group = parser.add_mutually_exclusive_group()
    ci_group.add_argument(
        "--ci",
        dest="ci",
        action="store_true",
        default=None,
        help="Behave as on a CI server regardless of the environment.",
    )
    ci_group.add_argument(
        "--no-ci",
        dest="ci",
        action="store_false",
        help="Behave as a local build regardless of the environment.",
    )
    parser.add_argument(
        "--list-tasks",
        action="store_true",
        help="List the lifecycle tasks with their groups and dependencies, then exit.",
    )
    parser.add_argument(
        "--exec",
        dest="command",
        metavar="COMMAND",
        help="Build command to run while the diagnostic monitor is armed.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def list_tasks() -> None:
    for task in PROMOTION_TASKS + EARLY_FEEDBACK_TASKS:
        logger.info(f"{task.name} [{task.group}] - {task.description}")
        for dependency in task.dependencies:
            logger.info(f"    {dependency}")


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line entry point.

    Exits with the build command's exit code when ``--exec`` is given, 0
    after a successful configuration pass otherwise, and 1 on configuration
    errors.
    """
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    if args.list_tasks:
        list_tasks()
        sys.exit(0)

    if args.config:
        set_config_path(args.config)

    try:
        config = get_config()
    except (ValidationError, OSError, ValueError) as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            include_traceback=True,
            logger=logger,
        )

    exit_code = 0
    with BuildSession(args.tasks, is_ci=args.ci, config=config) as session:
        try:
            session.configure()
        except LifecycleError as e:
            handle_cli_error(
                error=e,
                context="lifecycle configuration",
                exit_code=1,
                logger=logger,
            )

        summary = session.summary()
        logger.info(f"Requested tasks: {summary['requested_tasks']}")
        logger.info(f"CI server: {summary['is_ci']}")
        logger.info(f"Lifecycle tasks: {', '.join(summary['tasks'])}")
        logger.info(f"Global properties: {summary['properties']}")
        if summary["monitor_timeout"] is not None:
            logger.info(f"Diagnostic monitor timeout: {summary['monitor_timeout']}")

        if args.command:
            exit_code = run_build_process(args.command)

    sys.exit(exit_code)


if __name__ == "__main__":
    main_cli()
