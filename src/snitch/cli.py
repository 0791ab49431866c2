"""Command line interface.

Usage::

    snitch list
    snitch report <owner/repo>
    snitch purge <owner/repo>
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Sequence

from snitch.config import DEFAULT_CREDENTIALS_PATH, GithubCredentials, ProjectConfig
from snitch.core.errors import SnitchError
from snitch.git import Git
from snitch.github import GithubClient
from snitch.todos.finder import TodoFinder
from snitch.todos.parser import TodoParser
from snitch.todos.reporter import TodoReporter

logger = logging.getLogger(__name__)


def prompt_yes_no(question: str, read: Callable[[str], str] | None = None) -> bool:
    """Ask ``question`` until the answer is ``y`` or ``n``.

    Raises
    ------
    SnitchError
        If standard input is closed before an answer is given.
    """
    read = read or input
    while True:
        try:
            answer = read(f"{question} [y/n] ")
        except EOFError:
            raise SnitchError("No answer on standard input") from None
        answer = answer.strip()
        if answer == "y":
            return True
        if answer == "n":
            return False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snitch",
        description="Keep TODO comments of a git repository in sync with GitHub issues.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log git commands and HTTP requests"
    )
    parser.add_argument(
        "-C", dest="directory", default=".", help="Run as if started in this directory"
    )
    parser.add_argument(
        "--credentials",
        default=str(DEFAULT_CREDENTIALS_PATH),
        help="INI file holding the GitHub token (default: %(default)s)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.add_parser("list", help="List all TODOs of the repository")
    report = subparsers.add_parser("report", help="Report TODOs as GitHub issues")
    report.add_argument("repo", metavar="owner/repo", help="GitHub repository to open issues in")
    purge = subparsers.add_parser("purge", help="Remove TODOs whose issues are closed")
    purge.add_argument("repo", metavar="owner/repo", help="GitHub repository the issues live in")
    return parser


def list_command(finder: TodoFinder) -> int:
    for todo in finder.find_all():
        print(todo.log_string())
    return 0


def report_command(reporter: TodoReporter) -> int:
    result = reporter.report()
    logger.info("Reported %d TODO(s), skipped %d", len(result), result.skipped)
    return 0


def purge_command(reporter: TodoReporter) -> int:
    result = reporter.purge()
    logger.info("Removed %d TODO(s), skipped %d", len(result), result.skipped)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = ProjectConfig.load(args.directory)
        git = Git(args.directory)
        finder = TodoFinder(git, TodoParser(config))

        if args.command == "list":
            return list_command(finder)

        credentials = GithubCredentials.from_file(args.credentials)
        tracker = GithubClient(credentials, args.repo)
        reporter = TodoReporter(finder, tracker, git, confirm=prompt_yes_no, config=config)
        if args.command == "report":
            return report_command(reporter)
        return purge_command(reporter)
    except (SnitchError, OSError) as e:
        print(f"snitch: {e}", file=sys.stderr)
        return 1


def run() -> None:
    """Console script entry point."""
    # lines decoded with surrogateescape must not crash the output
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(errors="backslashreplace")
    sys.exit(main())
