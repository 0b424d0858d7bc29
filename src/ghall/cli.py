"""clone all repositories of a GitHub user

Repositories already present in the current directory are skipped.
When git config github.user matches <username> and github.token is set,
private and organization repositories are listed too.
"""

import argparse
import logging
import sys
from dataclasses import dataclass, replace
from typing import Sequence

from ._github import dedupe, list_repos
from .cmd_clone import Cloner, GitCloner, clone_repos
from .config import Config, OnError, load_config, load_query_plan
from .errors import GhallError
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunOptions:
    username: str
    quiet: bool = False
    use_private_url: bool = False
    dry_run: bool = False
    on_error: OnError | None = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghall",
        description=__doc__,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument("username", nargs="?", default="", help="GitHub username")
    parser.add_argument(
        "-q", dest="quiet", action="store_true", help="suppress non-essential output"
    )
    url_group = parser.add_mutually_exclusive_group()
    url_group.add_argument(
        "--public",
        dest="use_private_url",
        action="store_false",
        help="clone with the HTTPS URL (default)",
    )
    url_group.add_argument(
        "--private",
        dest="use_private_url",
        action="store_true",
        help="clone with the SSH URL",
    )
    parser.set_defaults(use_private_url=False)
    parser.add_argument(
        "--dry-run", action="store_true", help="list what would be cloned"
    )
    parser.add_argument(
        "--on-error",
        choices=[e.value for e in OnError],
        default=None,
        help="what to do when git clone fails (default: from ghall.toml, else continue)",
    )
    parser.add_argument("--debug", action="store_true", help="Set log level as DEBUG")
    return parser


def clone_all(
    options: RunOptions,
    config: Config,
    cloner: Cloner | None = None,
) -> int:
    """List the user's repositories and clone the missing ones.

    Returns the process exit status.
    """
    clone_config = config.clone
    if options.on_error is not None:
        clone_config = replace(clone_config, on_error=options.on_error)

    if cloner is None:
        cloner = GitCloner(quiet=options.quiet, git_config=clone_config.git_config)

    plan = load_query_plan(options.username, config.api.url)

    try:
        repos = dedupe(list_repos(plan))
        logger.debug(f"{len(repos)} repos to check")
        report = clone_repos(
            repos,
            cloner,
            clone_config,
            private=options.use_private_url,
            dry_run=options.dry_run,
        )
    except GhallError as e:
        logger.error(f"Error: {e}")
        return 1

    logger.info(str(report))
    if not report.ok:
        logger.error(f"failed to clone: {', '.join(report.failed)}")
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.username in ("", "help"):
        parser.print_help()
        sys.exit(0)

    options = RunOptions(
        username=args.username,
        # a dry run exists to show its output
        quiet=args.quiet and not args.dry_run,
        use_private_url=args.use_private_url,
        dry_run=args.dry_run,
        on_error=OnError(args.on_error) if args.on_error else None,
    )

    setup_logging(args.debug, options.quiet)
    logger.debug(f"{args=}")

    try:
        config = load_config()
    except GhallError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)

    sys.exit(clone_all(options, config))


if __name__ == "__main__":
    main()
