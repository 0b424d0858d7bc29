"""clone missing repositories

Repositories whose name already exists in the output directory are skipped.
"""

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, Sequence

from ._github import Repository
from .config import CloneConfig, OnError
from .errors import CloneError

logger = logging.getLogger(__name__)


class Cloner(Protocol):
    def clone(self, url: str, cwd: Path) -> int: ...


class GitCloner:
    """Runs `git clone <url>` and waits for it to exit."""

    def __init__(self, quiet: bool = False, git_config: Sequence[str] = ()):
        self.quiet = quiet
        self.git_config = list(git_config)

    def clone(self, url: str, cwd: Path) -> int:
        cmd = ["git", "clone", *self.git_config, url]
        logger.info(f"Running: {' '.join(cmd)}")

        output = subprocess.DEVNULL if self.quiet else None
        try:
            result = subprocess.run(cmd, cwd=cwd, stdout=output, stderr=output)
        except FileNotFoundError:
            logger.error("git not found in PATH")
            return 127
        return result.returncode


@dataclass
class CloneReport:
    cloned: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    planned: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return len(self.failed) == 0

    def __str__(self) -> str:
        return (
            f"{len(self.cloned)} cloned, {len(self.skipped)} skipped, "
            f"{len(self.planned)} to clone, {len(self.failed)} failed"
        )


def clone_repos(
    repos: Sequence[Repository],
    cloner: Cloner,
    config: CloneConfig,
    *,
    private: bool = False,
    dry_run: bool = False,
) -> CloneReport:
    """Clone every repository not already present in `config.output_dir`.

    A failed clone is recorded in the report. With `OnError.ABORT` the first
    failure raises `CloneError` instead; repositories after it are left
    untouched.
    """
    output_dir = Path(config.output_dir)
    if not dry_run:
        output_dir.mkdir(parents=True, exist_ok=True)
    report = CloneReport()

    for repo in repos:
        if output_dir.joinpath(repo.name).exists():
            logger.info(f"skip {repo.name}: already exists")
            report.skipped.append(repo.name)
            continue

        url = repo.url(private)
        if dry_run:
            logger.info(f"would clone {repo.name} from {url}")
            report.planned.append(repo.name)
            continue

        returncode = cloner.clone(url, output_dir)
        if returncode == 0:
            report.cloned.append(repo.name)
            continue

        logger.warning(f"git clone of {repo.name} exited with status {returncode}")
        report.failed.append(repo.name)
        if config.on_error == OnError.ABORT:
            raise CloneError(repo.name, returncode)

    return report
