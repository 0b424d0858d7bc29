import logging
import subprocess
import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Sequence

from mashumaro.exceptions import InvalidFieldValue, MissingField
from mashumaro.mixins.toml import DataClassTOMLMixin

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"


class OnError(str, Enum):
    CONTINUE = "continue"
    ABORT = "abort"


@dataclass
class ApiConfig:
    url: str = field(default=DEFAULT_API_URL)


@dataclass
class CloneConfig:
    output_dir: str = field(default=".")
    git_config: Sequence[str] = field(default_factory=list)
    on_error: OnError = field(default=OnError.CONTINUE)


@dataclass
class Config(DataClassTOMLMixin):
    api: ApiConfig = field(default_factory=ApiConfig)
    clone: CloneConfig = field(default_factory=CloneConfig)


CONFIG_FILE_PATH = Path("ghall.toml")


def load_config() -> Config:
    cfg_path = CONFIG_FILE_PATH

    if not cfg_path.exists():
        logger.debug(f"not found {cfg_path}, use default config")
        return Config()
    content = cfg_path.read_text(encoding="utf-8")
    logger.info(f"use config from {cfg_path}")
    try:
        config = Config.from_toml(content)
    except (tomllib.TOMLDecodeError, MissingField, InvalidFieldValue, ValueError) as e:
        raise ConfigError(f"invalid {cfg_path}: {e}") from e
    logger.debug(f"{config=}")
    return config


@dataclass(frozen=True)
class Credentials:
    user: str
    token: str

    def __repr__(self) -> str:
        # keep the token out of debug logs
        return f"Credentials(user={self.user!r}, token='***')"


@dataclass(frozen=True)
class QueryPlan:
    urls: tuple[str, ...]
    auth: Credentials | None = None

    @property
    def authenticated(self) -> bool:
        return self.auth is not None


AFFILIATIONS = ("owner", "organization_member", "collaborator")


def read_git_config(key: str) -> str | None:
    cmd = ["git", "config", "--global", "--get", key]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError:
        logger.debug("git not found, cannot read git config")
        return None

    if result.returncode != 0:
        return None
    value = result.stdout.strip()
    return value or None


def resolve_query_plan(
    username: str,
    user: str | None,
    token: str | None,
    api_url: str = DEFAULT_API_URL,
) -> QueryPlan:
    """Decide between the authenticated affiliation queries and the public
    per-user listing.

    Credentials are only used when both values are present and the git
    user is the one being cloned; the public listing is used otherwise.
    """
    api_url = api_url.removesuffix("/")
    public = QueryPlan(urls=(f"{api_url}/users/{username}/repos",))

    if not user:
        logger.info("github.user not set in git config, listing public repos only")
        return public
    if not token:
        logger.info("github.token not set in git config, listing public repos only")
        return public
    if user != username:
        logger.info(
            f"github.user ({user}) does not match {username}, "
            "listing public repos only"
        )
        return public

    # the API has no single query for all affiliations
    urls = tuple(
        f"{api_url}/user/repos?affiliation={affiliation}"
        for affiliation in AFFILIATIONS
    )
    return QueryPlan(urls=urls, auth=Credentials(user, token))


def load_query_plan(username: str, api_url: str = DEFAULT_API_URL) -> QueryPlan:
    user = read_git_config("github.user")
    token = read_git_config("github.token")
    plan = resolve_query_plan(username, user, token, api_url)
    logger.debug(f"{plan=}")
    return plan
