from dataclasses import dataclass
from typing import Iterable, Sequence

import orjson
from mashumaro.exceptions import InvalidFieldValue, MissingField
from mashumaro.mixins.orjson import DataClassORJSONMixin

from ..errors import ListingError


@dataclass
class Repository(DataClassORJSONMixin):
    name: str
    clone_url: str
    ssh_url: str = ""

    def url(self, private: bool = False) -> str:
        if private and self.ssh_url:
            return self.ssh_url
        return self.clone_url

    def __str__(self) -> str:
        return self.name


def parse_repositories(content: bytes, url: str = "") -> Sequence[Repository]:
    try:
        data = orjson.loads(content)
    except orjson.JSONDecodeError as e:
        raise ListingError(f"malformed JSON from {url}: {e}") from e

    if not isinstance(data, list):
        raise ListingError(
            f"expected a JSON array from {url}, got {type(data).__name__}"
        )

    for item in data:
        if not isinstance(item, dict):
            raise ListingError(
                f"expected repository objects from {url}, got {type(item).__name__}"
            )

    try:
        return [Repository.from_dict(item) for item in data]
    except (MissingField, InvalidFieldValue, ValueError) as e:
        raise ListingError(f"unexpected repository object from {url}: {e}") from e


def dedupe(repos: Iterable[Repository]) -> Sequence[Repository]:
    # first occurrence wins, so API order decides between duplicates
    seen: dict[str, Repository] = {}
    for repo in repos:
        seen.setdefault(repo.name, repo)
    return list(seen.values())
