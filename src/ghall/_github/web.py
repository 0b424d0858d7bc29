import asyncio
import base64
import logging
from typing import Sequence

import aiohttp
from aiohttp import ClientSession as Session

from ..config import Credentials, QueryPlan
from ..errors import ListingError
from .rest import Repository, parse_repositories

logger = logging.getLogger(__name__)

HEADERS = {"Accept": "application/vnd.github.v3+json"}


def basic_auth_header(auth: Credentials) -> str:
    encoded = base64.b64encode(f"{auth.user}:{auth.token}".encode()).decode("ascii")
    return f"Basic {encoded}"


def list_repos(plan: QueryPlan) -> Sequence[Repository]:
    logger.debug("into asyncio runtime")
    return asyncio.run(fetch_repos(plan))


async def fetch_repos(plan: QueryPlan) -> Sequence[Repository]:
    """Concatenate the listings of every plan URL, duplicates included."""
    headers = dict(HEADERS)
    if plan.auth is not None:
        headers["Authorization"] = basic_auth_header(plan.auth)

    repos: list[Repository] = []
    async with aiohttp.ClientSession(headers=headers) as client:
        # one request at a time, in plan order
        for url in plan.urls:
            repos.extend(await _get_repos(client, url))

    logger.debug(f"{len(repos)} repos listed")
    return repos


async def _get_repos(client: Session, url: str) -> Sequence[Repository]:
    logger.debug(f"GET {url}")
    try:
        async with client.get(url) as resp:
            resp.raise_for_status()
            content = await resp.read()
    except aiohttp.ClientResponseError as e:
        raise ListingError(f"request to {url} failed: {e.status} {e.message}") from e
    except aiohttp.ClientError as e:
        raise ListingError(f"request to {url} failed: {e}") from e

    return parse_repositories(content, url)
