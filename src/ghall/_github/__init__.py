from .rest import Repository, dedupe, parse_repositories
from .web import fetch_repos, list_repos

__all__ = ["Repository", "dedupe", "fetch_repos", "list_repos", "parse_repositories"]
