"""
Tests for decoding and deduplicating repository listings.
"""

import unittest

import orjson

from ghall._github import Repository, dedupe, parse_repositories
from ghall.errors import ListingError


def repo_json(name, clone_url=None, ssh_url=None, **extra):
    item = {
        "name": name,
        "clone_url": clone_url or f"https://github.com/alice/{name}.git",
        **extra,
    }
    if ssh_url is not None:
        item["ssh_url"] = ssh_url
    return item


class TestParseRepositories(unittest.TestCase):

    def test_ignores_unknown_fields(self):
        content = orjson.dumps(
            [repo_json("repo1", ssh_url="git@github.com:alice/repo1.git", private=False, id=1)]
        )
        repos = parse_repositories(content)

        self.assertEqual(
            repos,
            [
                Repository(
                    name="repo1",
                    clone_url="https://github.com/alice/repo1.git",
                    ssh_url="git@github.com:alice/repo1.git",
                )
            ],
        )

    def test_empty_array(self):
        self.assertEqual(parse_repositories(b"[]"), [])

    def test_malformed_json(self):
        with self.assertRaises(ListingError):
            parse_repositories(b"[{", "https://api.github.com/users/alice/repos")

    def test_object_instead_of_array(self):
        content = orjson.dumps({"message": "Not Found"})
        with self.assertRaisesRegex(ListingError, "JSON array"):
            parse_repositories(content)

    def test_missing_name(self):
        content = orjson.dumps([{"clone_url": "https://x/a.git"}])
        with self.assertRaises(ListingError):
            parse_repositories(content)

    def test_item_not_an_object(self):
        with self.assertRaises(ListingError):
            parse_repositories(b'["repo1"]')

    def test_mixed_items(self):
        content = orjson.dumps([repo_json("repo1"), 42])
        with self.assertRaisesRegex(ListingError, "repository objects"):
            parse_repositories(content)


class TestRepositoryUrl(unittest.TestCase):

    def setUp(self):
        self.repo = Repository(
            name="repo1",
            clone_url="https://github.com/alice/repo1.git",
            ssh_url="git@github.com:alice/repo1.git",
        )

    def test_public_uses_clone_url(self):
        self.assertEqual(self.repo.url(), "https://github.com/alice/repo1.git")
        self.assertEqual(self.repo.url(private=False), "https://github.com/alice/repo1.git")

    def test_private_uses_ssh_url(self):
        self.assertEqual(self.repo.url(private=True), "git@github.com:alice/repo1.git")

    def test_private_without_ssh_url(self):
        repo = Repository(name="repo1", clone_url="https://x/alice/repo1.git")
        self.assertEqual(repo.url(private=True), "https://x/alice/repo1.git")


class TestDedupe(unittest.TestCase):

    def test_first_occurrence_wins(self):
        repos = [
            Repository("repo1", "https://x/alice/repo1.git"),
            Repository("repo2", "https://x/alice/repo2.git"),
            Repository("repo1", "https://x/alice/repo1-dup.git"),
        ]
        unique = dedupe(repos)

        self.assertEqual([r.name for r in unique], ["repo1", "repo2"])
        self.assertEqual(unique[0].clone_url, "https://x/alice/repo1.git")

    def test_each_name_once(self):
        names = ["a", "b", "a", "c", "b", "a"]
        unique = dedupe(Repository(n, f"https://x/{n}.git") for n in names)
        self.assertEqual(sorted(r.name for r in unique), ["a", "b", "c"])


if __name__ == "__main__":
    unittest.main()
