""" A minimal client for the GitHub REST API and the release lookup that fills in the target branch and the commit
author of a run. """

from __future__ import annotations

import dataclasses
import logging
import urllib.parse

import requests

from tagbump.config import Configuration, GithubContext
from tagbump.errors import ConfigurationError, ReleaseNotFoundError

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Release:
    tag_name: str

    #: The branch (or commit SHA) that the release's tag was created from.
    target_commitish: str

    #: The login of the user that created the release.
    author_login: str


@dataclasses.dataclass(frozen=True)
class User:
    login: str
    name: str | None
    email: str | None


class GithubClient:
    def __init__(self, github_api_url: str, token: str) -> None:
        """
        :param github_api_url: The URL of the GitHub API, e.g. https://api.github.com. In GitHub CI, this is
            available as the environment variable `GITHUB_API_URL`.
        :param token: The token for the GitHub API, usually `${{ secrets.GITHUB_TOKEN }}` passed as the `repo-token`
            input.
        """

        self._github_api_url = github_api_url.rstrip("/")
        self._session = requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "Authorization": f"Bearer {token}",
            }
        )

    def get_release_by_tag(self, repository: str, tag: str) -> Release:
        """
        Fetches the release for the given tag.

        :param repository: The owner and repository name, e.g. "octocat/hello-world". In GitHub CI, this is available
            as the environment variable `GITHUB_REPOSITORY`.
        :param tag: The tag name without the `refs/tags/` prefix.
        :raise ReleaseNotFoundError: If there is no release for the tag.
        """

        tag_path = urllib.parse.quote(tag, safe="")
        response = self._session.get(f"{self._github_api_url}/repos/{repository}/releases/tags/{tag_path}")
        if response.status_code == 404:
            raise ReleaseNotFoundError(tag)
        self._raise_for_status(response)
        data = response.json()

        return Release(
            tag_name=data["tag_name"],
            target_commitish=data["target_commitish"],
            author_login=data["author"]["login"],
        )

    def get_user(self, username: str) -> User:
        """
        Fetches the public profile of a user. The display name and email are `None` if the user did not make them
        public.
        """

        response = self._session.get(f"{self._github_api_url}/users/{urllib.parse.quote(username, safe='')}")
        self._raise_for_status(response)
        data = response.json()

        return User(login=data["login"], name=data.get("name"), email=data.get("email"))

    def _raise_for_status(self, response: requests.Response) -> None:
        try:
            response.raise_for_status()
        except requests.HTTPError:
            logger.warning(
                "Request to '%s' returned status code %d with body: %s",
                response.request.url,
                response.status_code,
                response.text,
            )
            raise


def resolve_release(client: GithubClient, context: GithubContext, config: Configuration) -> Configuration:
    """Looks up the release of the pushed tag and returns a copy of *config* with the branch set to the release's
    target branch. If neither author name nor email are configured, they are taken from the public profile of the
    release author."""

    if not context.repository:
        raise ConfigurationError("The GITHUB_REPOSITORY environment variable is not set.")

    tag = context.tag
    logger.info("Fetching release for tag <subj>%s</subj> in <obj>%s</obj>", tag, context.repository)
    release = client.get_release_by_tag(context.repository, tag)

    # The API may resolve the tag loosely; only an exact match counts.
    if release.tag_name != tag:
        raise ReleaseNotFoundError(tag)

    config = dataclasses.replace(config, branch=release.target_commitish)

    if not config.author_name and not config.author_email:
        logger.info("Getting author and email from release information")
        user = client.get_user(release.author_login)
        config = dataclasses.replace(config, author_name=user.name, author_email=user.email)
        logger.info("Nice to meet you <subj>%s</subj> (<obj>%s</obj>)!", user.name, user.email)

    return config
