import dataclasses
import json
import re
import typing as t
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path
from threading import Thread

import pytest
import requests
from pytest import fixture

from tagbump.config import Configuration, GithubContext
from tagbump.errors import ReleaseNotFoundError
from tagbump.github import GithubClient, Release, User, resolve_release


@dataclasses.dataclass
class MockReleaseData:
    repository: str
    tag_name: str
    target_commitish: str
    author_login: str


class MockGitHubApiServer:
    """
    A simple mock for the releases and users endpoints of the GitHub API.
    """

    class Handler(BaseHTTPRequestHandler):
        def __init__(self, *args, server_state: "MockGitHubApiServer", **kwargs):
            self._state = server_state
            super().__init__(*args, **kwargs)

        def log_message(self, format: str, *args: t.Any) -> None:
            pass

        def do_GET(self):
            self._state.requests.append((self.path, self.headers.get("Authorization")))

            if match := re.match(r"/repos/(.+/.+)/releases/tags/([^/]+)$", self.path):
                for release in self._state.releases:
                    # Mimic a backend that matches tags case-insensitively.
                    if match.group(1) == release.repository and match.group(2).lower() == release.tag_name.lower():
                        self._send_json(
                            {
                                "tag_name": release.tag_name,
                                "target_commitish": release.target_commitish,
                                "author": {"login": release.author_login},
                            }
                        )
                        return
            elif match := re.match(r"/users/([^/]+)$", self.path):
                user = self._state.users.get(match.group(1))
                if user is not None:
                    self._send_json({"login": user.login, "name": user.name, "email": user.email})
                    return

            self.send_error(404)

        def _send_json(self, data: t.Any) -> None:
            self.send_response(200)
            self.send_header("Content-Type", "application/json")
            self.end_headers()
            self.wfile.write(json.dumps(data).encode("utf-8"))

    def __init__(self) -> None:
        self.releases: list[MockReleaseData] = []
        self.users: dict[str, User] = {}
        self.requests: list[tuple[str, str | None]] = []
        self._server = HTTPServer(("localhost", 0), self.handler)
        self._thread = Thread(target=self._server.serve_forever)

    def handler(self, *args: t.Any, **kwargs: t.Any) -> Handler:
        return self.Handler(*args, server_state=self, **kwargs)

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._server.shutdown()
        self._thread.join()

    @property
    def addr(self) -> str:
        return f"http://localhost:{self._server.server_port}"


@fixture
def mock_api() -> t.Iterator[MockGitHubApiServer]:
    api = MockGitHubApiServer()
    api.start()
    try:
        yield api
    finally:
        api.stop()


def make_config(**kwargs) -> Configuration:
    return Configuration(
        pattern=re.compile(r"\d+\.\d+\.\d+"),
        files=["package.json"],
        commit_message="CI: bump version to %version%",
        spacing=2,
        **kwargs,
    )


def test__GithubClient__get_release_by_tag(mock_api: MockGitHubApiServer) -> None:
    mock_api.releases.append(MockReleaseData("octocat/hello-world", "v1.0.0", "main", "octocat"))

    client = GithubClient(mock_api.addr, "secret")

    assert client.get_release_by_tag("octocat/hello-world", "v1.0.0") == Release("v1.0.0", "main", "octocat")
    assert mock_api.requests == [("/repos/octocat/hello-world/releases/tags/v1.0.0", "Bearer secret")]


def test__GithubClient__get_release_by_tag__not_found(mock_api: MockGitHubApiServer) -> None:
    client = GithubClient(mock_api.addr, "secret")

    with pytest.raises(ReleaseNotFoundError, match='Release with name "v1.0.0" was not found'):
        client.get_release_by_tag("octocat/hello-world", "v1.0.0")


def test__GithubClient__get_user(mock_api: MockGitHubApiServer) -> None:
    mock_api.users["octocat"] = User("octocat", "The Octocat", None)

    client = GithubClient(mock_api.addr, "secret")

    assert client.get_user("octocat") == User("octocat", "The Octocat", None)
    with pytest.raises(requests.HTTPError):
        client.get_user("nobody")


def test__resolve_release__fills_in_branch_and_author(mock_api: MockGitHubApiServer, tmp_path: Path) -> None:
    mock_api.releases.append(MockReleaseData("octocat/hello-world", "v1.0.0", "develop", "octocat"))
    mock_api.users["octocat"] = User("octocat", "The Octocat", "octocat@github.com")
    context = GithubContext(tmp_path, "refs/tags/v1.0.0", "octocat/hello-world", mock_api.addr)

    config = resolve_release(GithubClient(mock_api.addr, "secret"), context, make_config(token="secret"))

    assert config.branch == "develop"
    assert config.author_name == "The Octocat"
    assert config.author_email == "octocat@github.com"


def test__resolve_release__keeps_configured_author(mock_api: MockGitHubApiServer, tmp_path: Path) -> None:
    mock_api.releases.append(MockReleaseData("octocat/hello-world", "v1.0.0", "develop", "octocat"))
    context = GithubContext(tmp_path, "refs/tags/v1.0.0", "octocat/hello-world", mock_api.addr)

    config = resolve_release(
        GithubClient(mock_api.addr, "secret"),
        context,
        make_config(token="secret", author_email="jane@doe.com"),
    )

    assert config.branch == "develop"
    assert config.author_name is None
    assert config.author_email == "jane@doe.com"
    assert [path for path, _ in mock_api.requests] == ["/repos/octocat/hello-world/releases/tags/v1.0.0"]


def test__resolve_release__requires_exact_tag_match(mock_api: MockGitHubApiServer, tmp_path: Path) -> None:
    mock_api.releases.append(MockReleaseData("octocat/hello-world", "V1.0.0", "main", "octocat"))
    context = GithubContext(tmp_path, "refs/tags/v1.0.0", "octocat/hello-world", mock_api.addr)

    with pytest.raises(ReleaseNotFoundError):
        resolve_release(GithubClient(mock_api.addr, "secret"), context, make_config(token="secret"))
