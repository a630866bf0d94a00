""" Loads the action inputs and the GitHub Actions context from the environment and validates them into the
#Configuration that the rest of the run works with. """

from __future__ import annotations

import dataclasses
import logging
import os
import re
import typing as t
from pathlib import Path

from databind.core.settings import Alias, ExtraKeys

from tagbump.errors import ConfigurationError

logger = logging.getLogger(__name__)

TAG_REF_PREFIX = "refs/tags/"
DEFAULT_API_URL = "https://api.github.com"
TRUTHY_VALUES = frozenset(["true", "1", "yes", "on"])
FALSY_VALUES = frozenset(["false", "0", "no", "off", ""])


@dataclasses.dataclass
class ActionInputs:
    """The raw action inputs as declared in `action.yml`. All values are strings, the same as the GitHub runner
    exports them; conversion and validation happens in #Configuration.from_inputs()."""

    #: Token for the GitHub API. When empty, the release lookup is skipped.
    repo_token: t.Annotated[str, Alias("repo-token")] = ""

    #: Regular expression that extracts the version from the tag.
    version_regexp: t.Annotated[str, Alias("version-regexp")] = r"\d+\.\d+\.\d+"

    #: Comma separated list of files relative to the workspace.
    files: str = "package.json"

    #: The commit message. Every `%version%` is replaced with the extracted version.
    commit_message: t.Annotated[str, Alias("commit-message")] = "CI: bump version to %version%"

    #: Indentation width used when writing the files back.
    spacing_level: t.Annotated[str, Alias("spacing-level")] = "2"

    branch_name: t.Annotated[str, Alias("branch-name")] = ""
    author_name: t.Annotated[str, Alias("author-name")] = ""
    author_email: t.Annotated[str, Alias("author-email")] = ""

    #: Read the current version from `info.version` (OpenAPI/Swagger documents).
    swagger: str = "false"


def read_action_inputs(
    environ: t.Mapping[str, str] | None = None,
    overrides: t.Mapping[str, str | None] | None = None,
) -> ActionInputs:
    """Collects the `INPUT_*` variables from *environ* (defaults to #os.environ) and loads them into #ActionInputs.
    The GitHub runner exports an input named `repo-token` as `INPUT_REPO-TOKEN`. Values are stripped and empty
    values are treated as not set, such that the defaults apply. Non-empty values in *overrides*, keyed by input
    name, take precedence over the environment."""

    import databind.json

    if environ is None:
        environ = os.environ

    data: dict[str, str] = {}
    for key, value in environ.items():
        if key.startswith("INPUT_") and value.strip():
            data[key[len("INPUT_") :].lower()] = value.strip()
    for name, override in (overrides or {}).items():
        if override is not None and override.strip():
            data[name] = override.strip()

    logger.debug("Action inputs: %s", sorted(data))
    return databind.json.load(data, ActionInputs, settings=[ExtraKeys(True)])


@dataclasses.dataclass(frozen=True)
class GithubContext:
    """The subset of the GitHub Actions default environment variables that a run needs."""

    workspace: Path
    ref: str
    repository: str = ""
    api_url: str = DEFAULT_API_URL

    @property
    def tag(self) -> str:
        if self.ref.startswith(TAG_REF_PREFIX):
            return self.ref[len(TAG_REF_PREFIX) :]
        return self.ref

    @classmethod
    def from_environ(cls, environ: t.Mapping[str, str] | None = None) -> GithubContext:
        if environ is None:
            environ = os.environ
        if not environ.get("GITHUB_REF"):
            raise ConfigurationError("The GITHUB_REF environment variable is not set.")
        return cls(
            workspace=Path(environ.get("GITHUB_WORKSPACE") or Path.cwd()),
            ref=environ["GITHUB_REF"],
            repository=environ.get("GITHUB_REPOSITORY", ""),
            api_url=environ.get("GITHUB_API_URL") or DEFAULT_API_URL,
        )


def parse_bool(name: str, value: str) -> bool:
    if value.strip().lower() in TRUTHY_VALUES:
        return True
    if value.strip().lower() in FALSY_VALUES:
        return False
    raise ConfigurationError(f'Input "{name}" expects a boolean value, got {value!r}.')


def split_files(value: str) -> list[str]:
    """Splits the comma separated `files` input, stripping whitespace around each entry."""

    return [item.strip() for item in value.split(",") if item.strip()]


@dataclasses.dataclass(frozen=True)
class Configuration:
    """The validated configuration of a run. Immutable; #dataclasses.replace() is used where the release lookup
    fills in the branch and author."""

    pattern: re.Pattern[str]
    files: list[str]
    commit_message: str
    spacing: int
    token: str | None = None
    branch: str | None = None
    author_name: str | None = None
    author_email: str | None = None
    swagger: bool = False

    @classmethod
    def from_inputs(cls, inputs: ActionInputs) -> Configuration:
        try:
            pattern = re.compile(inputs.version_regexp)
        except re.error as exc:
            raise ConfigurationError(f'Input "version-regexp" is not a valid regular expression: {exc}') from exc

        try:
            spacing = int(inputs.spacing_level)
        except ValueError:
            raise ConfigurationError(
                f'Input "spacing-level" must be an integer, got {inputs.spacing_level!r}.'
            ) from None
        if spacing < 0:
            raise ConfigurationError(f'Input "spacing-level" must not be negative, got {spacing}.')

        if not inputs.repo_token and not inputs.branch_name:
            raise ConfigurationError("Either repo-token or branch-name must be supplied.")

        files = split_files(inputs.files)
        if not files:
            raise ConfigurationError('Input "files" does not name any file.')

        return cls(
            pattern=pattern,
            files=files,
            commit_message=inputs.commit_message,
            spacing=spacing,
            token=inputs.repo_token or None,
            branch=inputs.branch_name or None,
            author_name=inputs.author_name or None,
            author_email=inputs.author_email or None,
            swagger=parse_bool("swagger", inputs.swagger),
        )
