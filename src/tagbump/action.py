""" The pipeline of a run: resolve the release, extract the version, update the files and publish the changes. """

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

from git.repo import Repo

from tagbump.config import Configuration, GithubContext
from tagbump.github import GithubClient, resolve_release
from tagbump.publisher import publish_changes
from tagbump.updater import update_files
from tagbump.version import extract_version

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class ActionResult:
    version: str
    changed_files: list[Path]
    committed: bool


def run(
    config: Configuration,
    context: GithubContext,
    client: GithubClient | None = None,
    repo: Repo | None = None,
    dry: bool = False,
) -> ActionResult:
    """Runs the steps in sequence; any error aborts the remainder of the run.

    :param client: The GitHub API client. Created from the context if a token is configured and not specified.
    :param repo: The Git repository to commit to. Opened from the workspace if not specified.
    :param dry: Do not write files and do not commit.
    """

    if config.token:
        if client is None:
            client = GithubClient(context.api_url, config.token)
        config = resolve_release(client, context, config)
    else:
        logger.info('Skipping getting the latest release since no "repo-token" was provided')

    version = extract_version(context.tag, config.pattern)
    changed_files = update_files(context.workspace, config.files, version, config.spacing, config.swagger, dry)

    if not changed_files:
        logger.info("Skipped commit since no files were changed")
        return ActionResult(version, changed_files, False)

    if dry:
        logger.info("Skipped commit of %d file(s) in dry mode", len(changed_files))
        return ActionResult(version, changed_files, False)

    if repo is None:
        repo = Repo(context.workspace, search_parent_directories=True)
    publish_changes(repo, version, config)
    return ActionResult(version, changed_files, True)
