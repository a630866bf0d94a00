from __future__ import annotations

import logging

from git.repo import Repo

from tagbump.config import Configuration
from tagbump.errors import ConfigurationError

logger = logging.getLogger(__name__)

VERSION_PLACEHOLDER = "%version%"


def render_commit_message(template: str, version: str) -> str:
    return template.replace(VERSION_PLACEHOLDER, version)


def publish_changes(repo: Repo, version: str, config: Configuration, remote: str = "origin") -> None:
    """Configures the commit author, commits all modified tracked files and pushes the commit to the configured
    branch. Each step invokes the `git` binary; the first one that fails raises #git.exc.GitCommandError."""

    if not config.branch:
        raise ConfigurationError("No branch to push to; supply branch-name or repo-token.")

    logger.info("Committing file changes")
    if not config.author_name:
        logger.warning("No commit author name available, configuring an empty <val>user.name</val>")
    if not config.author_email:
        logger.warning("No commit author email available, configuring an empty <val>user.email</val>")
    repo.git.config("--global", "user.name", config.author_name or "")
    repo.git.config("--global", "user.email", config.author_email or "")

    repo.git.commit("-am", render_commit_message(config.commit_message, version))

    logger.info("Pushing to <subj>%s</subj> branch <obj>%s</obj>", remote, config.branch)
    repo.git.push("-u", remote, f"HEAD:{config.branch}")
