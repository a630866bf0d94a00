from __future__ import annotations

import logging
import os

from tagbump.action import run
from tagbump.application import Command, option
from tagbump.config import Configuration, GithubContext, read_action_inputs

logger = logging.getLogger(__name__)

#: The action inputs that take a value, in the order they are declared in `action.yml`.
VALUE_INPUTS = [
    ("repo-token", "Token for the GitHub API, used to look up the release of the tag."),
    ("version-regexp", "Regular expression that extracts the version from the tag."),
    ("files", "Comma separated list of files to update, relative to the workspace."),
    ("commit-message", "The commit message. <code>%version%</code> is replaced with the new version."),
    ("spacing-level", "The indentation width when writing the files."),
    ("branch-name", "The branch to push to. Taken from the release if not set."),
    ("author-name", "The commit author name. Taken from the release author if not set."),
    ("author-email", "The commit author email. Taken from the release author if not set."),
]


class UpdateCommand(Command):
    """Update the version in JSON and YAML files from the pushed tag and commit the change.

    Every option falls back to the GitHub Actions input of the same name, i.e. the
    <code>INPUT_*</code> environment variables. The tag is read from <code>GITHUB_REF</code>
    and the files are resolved relative to <code>GITHUB_WORKSPACE</code>.

    If <opt>--repo-token</opt> is set, the release of the tag is fetched from the GitHub API.
    The commit is pushed to the release's target branch, and unless an author name or email
    is given, the commit author is the author of the release.
    """

    name = "update"
    options = [
        *(option(name, None, description, flag=False) for name, description in VALUE_INPUTS),
        option("swagger", None, "Read the current version from <code>info.version</code>."),
        option("ref", None, "The Git ref of the tag. Defaults to <code>GITHUB_REF</code>.", flag=False),
        option("workspace", None, "The workspace directory. Defaults to <code>GITHUB_WORKSPACE</code>.", flag=False),
        option("dry", "d", "Show which files would be updated, but do not write or commit them."),
    ]

    def handle(self) -> int:
        overrides = {name: self.option(name) for name, _ in VALUE_INPUTS}
        if self.option("swagger"):
            overrides["swagger"] = "true"

        logger.info("Setting input and environment variables")
        config = Configuration.from_inputs(read_action_inputs(overrides=overrides))

        environ = dict(os.environ)
        if self.option("ref"):
            environ["GITHUB_REF"] = self.option("ref")
        if self.option("workspace"):
            environ["GITHUB_WORKSPACE"] = self.option("workspace")
        context = GithubContext.from_environ(environ)

        result = run(config, context, dry=self.option("dry"))

        if result.committed:
            logger.info("Updated files version successfully")
        elif result.changed_files:
            self.line(f"Would update version to <info>{result.version}</info> in:")
            for path in result.changed_files:
                self.line(f"  {path}")
        return 0
