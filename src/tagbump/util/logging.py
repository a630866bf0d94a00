""" Provides a logging formatter that understands the emphasis tags used in log messages and renders records as
GitHub Actions workflow commands where that makes a difference. """

from __future__ import annotations

import logging
import os
import re
import typing as t

TAG_REGEX = re.compile(r"</?(subj|obj|val)>")

#: Maps log levels to the workflow command that annotates the job. Records below WARNING are printed as-is,
#: except for DEBUG records which only show in the job log when step debugging is enabled.
WORKFLOW_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def strip_tags(text: str) -> str:
    return TAG_REGEX.sub("", text)


def escape_workflow_data(text: str) -> str:
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def is_github_actions(environ: t.Mapping[str, str] | None = None) -> bool:
    return (os.environ if environ is None else environ).get("GITHUB_ACTIONS") == "true"


class WorkflowCommandFormatter(logging.Formatter):
    """A formatter that removes the `<subj>`, `<obj>` and `<val>` emphasis tags from messages. With *workflow_commands*
    enabled, debug, warning and error records are formatted as `::debug::`, `::warning::` and `::error::` commands;
    an error record is what marks the GitHub Actions step as failed with its message."""

    def __init__(self, fmt: str = "%(message)s", workflow_commands: bool | None = None) -> None:
        super().__init__(fmt)
        self.workflow_commands = is_github_actions() if workflow_commands is None else workflow_commands

    def format(self, record: logging.LogRecord) -> str:
        message = strip_tags(super().format(record))
        command = WORKFLOW_COMMANDS.get(record.levelno) if self.workflow_commands else None
        if command:
            return f"::{command}::{escape_workflow_data(message)}"
        return message

    def install(self) -> None:
        """Install the formatter on all stream handlers of the root logger."""

        for handler in logging.root.handlers:
            if isinstance(handler, logging.StreamHandler):
                handler.setFormatter(self)
