""" The cleo command-line application. Logging is configured here based on the verbosity flags, and errors that abort
a command are logged such that they show up as a failure annotation on the GitHub Actions job. """

from __future__ import annotations

import logging
import textwrap
import typing as t

from cleo.application import Application as BaseCleoApplication  # type: ignore[import]
from cleo.commands.command import Command as _BaseCommand  # type: ignore[import]
from cleo.helpers import option  # type: ignore[import]
from cleo.io.io import IO  # type: ignore[import]
from git.exc import GitCommandError

from tagbump import __version__

__all__ = ["Command", "option", "IO", "Application"]
logger = logging.getLogger(__name__)


class Command(_BaseCommand):
    """Derives the help text and description from the class docstring unless they are set explicitly."""

    help: str
    description: str

    def __init_subclass__(cls) -> None:
        if not cls.help:
            first_line, remainder = (cls.__doc__ or "").partition("\n")[::2]
            cls.help = (first_line.strip() + "\n" + textwrap.dedent(remainder)).strip()
        cls.description = cls.description or (cls.help.strip().splitlines()[0] if cls.help else None) or ""


class Application(BaseCleoApplication):
    from cleo.formatters.style import Style  # type: ignore[import]
    from cleo.io.inputs.input import Input  # type: ignore[import]
    from cleo.io.outputs.output import Output  # type: ignore[import]

    _styles: dict[str, Style]

    def __init__(self, name: str = "tagbump", version: str = __version__) -> None:
        super().__init__(name, version)
        self._styles = {}
        self.add_style("code", "dark_gray")
        self.add_style("opt", "cyan", options=["italic"])

        from tagbump.commands.update import UpdateCommand

        self.add(UpdateCommand())

    def add_style(self, name: str, fg: str | None = None, bg: str | None = None, options: list[str] | None = None):
        self._styles[name] = self.Style(fg, bg, options)

    def create_io(
        self, input: Input | None = None, output: Output | None = None, error_output: Output | None = None
    ) -> IO:
        io = super().create_io(input, output, error_output)
        for style_name, style in self._styles.items():
            io.output.formatter.set_style(style_name, style)
            io.error_output.formatter.set_style(style_name, style)
        return io

    def render_error(self, error: Exception, io: IO) -> None:
        if isinstance(error, GitCommandError):
            msg = "Command <subj>%s</subj> failed (exit code: <val>%s</val>)"
            command = error.command if isinstance(error.command, str) else " ".join(map(str, error.command))
            args: tuple[t.Any, ...] = (command, error.status)
            stderr = (error.stderr or "").strip()
            if stderr:
                msg += "\n%s"
                args += (stderr,)
            logger.error(msg, *args)
        else:
            logger.error("%s", error)

        super().render_error(error, io)

    def _configure_io(self, io: IO) -> None:
        from tagbump.util.logging import WorkflowCommandFormatter

        fmt = "%(message)s"
        if io.input.has_parameter_option("-vvv"):
            fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
            level = logging.DEBUG
        elif io.input.has_parameter_option(["-vv", "-v"]):
            level = logging.DEBUG
        elif io.input.has_parameter_option("-q"):
            level = logging.WARNING
        else:
            level = logging.INFO

        logging.basicConfig(level=level)
        WorkflowCommandFormatter(fmt).install()

        super()._configure_io(io)
