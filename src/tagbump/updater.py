from __future__ import annotations

import dataclasses
import logging
import typing as t
from pathlib import Path

from tagbump.formats import FileFormat

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class VersionFile:
    """A file that carries a version number, loaded for the duration of its update."""

    #: The file path relative to the workspace, as it was configured.
    name: str

    #: The absolute path of the file.
    path: Path

    #: The file contents as they were read from disk.
    text: str

    format: FileFormat
    content: dict[str, t.Any]
    changed: bool = False

    @classmethod
    def load(cls, workspace: Path, name: str) -> VersionFile:
        """Reads and parses the file *name* in *workspace*. Raises #UnsupportedExtensionError before the file is
        read if the extension is not known, and #OSError if it cannot be read."""

        file_format = FileFormat.from_path(name)
        path = workspace / name
        text = path.read_text(encoding="utf-8")
        return cls(name, path, text, file_format, file_format.loads(text))

    def current_version(self, swagger: bool = False) -> t.Any:
        """Returns the version value that is compared against the new version. In *swagger* mode, the version is
        read from `info.version`, otherwise from the top-level `version` key."""

        if swagger:
            info = self.content.get("info")
            return info.get("version") if isinstance(info, dict) else None
        return self.content.get("version")

    def apply(self, version: str, swagger: bool = False) -> bool:
        """Sets the top-level `version` key to *version* unless #current_version() already equals it. Note that
        the top-level key is written in *swagger* mode, too. Returns #changed."""

        current = self.current_version(swagger)
        if current == version:
            logger.info("  - <subj>%s</subj>: Skip since equal versions", self.name)
            return False

        logger.info(
            '  - <subj>%s</subj>: Update version from <val>"%s"</val> to <val>"%s"</val>', self.name, current, version
        )
        self.content["version"] = version
        self.changed = True
        return True

    def dumps(self, indent: int) -> str:
        return self.format.dumps(self.content, indent)

    def save(self, indent: int) -> None:
        self.path.write_text(self.dumps(indent), encoding="utf-8")


def update_files(
    workspace: Path,
    files: t.Sequence[str],
    version: str,
    spacing: int,
    swagger: bool = False,
    dry: bool = False,
) -> list[Path]:
    """Writes *version* into each of the *files* in order and returns the paths of the files that were rewritten
    (or would have been, if *dry* is set). Files are written as they are processed; when a later file fails, the
    earlier ones stay modified on disk."""

    logger.info("Updating files version field")
    changed: list[Path] = []
    for name in files:
        version_file = VersionFile.load(workspace, name)
        if version_file.apply(version, swagger):
            if not dry:
                version_file.save(spacing)
            changed.append(version_file.path)
    return changed
