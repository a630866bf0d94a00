""" The closed set of file formats that versions can be written to. Adding a format means adding a member to
#FileFormat and the corresponding branches in #FileFormat.loads() and #FileFormat.dumps(). """

from __future__ import annotations

import enum
import json
import typing as t
from pathlib import Path

import yaml

from tagbump.errors import MalformedDocumentError, UnsupportedExtensionError


class FileFormat(enum.Enum):
    JSON = "json"
    YAML = "yaml"

    @staticmethod
    def from_path(path: Path | str) -> FileFormat:
        """Returns the format for the extension of *path*. Raises #UnsupportedExtensionError for any extension
        that is not explicitly registered."""

        extension = Path(path).suffix.lstrip(".")
        for file_format, extensions in EXTENSIONS.items():
            if extension in extensions:
                return file_format
        raise UnsupportedExtensionError(extension)

    def loads(self, text: str) -> dict[str, t.Any]:
        """Parses *text* and returns the document, which must be a mapping."""

        try:
            if self is FileFormat.JSON:
                data = json.loads(text)
            elif self is FileFormat.YAML:
                data = yaml.safe_load(text)
            else:
                raise AssertionError(self)
        except (ValueError, yaml.YAMLError) as exc:
            raise MalformedDocumentError(f"Could not parse {self.value.upper()} document: {exc}") from exc

        if not isinstance(data, dict):
            raise MalformedDocumentError(
                f"Expected a {self.value.upper()} document with a mapping at the top, got {type(data).__name__}"
            )
        return data

    def dumps(self, data: t.Mapping[str, t.Any], indent: int) -> str:
        """Serializes *data* with *indent* spaces of indentation. Keys are written in insertion order."""

        if self is FileFormat.JSON:
            if indent == 0:
                return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
            return json.dumps(data, ensure_ascii=False, indent=indent)
        elif self is FileFormat.YAML:
            return yaml.safe_dump(
                data,
                indent=indent,
                sort_keys=False,
                default_flow_style=False,
                allow_unicode=True,
            )
        raise AssertionError(self)


EXTENSIONS: dict[FileFormat, tuple[str, ...]] = {
    FileFormat.JSON: ("json",),
    FileFormat.YAML: ("yaml", "yml"),
}
