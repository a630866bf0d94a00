class TagbumpError(Exception):
    """Base class for errors that abort a run with a descriptive message."""


class ConfigurationError(TagbumpError):
    pass


class ReleaseNotFoundError(TagbumpError):
    def __init__(self, tag: str) -> None:
        super().__init__(f'Release with name "{tag}" was not found')
        self.tag = tag


class VersionMismatchError(TagbumpError):
    def __init__(self, tag: str, pattern: str) -> None:
        super().__init__(f'RegExp {pattern!r} could not be matched to latest tag "{tag}"')
        self.tag = tag
        self.pattern = pattern


class UnsupportedExtensionError(TagbumpError):
    def __init__(self, extension: str) -> None:
        super().__init__(
            f'Unsupported file extension "{extension}".\n'
            "To add it you can simply submit a PR adding a new parser."
        )
        self.extension = extension


class MalformedDocumentError(TagbumpError):
    pass
