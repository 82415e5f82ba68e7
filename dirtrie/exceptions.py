"""Exceptions raised by dirtrie."""


class DirtrieError(Exception):
    """Base class for all dirtrie errors."""
    pass


class DirectoryUnavailable(DirtrieError):
    """A directory source could not open or read the requested path.

    Attributes:
        path: The directory path that was requested.
        reason: Human-readable explanation from the source.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read directory '{path}': {reason}")


class InvalidByteError(DirtrieError, ValueError):
    """A key contains a character outside the supported 0-127 range.

    Attributes:
        key: The rejected key.
        position: Index of the first offending character.
        value: Code point of the offending character.
    """

    def __init__(self, key: str, position: int, value: int):
        self.key = key
        self.position = position
        self.value = value
        super().__init__(
            f"Key {key!r} has unsupported character {value} at position {position}"
        )


class ConfigParseError(DirtrieError):
    """Error parsing or validating a YAML configuration file."""
    pass
