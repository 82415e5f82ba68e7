"""Protocols and value types for directory sources.

A directory source enumerates the immediate entries of one directory.
The index only depends on this protocol, so local and S3 listings (or
test doubles) are interchangeable.
"""

from typing import List, NamedTuple, Protocol, runtime_checkable


class DirEntry(NamedTuple):
    """One entry of a directory listing.

    Attributes:
        name: Entry name relative to the listed directory (no leading '/').
        is_dir: Whether the entry is itself a directory.
    """
    name: str
    is_dir: bool = False


@runtime_checkable
class DirectorySource(Protocol):
    """Protocol for objects that list directory entries."""

    def list_entries(self, path: str) -> List[DirEntry]:
        """Return the immediate entries of path.

        Entries named '.' and '..' are never returned.

        Raises:
            DirectoryUnavailable: If path does not exist or cannot be read.
        """
        ...
