"""Directory index: several directories mapped onto one shared trie.

Each indexed directory contributes ``<directory>/<entry>`` keys to a
single PrefixTrie. Searches rebuild the candidate prefix per directory
and concatenate the results in registration order.
"""

import logging
from typing import List, Optional

from dirtrie.exceptions import DirectoryUnavailable, InvalidByteError
from .protocols import DirectorySource
from .trie import PrefixTrie, validate_key

log = logging.getLogger("dirtrie.index")

SEPARATOR = '/'


def join_path(directory: str, name: str) -> str:
    """Join name onto directory with exactly one separator.

    Args:
        directory: Directory path, with or without a trailing '/'.
        name: Entry name or partial name.

    Returns:
        The joined path.

    Example:
        join_path("/usr/bin", "ls")   # "/usr/bin/ls"
        join_path("/usr/bin/", "ls")  # "/usr/bin/ls"
    """
    if directory.endswith(SEPARATOR):
        return directory + name
    return directory + SEPARATOR + name


class DirectoryIndex:
    """Completion index over the entries of several directories.

    Directories are append-only: each successful index_directory() call
    records the directory once, even if it was indexed before, and a
    directory registered twice contributes its matches twice.

    Example:
        index = DirectoryIndex()
        index.index_directory("/usr/bin")
        index.index_directory("/usr/local/bin")

        index.search("lsb")  # ['/usr/bin/lsb_release', ...]
    """

    def __init__(
        self,
        source: Optional[DirectorySource] = None,
        recursive: bool = False,
    ):
        """Initialize an empty index.

        Args:
            source: Directory source used for every directory. If None,
                a dirtrie.sources.SourceRouter is created on first use,
                routing s3:// paths to S3 and the rest to the local
                filesystem.
            recursive: Default for index_directory(); when True,
                subdirectories are descended as well.
        """
        self._trie = PrefixTrie()
        self._directories: List[str] = []
        self._source = source
        self._recursive = recursive

    @property
    def trie(self) -> PrefixTrie:
        """The trie holding every indexed path."""
        return self._trie

    @property
    def directories(self) -> List[str]:
        """Indexed directories in registration order (a copy)."""
        return list(self._directories)

    def index_directory(self, path: str, recursive: Optional[bool] = None) -> bool:
        """Index the entries of a directory.

        The directory is listed before anything is inserted, so a
        directory that cannot be read leaves the index unchanged.
        Entries whose names are not 7-bit are logged and skipped.

        Args:
            path: Directory to index.
            recursive: Override the index default. When True, entries of
                subdirectories are inserted as ``path/sub/name``; an
                unreadable subdirectory is logged and skipped.

        Returns:
            True if the directory was read and registered, False if the
            source reported it unavailable.

        Raises:
            InvalidByteError: If path itself has a character outside 0-127.
        """
        validate_key(path)
        if recursive is None:
            recursive = self._recursive
        source = self._get_source()

        try:
            entries = source.list_entries(path)
        except DirectoryUnavailable as e:
            log.warning("Skipping directory: %s", e)
            return False

        keys: List[str] = []
        pending = [(path, '', entries)]
        while pending:
            directory, relative, listing = pending.pop()
            for entry in listing:
                name = relative + entry.name
                key = join_path(path, name)
                try:
                    validate_key(key)
                except InvalidByteError as e:
                    log.warning("Skipping entry: %s", e)
                    continue
                keys.append(key)

                if recursive and entry.is_dir:
                    subdirectory = join_path(directory, entry.name)
                    try:
                        sub_entries = source.list_entries(subdirectory)
                    except DirectoryUnavailable as e:
                        log.warning("Skipping subdirectory: %s", e)
                        continue
                    pending.append((subdirectory, name + SEPARATOR, sub_entries))

        for key in keys:
            self._trie.insert(key)
        self._directories.append(path)
        log.debug("Indexed %d entries from %s", len(keys), path)
        return True

    def search(self, partial_key: str) -> List[str]:
        """Find indexed paths completing partial_key in any directory.

        Args:
            partial_key: Partial entry name, relative to each directory.

        Returns:
            Matches grouped by directory in registration order, each
            group in ascending byte order. No deduplication.

        Raises:
            InvalidByteError: If partial_key has a character outside 0-127.
        """
        # Rejects a bad query even when no directory is registered yet;
        # search_by_prefix checks the joined key again per directory.
        validate_key(partial_key)
        results: List[str] = []
        for directory in self._directories:
            results.extend(self._trie.search_by_prefix(join_path(directory, partial_key)))
        return results

    def keys(self) -> List[str]:
        """Return every indexed path in ascending byte order."""
        return self._trie.keys()

    def __len__(self) -> int:
        """Return number of distinct indexed paths."""
        return len(self._trie)

    def _get_source(self) -> DirectorySource:
        if self._source is None:
            from dirtrie.sources import SourceRouter
            self._source = SourceRouter()
        return self._source
