"""dirtrie - filesystem path completion backed by a prefix trie.

Filenames from a small set of directories (local or S3) are indexed into
a trie; queries return every indexed path that starts with a partial
name.

Usage:
    from dirtrie import DirectoryIndex

    index = DirectoryIndex()
    index.index_directory("/usr/bin")
    index.index_directory("/usr/local/bin")
    index.search("lsb")

CLI:
    python -m dirtrie lsb
"""

from .exceptions import (
    DirtrieError,
    DirectoryUnavailable,
    InvalidByteError,
    ConfigParseError,
)
from .matching import DirEntry, DirectoryIndex, PrefixTrie, TrieNode

__version__ = '0.1.0'

__all__ = [
    'DirtrieError',
    'DirectoryUnavailable',
    'InvalidByteError',
    'ConfigParseError',
    'DirEntry',
    'DirectoryIndex',
    'PrefixTrie',
    'TrieNode',
]
