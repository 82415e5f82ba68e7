"""Prefix matching for path completion.

- PrefixTrie: byte-keyed trie with ordered prefix search
- DirectoryIndex: several directories aggregated onto one trie

Example:
    from dirtrie.matching import DirectoryIndex

    index = DirectoryIndex()
    index.index_directory("/usr/bin")
    index.search("lsb")
"""

from .protocols import DirEntry, DirectorySource
from .trie import PrefixTrie, TrieNode, validate_key
from .index import DirectoryIndex, join_path

__all__ = [
    # Protocols and value types
    'DirEntry',
    'DirectorySource',
    # Data structures
    'PrefixTrie',
    'TrieNode',
    'validate_key',
    # Aggregation
    'DirectoryIndex',
    'join_path',
]
