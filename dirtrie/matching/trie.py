"""Byte-keyed prefix trie for path completion.

Keys are strings restricted to 7-bit characters; each character's code
point is the edge label. Children are stored sparsely and visited in
ascending byte order, so prefix search returns keys in lexicographic
order.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from dirtrie.exceptions import InvalidByteError

CHARACTER_SET_SIZE = 128


@dataclass
class TrieNode:
    """Node in a prefix trie.

    Attributes:
        children: Child nodes keyed by byte value (0-127).
        is_terminal: Whether an inserted key ends exactly at this node.
    """
    children: Dict[int, 'TrieNode'] = field(default_factory=dict)
    is_terminal: bool = False


def validate_key(key: str) -> None:
    """Raise InvalidByteError if key has a character outside 0-127.

    Args:
        key: The key to check.

    Raises:
        InvalidByteError: On the first out-of-range character.
    """
    for position, ch in enumerate(key):
        value = ord(ch)
        if value >= CHARACTER_SET_SIZE:
            raise InvalidByteError(key, position, value)


class PrefixTrie:
    """Trie answering "which keys start with this text" queries.

    Nodes are only ever added, never removed. Search state is created
    per call, so results of one search never leak into the next.

    Example:
        trie = PrefixTrie()
        trie.insert("/usr/bin/ls")
        trie.insert("/usr/bin/lsb_release")
        trie.insert("/usr/bin/cat")

        trie.search_by_prefix("/usr/bin/ls")
        # ['/usr/bin/ls', '/usr/bin/lsb_release']
        trie.search_by_prefix("/usr/bin/z")   # []
    """

    def __init__(self):
        self._root = TrieNode()
        self._size = 0

    @property
    def root(self) -> TrieNode:
        """The root node, representing the empty string."""
        return self._root

    def insert(self, key: str) -> None:
        """Insert a key.

        Inserting a key that is already present changes nothing.

        Args:
            key: The key to insert.

        Raises:
            InvalidByteError: If key has a character outside 0-127. The
                trie is left untouched.
        """
        validate_key(key)
        node = self._root
        for ch in key:
            index = ord(ch)
            child = node.children.get(index)
            if child is None:
                child = TrieNode()
                node.children[index] = child
            node = child
        if not node.is_terminal:
            node.is_terminal = True
            self._size += 1

    def search_by_prefix(self, key: str) -> List[str]:
        """Return every inserted key that starts with key.

        Keys are returned in ascending byte order, each exactly once.
        key itself is included if it was inserted.

        Args:
            key: The prefix to search for.

        Returns:
            A new list of matching keys; empty if nothing matches.

        Raises:
            InvalidByteError: If key has a character outside 0-127.
        """
        validate_key(key)
        node = self._walk(key)
        if node is None:
            return []
        return self._collect(node, key)

    def contains(self, key: str) -> bool:
        """Check if key was inserted as a complete key.

        Args:
            key: The key to check.

        Returns:
            True if key is present. Keys with out-of-range characters
            are never present.
        """
        try:
            validate_key(key)
        except InvalidByteError:
            return False
        node = self._walk(key)
        return node is not None and node.is_terminal

    def keys(self) -> List[str]:
        """Return all inserted keys in ascending byte order."""
        return self._collect(self._root, "")

    def node_count(self) -> int:
        """Return the number of nodes in the trie, root included."""
        count = 0
        stack = [self._root]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children.values())
        return count

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __len__(self) -> int:
        """Return number of distinct keys inserted."""
        return self._size

    def _walk(self, key: str) -> Optional[TrieNode]:
        """Follow key from the root without creating nodes.

        Args:
            key: Already validated key.

        Returns:
            The node reached, or None if some character has no child.
        """
        node = self._root
        for ch in key:
            node = node.children.get(ord(ch))
            if node is None:
                return None
        return node

    def _collect(self, start: TrieNode, prefix: str) -> List[str]:
        """Enumerate terminal nodes below start in ascending byte order.

        Uses an explicit stack rather than recursion; paths can be longer
        than the interpreter's recursion limit. Each stack entry records
        its depth, and the path buffer is truncated to that depth before
        the entry's byte is appended, so bytes from an already visited
        sibling subtree never remain in the buffer.

        Args:
            start: Node reached by walking prefix.
            prefix: Text consumed to reach start.

        Returns:
            Matching keys, each prefixed with prefix.
        """
        matches: List[str] = []
        path: List[str] = []
        if start.is_terminal:
            matches.append(prefix)

        stack: List[Tuple[TrieNode, int, int]] = []
        for index in sorted(start.children, reverse=True):
            stack.append((start.children[index], index, 0))

        while stack:
            node, index, depth = stack.pop()
            del path[depth:]
            path.append(chr(index))
            if node.is_terminal:
                matches.append(prefix + "".join(path))
            for child_index in sorted(node.children, reverse=True):
                stack.append((node.children[child_index], child_index, depth + 1))

        return matches
