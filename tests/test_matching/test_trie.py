"""Tests for PrefixTrie data structure."""

import pytest

from dirtrie.exceptions import InvalidByteError
from dirtrie.matching.trie import PrefixTrie, TrieNode, validate_key


class TestTrieNode:
    """Tests for TrieNode dataclass."""

    def test_default_values(self):
        """Test default node initialization."""
        node = TrieNode()
        assert node.children == {}
        assert node.is_terminal is False

    def test_children_not_shared(self):
        """Test each node gets its own children mapping."""
        a = TrieNode()
        b = TrieNode()
        a.children[ord('x')] = TrieNode()
        assert b.children == {}


class TestPrefixTrieBasic:
    """Basic tests for PrefixTrie."""

    def test_empty_trie(self):
        """Test empty trie has no matches."""
        trie = PrefixTrie()
        assert trie.search_by_prefix("/any/path") == []
        assert trie.search_by_prefix("") == []
        assert len(trie) == 0

    def test_root_not_terminal(self):
        """Test root is not terminal until the empty key is inserted."""
        trie = PrefixTrie()
        trie.insert("/a")
        assert trie.root.is_terminal is False

    def test_insert_and_search_single(self):
        """Test insert and search with a single key."""
        trie = PrefixTrie()
        trie.insert("/usr/bin/ls")

        assert trie.search_by_prefix("/usr/bin/ls") == ["/usr/bin/ls"]
        assert trie.search_by_prefix("/usr/") == ["/usr/bin/ls"]
        assert trie.search_by_prefix("/usr/bin/lsx") == []

    def test_usr_bin_scenario(self):
        """Test prefix search returns matches in byte order."""
        trie = PrefixTrie()
        trie.insert("/usr/bin/ls")
        trie.insert("/usr/bin/lsb_release")
        trie.insert("/usr/bin/cat")

        assert trie.search_by_prefix("/usr/bin/ls") == [
            "/usr/bin/ls",
            "/usr/bin/lsb_release",
        ]
        assert trie.search_by_prefix("/usr/bin/z") == []

    def test_prefix_included_only_if_inserted(self):
        """Test the prefix itself is a match only when it is a key."""
        trie = PrefixTrie()
        trie.insert("/data/output")
        trie.insert("/data/outputs")

        assert trie.search_by_prefix("/data/out") == ["/data/output", "/data/outputs"]
        assert trie.search_by_prefix("/data/output") == ["/data/output", "/data/outputs"]


class TestPrefixTrieOrdering:
    """Tests for ordering of prefix search results."""

    def test_empty_prefix_returns_all_sorted(self):
        """Test empty prefix returns every key in sorted order."""
        keys = ["/b/z", "/a/foo", "/a/Foo", "/a/foo.txt", "/a/f", "/c"]
        trie = PrefixTrie()
        for key in keys:
            trie.insert(key)

        assert trie.search_by_prefix("") == sorted(keys)

    def test_byte_order_not_locale_order(self):
        """Test uppercase sorts before lowercase and '-' before '_'."""
        trie = PrefixTrie()
        for key in ["x_b", "x-a", "xB", "xa"]:
            trie.insert(key)

        assert trie.search_by_prefix("x") == ["x-a", "xB", "x_b", "xa"]

    def test_matches_exactly_the_keys_with_prefix(self):
        """Test result is exactly the subset of keys starting with prefix."""
        keys = [
            "/usr/bin/python", "/usr/bin/python3", "/usr/bin/python3.11",
            "/usr/bin/pydoc", "/usr/bin/perl", "/usr/local/bin/py",
        ]
        trie = PrefixTrie()
        for key in keys:
            trie.insert(key)

        for prefix in ["/usr/bin/py", "/usr/bin/p", "/usr/", "/usr/local", "/opt"]:
            expected = sorted(k for k in keys if k.startswith(prefix))
            assert trie.search_by_prefix(prefix) == expected

    def test_sibling_bytes_do_not_leak(self):
        """Test bytes from a visited sibling subtree never reach later keys."""
        trie = PrefixTrie()
        trie.insert("/p/abcdef")
        trie.insert("/p/ax")
        trie.insert("/p/b")

        assert trie.search_by_prefix("/p/") == ["/p/abcdef", "/p/ax", "/p/b"]

    def test_deep_key(self):
        """Test keys longer than the recursion limit are enumerated."""
        key = "/" + "a" * 5000
        trie = PrefixTrie()
        trie.insert(key)

        assert trie.search_by_prefix("/") == [key]


class TestPrefixTrieIdempotence:
    """Tests for repeated insertion."""

    def test_insert_twice(self):
        """Test inserting the same key twice behaves like once."""
        once = PrefixTrie()
        once.insert("/a/foo")
        once.insert("/a/bar")

        twice = PrefixTrie()
        twice.insert("/a/foo")
        twice.insert("/a/foo")
        twice.insert("/a/bar")

        assert twice.search_by_prefix("/a/") == once.search_by_prefix("/a/")
        assert len(twice) == len(once) == 2
        assert twice.node_count() == once.node_count()

    def test_insert_prefix_of_existing_key(self):
        """Test inserting a prefix of a key keeps the longer key."""
        trie = PrefixTrie()
        trie.insert("/a/foobar")
        trie.insert("/a/foo")

        assert trie.search_by_prefix("/a/foo") == ["/a/foo", "/a/foobar"]


class TestPrefixTrieNoResidue:
    """Tests that searches do not share state."""

    def test_failed_search_does_not_affect_next(self):
        """Test a search with no matches leaves nothing behind."""
        trie = PrefixTrie()
        trie.insert("/a/foo")
        trie.insert("/b/bar")

        assert trie.search_by_prefix("/a/zzz") == []
        assert trie.search_by_prefix("/b/") == ["/b/bar"]

    def test_consecutive_searches_independent(self):
        """Test results do not accumulate across calls."""
        trie = PrefixTrie()
        trie.insert("/a/foo")
        trie.insert("/b/bar")

        first = trie.search_by_prefix("/a/")
        second = trie.search_by_prefix("/b/")

        assert first == ["/a/foo"]
        assert second == ["/b/bar"]

    def test_returned_list_is_fresh(self):
        """Test mutating a result does not affect later searches."""
        trie = PrefixTrie()
        trie.insert("/a/foo")

        result = trie.search_by_prefix("/a/")
        result.append("junk")

        assert trie.search_by_prefix("/a/") == ["/a/foo"]


class TestPrefixTrieContains:
    """Tests for contains, keys and size."""

    def test_contains_exact(self):
        """Test contains only matches complete keys."""
        trie = PrefixTrie()
        trie.insert("/data/output")

        assert trie.contains("/data/output") is True
        assert trie.contains("/data/out") is False
        assert trie.contains("/data/output/x") is False
        assert "/data/output" in trie
        assert "/data" not in trie

    def test_contains_non_ascii(self):
        """Test contains returns False for out-of-range keys."""
        trie = PrefixTrie()
        trie.insert("/a")
        assert trie.contains("/café") is False

    def test_keys(self):
        """Test keys returns all keys sorted."""
        trie = PrefixTrie()
        for key in ["/c", "/a", "/b"]:
            trie.insert(key)
        assert trie.keys() == ["/a", "/b", "/c"]

    def test_node_count(self):
        """Test nodes are shared along common prefixes."""
        trie = PrefixTrie()
        assert trie.node_count() == 1
        trie.insert("ab")
        trie.insert("ac")
        # root, 'a', 'b', 'c'
        assert trie.node_count() == 4

    def test_empty_string_key(self):
        """Test the empty string can be inserted as a key."""
        trie = PrefixTrie()
        trie.insert("")
        trie.insert("a")

        assert trie.root.is_terminal is True
        assert trie.search_by_prefix("") == ["", "a"]


class TestInvalidBytes:
    """Tests for keys outside the 7-bit range."""

    def test_validate_key_accepts_ascii(self):
        """Test full 7-bit range is accepted."""
        validate_key("".join(chr(i) for i in range(128)))

    def test_insert_rejects_non_ascii(self):
        """Test insert raises and leaves the trie unchanged."""
        trie = PrefixTrie()
        trie.insert("/a/foo")

        with pytest.raises(InvalidByteError) as exc_info:
            trie.insert("/a/café")

        assert exc_info.value.position == 6
        assert exc_info.value.value == 0xe9
        assert trie.node_count() == 7
        assert trie.search_by_prefix("/a/") == ["/a/foo"]
        assert len(trie) == 1

    def test_search_rejects_non_ascii(self):
        """Test search raises InvalidByteError."""
        trie = PrefixTrie()
        trie.insert("/a/foo")

        with pytest.raises(InvalidByteError):
            trie.search_by_prefix("/a/ü")

    def test_is_value_error(self):
        """Test InvalidByteError can be caught as ValueError."""
        with pytest.raises(ValueError):
            validate_key("☃")
