"""Command-line entry point: build a directory index and complete queries.

Usage:
    python -m dirtrie [options] [query ...]

Example:
    python -m dirtrie lsb
    python -m dirtrie -d /usr/bin -d /opt/tools/bin py
    python -m dirtrie --config dirtrie.yaml /usr/bin/ls
    python -m dirtrie --list -d ~/bin
"""

import logging
import sys
from typing import List, Optional, Sequence

from dirtrie.config import (
    DEFAULT_DIRECTORIES,
    DirectorySpec,
    DirtrieConfig,
    parse_yaml_file,
)
from dirtrie.exceptions import DirtrieError, InvalidByteError
from dirtrie.matching import DirectoryIndex
from dirtrie.sources import S3_SCHEME, SourceRouter

log = logging.getLogger("dirtrie")


def build_index(
    directories: Sequence[DirectorySpec],
    recursive: bool = False,
    profile: Optional[str] = None,
    region: Optional[str] = None,
) -> DirectoryIndex:
    """Create an index and index each directory in order.

    Directories that cannot be read, or whose path has a character
    outside 0-127, are logged and skipped.

    Args:
        directories: Directories to index, in registration order.
        recursive: Default recursion for entries without an override.
        profile: AWS profile for s3:// directories.
        region: AWS region for s3:// directories.

    Returns:
        The populated DirectoryIndex.
    """
    index = DirectoryIndex(
        source=SourceRouter(profile=profile, region=region),
        recursive=recursive,
    )
    for spec in directories:
        try:
            index.index_directory(spec.path, recursive=spec.recursive)
        except InvalidByteError as e:
            log.warning("Skipping directory: %s", e)
    return index


def complete(index: DirectoryIndex, query: str) -> List[str]:
    """Complete a query against the index.

    A query that is already a full path (``/...`` or ``s3://...``) is
    matched against indexed paths directly; anything else is treated as
    a partial name inside every indexed directory.
    """
    if query.startswith('/') or query.startswith(S3_SCHEME):
        return index.trie.search_by_prefix(query)
    return index.search(query)


def format_matches(query: str, matches: List[str]) -> str:
    """Format matches for the console.

    Example:
        format_matches("zz", [])           # "No match found for: zz"
        format_matches("ls", ["/bin/ls"])  # "Match found: /bin/ls"
    """
    if not matches:
        return f"No match found for: {query}"
    if len(matches) == 1:
        return f"Match found: {matches[0]}"
    return "\n".join(["Multiple matches found:"] + matches)


def _resolve_directories(
    config: DirtrieConfig,
    cli_directories: Optional[List[str]],
) -> List[DirectorySpec]:
    if cli_directories:
        return [DirectorySpec(path=d) for d in cli_directories]
    if config.directories:
        return config.directories
    return [DirectorySpec(path=d) for d in DEFAULT_DIRECTORIES]


def main(args: Optional[List[str]] = None) -> int:
    """CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    import argparse

    parser = argparse.ArgumentParser(
        description='Complete file paths from an index of directories',
        prog='python -m dirtrie',
    )
    parser.add_argument(
        'queries',
        nargs='*',
        help='Partial names (or full paths) to complete',
    )
    parser.add_argument(
        '-c', '--config',
        type=str,
        default=None,
        help='Path to a dirtrie YAML config file',
    )
    parser.add_argument(
        '-d', '--directory',
        action='append',
        dest='directories',
        default=None,
        help='Directory to index (repeatable; overrides the config file)',
    )
    parser.add_argument(
        '-r', '--recursive',
        action='store_true',
        help='Also index entries of subdirectories',
    )
    parser.add_argument(
        '--profile',
        type=str,
        default=None,
        help='AWS profile for s3:// directories',
    )
    parser.add_argument(
        '--region',
        type=str,
        default=None,
        help='AWS region for s3:// directories',
    )
    parser.add_argument(
        '--list',
        action='store_true',
        help='Print every indexed path',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug-level logging',
    )

    parsed = parser.parse_args(args)

    logging.basicConfig(
        level=logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    try:
        config = parse_yaml_file(parsed.config) if parsed.config else DirtrieConfig()

        if parsed.verbose:
            log.setLevel(logging.DEBUG)
        elif config.log_level:
            log.setLevel(config.log_level)

        index = build_index(
            _resolve_directories(config, parsed.directories),
            recursive=parsed.recursive or config.recursive,
            profile=parsed.profile or config.s3_profile,
            region=parsed.region or config.s3_region,
        )

        if not index.directories:
            print("Error: no directory could be indexed", file=sys.stderr)
            return 1

        log.debug(
            "Indexed %d path(s) from %d director(ies)",
            len(index), len(index.directories),
        )

        if parsed.list:
            for path in index.keys():
                print(path)

        code = 0
        for query in parsed.queries:
            try:
                matches = complete(index, query)
            except InvalidByteError as e:
                print(f"Error: {e}", file=sys.stderr)
                code = 1
                continue
            print(format_matches(query, matches))

        return code

    except (FileNotFoundError, DirtrieError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
