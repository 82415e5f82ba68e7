"""Directory sources: list the immediate entries of a directory.

- LocalDirectorySource: local filesystem via os.scandir
- S3DirectorySource: "directories" under an S3 prefix, via boto3
- SourceRouter: picks one of the above per path (s3:// or local)

Every source raises DirectoryUnavailable when a path cannot be listed.
"""

import logging
import os
from typing import Any, List, Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from dirtrie.exceptions import DirectoryUnavailable
from dirtrie.matching.protocols import DirEntry

log = logging.getLogger("dirtrie.sources")

S3_SCHEME = 's3://'
_SELF_REFERENCES = ('.', '..')


class LocalDirectorySource:
    """Lists directories on the local filesystem.

    Symlinks to directories are reported as plain entries, so recursive
    indexing never follows a link cycle.
    """

    def list_entries(self, path: str) -> List[DirEntry]:
        """Return the immediate entries of a local directory.

        Args:
            path: Directory path.

        Returns:
            Entries in the order the filesystem yields them.

        Raises:
            DirectoryUnavailable: If path is missing, not a directory,
                or not readable.
        """
        entries: List[DirEntry] = []
        try:
            with os.scandir(path) as it:
                for entry in it:
                    if entry.name in _SELF_REFERENCES:
                        continue
                    entries.append(DirEntry(entry.name, _is_dir(entry)))
        except OSError as e:
            raise DirectoryUnavailable(path, e.strerror or str(e)) from e
        return entries


def _is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def parse_s3_path(path: str) -> Tuple[str, str]:
    """Split an s3:// path into bucket and key prefix.

    The prefix is normalized with a trailing '/', or empty for the
    bucket root.

    Example:
        parse_s3_path("s3://bucket")             # ("bucket", "")
        parse_s3_path("s3://bucket/tools")       # ("bucket", "tools/")
        parse_s3_path("s3://bucket/tools/bin/")  # ("bucket", "tools/bin/")

    Raises:
        ValueError: If path is not an s3:// path or has no bucket.
    """
    if not path.startswith(S3_SCHEME):
        raise ValueError(f"Not an S3 path: {path}")
    bucket, _, prefix = path[len(S3_SCHEME):].partition('/')
    if not bucket:
        raise ValueError(f"S3 path has no bucket: {path}")
    prefix = prefix.strip('/')
    return bucket, (prefix + '/' if prefix else '')


class S3DirectorySource:
    """Lists immediate "entries" below an S3 prefix.

    S3 has no real directories: keys are split on '/' using the
    Delimiter parameter, common prefixes are reported as directories
    and objects as files. A prefix with nothing below it does not
    exist, so listing it raises DirectoryUnavailable (the bucket root
    may be empty).

    Example:
        source = S3DirectorySource(profile='dev')
        source.list_entries("s3://my-bucket/tools")
    """

    def __init__(self, profile: Optional[str] = None, region: Optional[str] = None):
        """Initialize source; the boto3 client is created on first use.

        Args:
            profile: AWS profile name (optional).
            region: AWS region (optional).
        """
        self.profile = profile
        self.region = region
        self._client: Any = None

    def _get_client(self):
        """Create the S3 client on first use."""
        if self._client is None:
            session_kwargs = {}
            if self.profile:
                session_kwargs['profile_name'] = self.profile
            if self.region:
                session_kwargs['region_name'] = self.region
            self._client = boto3.Session(**session_kwargs).client('s3')
        return self._client

    def list_entries(self, path: str) -> List[DirEntry]:
        """Return the immediate entries below an s3:// path.

        Args:
            path: ``s3://bucket`` or ``s3://bucket/prefix``.

        Returns:
            Directory entries (from common prefixes) followed by file
            entries (from objects), per page of the listing.

        Raises:
            DirectoryUnavailable: If the bucket is missing, the request
                fails, or a non-root prefix has no objects below it.
        """
        try:
            bucket, prefix = parse_s3_path(path)
        except ValueError as e:
            raise DirectoryUnavailable(path, str(e)) from e

        kwargs = {'Bucket': bucket, 'Delimiter': '/'}
        if prefix:
            kwargs['Prefix'] = prefix

        entries: List[DirEntry] = []
        found_any = False
        try:
            paginator = self._get_client().get_paginator('list_objects_v2')
            for page in paginator.paginate(**kwargs):
                for common in page.get('CommonPrefixes', []):
                    found_any = True
                    name = common['Prefix'][len(prefix):].rstrip('/')
                    if name and name not in _SELF_REFERENCES:
                        entries.append(DirEntry(name, True))
                for obj in page.get('Contents', []):
                    found_any = True
                    name = obj['Key'][len(prefix):]
                    # The "tools/" marker object some clients create
                    if name and name not in _SELF_REFERENCES:
                        entries.append(DirEntry(name, False))
        except ClientError as e:
            code = e.response.get('Error', {}).get('Code', 'Unknown')
            raise DirectoryUnavailable(path, f"S3 error {code}") from e
        except BotoCoreError as e:
            raise DirectoryUnavailable(path, str(e)) from e

        if prefix and not found_any:
            raise DirectoryUnavailable(path, "no objects under prefix")

        log.debug("Listed %d entries under %s", len(entries), path)
        return entries


class SourceRouter:
    """Routes s3:// paths to S3DirectorySource and others to the local source.

    Both sources are created on first use and reused afterwards.
    """

    def __init__(self, profile: Optional[str] = None, region: Optional[str] = None):
        """Initialize router.

        Args:
            profile: AWS profile for S3 paths (optional).
            region: AWS region for S3 paths (optional).
        """
        self.profile = profile
        self.region = region
        self._local: Optional[LocalDirectorySource] = None
        self._s3: Optional[S3DirectorySource] = None

    def get_source(self, path: str):
        """Return the source responsible for path."""
        if path.startswith(S3_SCHEME):
            if self._s3 is None:
                self._s3 = S3DirectorySource(profile=self.profile, region=self.region)
            return self._s3
        if self._local is None:
            self._local = LocalDirectorySource()
        return self._local

    def list_entries(self, path: str) -> List[DirEntry]:
        """List path with the source responsible for it."""
        return self.get_source(path).list_entries(path)
