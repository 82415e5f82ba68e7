"""YAML configuration for dirtrie.

Example dirtrie.yaml:
    config:
      recursive: false
      log_level: INFO
      s3:
        profile: dev
        region: us-east-1

    directories:
      - /usr/bin
      - /usr/local/bin
      - path: s3://my-bucket/tools
        recursive: true
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from dirtrie.exceptions import ConfigParseError

DEFAULT_DIRECTORIES = ['/usr/bin', '/usr/local/bin']
LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}


@dataclass
class DirectorySpec:
    """One directory to index.

    Attributes:
        path: Directory path (local or s3://).
        recursive: Per-directory override; None uses the config default.
    """
    path: str
    recursive: Optional[bool] = None


@dataclass
class DirtrieConfig:
    """Parsed YAML configuration."""
    config: Dict[str, Any] = field(default_factory=dict)
    directories: List[DirectorySpec] = field(default_factory=list)

    @property
    def recursive(self) -> bool:
        """Default recursion setting for all directories."""
        return self.config.get('recursive', False)

    @property
    def log_level(self) -> Optional[str]:
        """Configured log level name, if any."""
        level = self.config.get('log_level')
        return level.upper() if level else None

    @property
    def s3_profile(self) -> Optional[str]:
        return self.config.get('s3', {}).get('profile')

    @property
    def s3_region(self) -> Optional[str]:
        return self.config.get('s3', {}).get('region')


def parse_yaml_file(path: Union[str, Path]) -> DirtrieConfig:
    """Parse and validate a dirtrie.yaml file.

    Args:
        path: Path to the YAML file

    Returns:
        DirtrieConfig with parsed settings and directories

    Raises:
        ConfigParseError: If the file is invalid or has a bad structure
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        return _load(f)


def parse_yaml_string(content: str) -> DirtrieConfig:
    """Parse YAML configuration from a string.

    Args:
        content: YAML content as string

    Returns:
        DirtrieConfig with parsed settings and directories
    """
    return _load(content)


def _load(stream: Any) -> DirtrieConfig:
    try:
        data = yaml.safe_load(stream)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Invalid YAML syntax: {e}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigParseError("YAML root must be a mapping")

    return _validate_config_data(data)


def _validate_config_data(data: Dict[str, Any]) -> DirtrieConfig:
    """Validate parsed YAML data structure.

    Raises:
        ConfigParseError: If validation fails
    """
    config = data.get('config', {})
    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ConfigParseError("'config' must be a mapping")
    _validate_settings(config)

    directories = data.get('directories', [])
    if directories is None:
        directories = []
    if not isinstance(directories, list):
        raise ConfigParseError("'directories' must be a list")

    specs = [_validate_directory(entry, i) for i, entry in enumerate(directories)]
    return DirtrieConfig(config=config, directories=specs)


def _validate_settings(config: Dict[str, Any]) -> None:
    if 'recursive' in config and not isinstance(config['recursive'], bool):
        raise ConfigParseError("'config.recursive' must be a boolean")

    if 'log_level' in config:
        level = config['log_level']
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ConfigParseError(
                f"'config.log_level' must be one of {sorted(LOG_LEVELS)}"
            )

    s3 = config.get('s3', {})
    if not isinstance(s3, dict):
        raise ConfigParseError("'config.s3' must be a mapping")
    for key in ('profile', 'region'):
        if key in s3 and not isinstance(s3[key], str):
            raise ConfigParseError(f"'config.s3.{key}' must be a string")


def _validate_directory(entry: Any, index: int) -> DirectorySpec:
    """Validate a single directory entry (string or mapping).

    Args:
        entry: Directory entry from the YAML list
        index: Position in the list (for error messages)

    Raises:
        ConfigParseError: If validation fails
    """
    if isinstance(entry, str):
        # Short form: just the path
        if not entry:
            raise ConfigParseError(f"Directory {index}: path must not be empty")
        return DirectorySpec(path=entry)

    if not isinstance(entry, dict):
        raise ConfigParseError(f"Directory {index} must be a string or mapping")

    if 'path' not in entry:
        raise ConfigParseError(f"Directory {index} missing required field 'path'")
    if not isinstance(entry['path'], str) or not entry['path']:
        raise ConfigParseError(f"Directory {index}: 'path' must be a non-empty string")

    recursive = entry.get('recursive')
    if recursive is not None and not isinstance(recursive, bool):
        raise ConfigParseError(f"Directory '{entry['path']}': 'recursive' must be a boolean")

    return DirectorySpec(path=entry['path'], recursive=recursive)
