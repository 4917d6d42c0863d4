"""
api-specs Run Configuration

Dataclass configuration for collection runs and spec generation, loadable
from YAML.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

import yaml

from ..errors import IoError, ParseError

DEFAULT_TITLE = "Generated API"
DEFAULT_VERSION = "1.0.0"
DEFAULT_DESCRIPTION = "API specification generated from live responses"


@dataclass
class RunConfig:
    """Configuration for collection runs."""

    # Transport
    timeout: Optional[float] = None  # Seconds; None = wait indefinitely
    verify_ssl: bool = False  # Collections often target self-signed local/staging servers
    follow_redirects: bool = True
    user_agent: Optional[str] = None  # Default User-Agent when a request sets none

    # Logging
    log_level: str = "INFO"

    # Spec info
    title: str = DEFAULT_TITLE
    version: str = DEFAULT_VERSION
    description: str = DEFAULT_DESCRIPTION

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'RunConfig':
        """
        Create config from a dictionary, ignoring unknown keys.

        Raises:
            ParseError: If data isn't a mapping
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ParseError(f"Config must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'RunConfig':
        """
        Load config from a YAML file.

        Raises:
            IoError: If the file can't be read
            ParseError: If the YAML is invalid
        """
        try:
            with open(yaml_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise IoError(f"Failed to read config file {yaml_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ParseError(f"Failed to parse config file {yaml_path}: {e}") from e

        return cls.from_dict(data)

    def merged(self, **overrides: Any) -> 'RunConfig':
        """Return a copy with the given non-None overrides applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return RunConfig(**values)
