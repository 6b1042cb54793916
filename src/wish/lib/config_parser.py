"""Configuration parser for the shell.

Parses and validates an optional YAML file that overrides the shell's
start-up defaults (initial search path, prompt, history).
"""

from __future__ import annotations

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field, field_validator

DEFAULT_SEARCH_PATH = ["/bin"]
DEFAULT_PROMPT = "wish> "


class ShellConfig(BaseModel):
    """Top-level shell configuration."""
    path: List[str] = Field(default_factory=lambda: list(DEFAULT_SEARCH_PATH))
    prompt: str = DEFAULT_PROMPT
    history_file: Optional[Path] = None
    history_length: int = 1000

    @field_validator('path', mode='before')
    @classmethod
    def path_to_list(cls, v: Any) -> List[str]:
        """Accept a single directory or null as shorthand."""
        if v is None:
            return []
        if isinstance(v, (str, Path)):
            return [str(v)]
        return [str(item) for item in v]

    @field_validator('history_file', mode='before')
    @classmethod
    def expand_history_file(cls, v: Any) -> Optional[Path]:
        """Expand ``~`` in the history file location."""
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    @field_validator('history_length')
    @classmethod
    def validate_history_length(cls, v: int) -> int:
        """Ensure history length is positive."""
        if v <= 0:
            raise ValueError(f"history_length must be positive, got {v}")
        return v


class ConfigParser:
    """Parse and validate shell configuration."""

    def __init__(self, config_path: Union[str, Path]):
        """Initialize parser with config file path.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        self.config: Optional[ShellConfig] = None
        self._raw_config: Optional[Dict[str, Any]] = None

    def parse(self) -> ShellConfig:
        """Parse and validate configuration.

        Returns:
            Validated configuration object

        Raises:
            yaml.YAMLError: If YAML parsing fails
            pydantic.ValidationError: If validation fails
        """
        with open(self.config_path) as f:
            self._raw_config = yaml.safe_load(f) or {}

        if not isinstance(self._raw_config, dict):
            raise ValueError(
                f"Configuration must be a mapping, got {type(self._raw_config).__name__}"
            )

        self.config = ShellConfig(**self._raw_config)
        return self.config


def load_config(config_path: Optional[Union[str, Path]] = None) -> ShellConfig:
    """Load shell configuration.

    Args:
        config_path: Path to a YAML file, or None for the built-in defaults

    Returns:
        Validated configuration

    Example:
        >>> config = load_config("wish.yaml")
        >>> config.path
        ['/bin', '/usr/bin']
    """
    if config_path is None:
        return ShellConfig()
    parser = ConfigParser(config_path)
    return parser.parse()
