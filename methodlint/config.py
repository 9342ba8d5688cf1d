"""
Configuration system for methodlint.

Supports YAML and JSON configuration files for choosing which files to
scan, which rules run and how results are reported. Complexity and
naming thresholds are fixed and cannot be configured.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field, asdict

import yaml

from methodlint.core.errors import ConfigError
from methodlint.core.rules import DEFAULT_SUPPRESSION_MARKERS


# Default configuration file names to search for
CONFIG_FILE_NAMES = [
    ".methodlint.yaml",
    ".methodlint.yml",
    ".methodlint.json",
    "methodlint.yaml",
    "methodlint.yml",
    "methodlint.json",
]

SEVERITY_NAMES = ("error", "warning")
OUTPUT_FORMATS = ("text", "json", "sarif")


@dataclass
class RuleSetConfig:
    """Configuration for the rule set."""
    enabled: List[str] = field(default_factory=list)
    disabled: List[str] = field(default_factory=list)


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    format: str = "text"  # text, json, sarif
    output_file: Optional[str] = None
    verbose: bool = False
    show_suppressed: bool = False
    color: bool = True


@dataclass
class ScanConfig:
    """
    Main configuration for methodlint.

    Example YAML config:

    ```yaml
    scan:
      exclude:
        - "build/**"
        - "target/**"
      include:
        - "*.java"
      languages:
        - java
      max_file_size: 1048576
      max_workers: 4

    rules:
      enabled: []
      disabled:
        - BadNames

    severity_threshold: warning
    suppression_markers:
      - "methodlint: ignore"
      - "noqa"

    output:
      format: text
      color: true
    ```
    """
    # Scan settings
    exclude_patterns: List[str] = field(default_factory=lambda: [
        ".git/**",
        "__pycache__/**",
        "venv/**",
        ".venv/**",
        "build/**",
        "dist/**",
        "target/**",
    ])
    include_patterns: Optional[List[str]] = None
    languages: Optional[List[str]] = None
    max_file_size: int = 1024 * 1024  # 1MB
    max_workers: int = 4

    # Rule settings
    rules: RuleSetConfig = field(default_factory=RuleSetConfig)
    severity_threshold: str = "warning"  # error, warning
    suppression_markers: List[str] = field(
        default_factory=lambda: list(DEFAULT_SUPPRESSION_MARKERS)
    )

    # Output settings
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a dictionary."""
        return asdict(self)

    def to_engine_config(self) -> Dict[str, Any]:
        """Convert to engine configuration format."""
        return {
            "max_file_size": self.max_file_size,
            "max_workers": self.max_workers,
            "ignore_patterns": self.exclude_patterns,
            "include_patterns": self.include_patterns,
            "languages": self.languages,
            "severity_threshold": self.severity_threshold,
            "suppression_markers": self.suppression_markers,
            "rules": {
                "enabled": self.rules.enabled,
                "disabled": self.rules.disabled,
            },
        }

    def validate(self):
        """Raise ConfigError for values the engine cannot use."""
        if self.severity_threshold not in SEVERITY_NAMES:
            raise ConfigError(
                f"Invalid severity_threshold {self.severity_threshold!r}; "
                f"expected one of {', '.join(SEVERITY_NAMES)}"
            )
        if self.output.format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"Invalid output format {self.output.format!r}; "
                f"expected one of {', '.join(OUTPUT_FORMATS)}"
            )
        if self.max_workers < 1:
            raise ConfigError("max_workers must be at least 1")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScanConfig":
        """Create config from a dictionary."""
        data = dict(data)

        # Handle nested configs
        try:
            if "rules" in data and isinstance(data["rules"], dict):
                data["rules"] = RuleSetConfig(**data["rules"])
            if "output" in data and isinstance(data["output"], dict):
                data["output"] = OutputConfig(**data["output"])
        except TypeError as e:
            raise ConfigError(f"Invalid configuration section: {e}") from e

        # Map some common alternative names
        if "exclude" in data:
            data["exclude_patterns"] = data.pop("exclude")
        if "include" in data:
            data["include_patterns"] = data.pop("include")

        # Filter to only known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}

        config = cls(**filtered_data)
        config.validate()
        return config


def load_config(path: str) -> Dict[str, Any]:
    """
    Load configuration from a file.

    Supports YAML and JSON formats.
    """
    path = Path(path)

    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    content = path.read_text()

    try:
        if path.suffix == ".json":
            data = json.loads(content)
        else:
            # YAML is a superset of JSON
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot parse configuration file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping")
    return data


def find_config(start_path: str = ".") -> Optional[str]:
    """
    Find a configuration file by searching up the directory tree.

    Returns the path to the first config file found, or None.
    """
    current = Path(start_path).resolve()
    if current.is_file():
        current = current.parent

    while True:
        for name in CONFIG_FILE_NAMES:
            config_path = current / name
            if config_path.exists():
                return str(config_path)
        if current == current.parent:
            return None
        current = current.parent


def load_scan_config(path: Optional[str] = None, start_dir: str = ".") -> ScanConfig:
    """
    Load a ScanConfig from a file or create a default one.

    If path is None, searches for a config file starting from start_dir.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        return ScanConfig()

    data = load_config(path)

    # Handle nested 'scan' section
    if "scan" in data:
        scan_data = data.pop("scan") or {}
        data.update(scan_data)

    return ScanConfig.from_dict(data)


def create_default_config() -> str:
    """
    Create a default configuration file content.
    """
    defaults = ScanConfig()
    config = {
        "scan": {
            "exclude": defaults.exclude_patterns,
            "max_file_size": defaults.max_file_size,
            "max_workers": defaults.max_workers,
        },
        "rules": {
            "enabled": [],
            "disabled": [],
        },
        "severity_threshold": defaults.severity_threshold,
        "suppression_markers": defaults.suppression_markers,
        "output": {
            "format": "text",
            "verbose": False,
            "color": True,
            "show_suppressed": False,
        },
    }

    return yaml.safe_dump(config, default_flow_style=False, sort_keys=False)
