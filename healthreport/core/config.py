"""
Configuration management for the health report.

Loads configuration from YAML files and environment variables.
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional
import yaml


# Fixed sampling window for the processor utilization counter
CPU_SAMPLE_SECONDS = 1.0

# Services considered critical for a healthy workstation
CRITICAL_SERVICES = (
    "wuauserv",
    "WinDefend",
    "mpssvc",
    "Audiosrv",
    "AudioEndpointBuilder",
    "Dnscache",
)


class ConfigError(ValueError):
    """Raised when a configuration file cannot be used."""


@dataclass
class ReportConfig:
    """Report output configuration."""

    output_path: str = "SystemHealthReport.html"
    json_path: Optional[str] = None
    title: str = "System Health Report"


@dataclass
class CollectionConfig:
    """Metrics collection configuration."""

    ping_targets: List[str] = field(default_factory=lambda: ["8.8.8.8", "google.com"])
    ping_timeout_ms: int = 1000
    powershell_timeout_seconds: int = 120


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size_mb: int = 10
    backup_count: int = 5


@dataclass
class Config:
    """Main configuration container."""

    report: ReportConfig = field(default_factory=ReportConfig)
    collection: CollectionConfig = field(default_factory=CollectionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """Load configuration from YAML file."""
        config_path = Path(path)
        if not config_path.exists():
            config = cls()
            config._apply_env_overrides()
            return config

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        try:
            return cls._from_dict(data)
        except ConfigError as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    @classmethod
    def _from_dict(cls, data: dict) -> "Config":
        """Create config from dictionary."""
        if not isinstance(data, dict):
            raise ConfigError(f"expected a mapping, got {type(data).__name__}")

        config = cls()
        config.report = _section(ReportConfig, "report", data.get("report"), config.report)
        config.collection = _section(
            CollectionConfig, "collection", data.get("collection"), config.collection
        )
        config.logging = _section(LoggingConfig, "logging", data.get("logging"), config.logging)

        # Override with environment variables
        config._apply_env_overrides()

        return config

    def _apply_env_overrides(self):
        """Apply environment variable overrides."""
        if os.getenv("HEALTH_REPORT_OUTPUT"):
            self.report.output_path = os.getenv("HEALTH_REPORT_OUTPUT")
        if os.getenv("HEALTH_REPORT_JSON"):
            self.report.json_path = os.getenv("HEALTH_REPORT_JSON")

        if os.getenv("HEALTH_REPORT_PING_TARGETS"):
            self.collection.ping_targets = [
                host.strip()
                for host in os.getenv("HEALTH_REPORT_PING_TARGETS").split(",")
                if host.strip()
            ]

        # Logging
        if os.getenv("LOG_LEVEL"):
            self.logging.level = os.getenv("LOG_LEVEL")

    def to_yaml(self, path: str):
        """Save configuration to YAML file."""
        data = {
            "report": {
                "output_path": self.report.output_path,
                "json_path": self.report.json_path,
                "title": self.report.title,
            },
            "collection": {
                "ping_targets": list(self.collection.ping_targets),
                "ping_timeout_ms": self.collection.ping_timeout_ms,
                "powershell_timeout_seconds": self.collection.powershell_timeout_seconds,
            },
            "logging": {
                "level": self.logging.level,
                "file_path": self.logging.file_path,
            },
        }

        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False)


def _section(section_cls, name: str, values, default):
    """Build one config section, keeping the default when it is left empty."""
    if not values:
        return default
    if not isinstance(values, dict):
        raise ConfigError(f"section '{name}' must be a mapping")
    try:
        return section_cls(**values)
    except TypeError as e:
        known = ", ".join(f.name for f in fields(section_cls))
        unknown = ", ".join(sorted(set(values) - {f.name for f in fields(section_cls)}))
        raise ConfigError(f"unknown key(s) in '{name}': {unknown} (expected: {known})") from e


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    # Check common locations
    candidates = [
        Path("config/config.yaml"),
        Path("config.yaml"),
        Path.home() / ".healthreport" / "config.yaml",
    ]

    for path in candidates:
        if path.exists():
            return str(path)

    # Return the first candidate as default
    return str(candidates[0])
