"""Global configuration — XDG config dir and environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

_TRUTHY = {"1", "true", "yes"}


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "defectlink"
    return Path.home() / ".config" / "defectlink"


@dataclass
class DefectLinkConfig:
    """Application-wide configuration."""

    config_dir: Path = field(default_factory=_default_config_dir)
    path_filter_file: Path | None = None
    silent: bool = False
    verbose: bool = False

    @classmethod
    def load(cls) -> DefectLinkConfig:
        """Load config from environment variables with XDG defaults."""
        config = cls()

        env_filters = os.environ.get("DEFECTLINK_PATH_FILTERS")
        if env_filters:
            config.path_filter_file = Path(env_filters)
        else:
            filters = config.config_dir / "path-filters.yaml"
            if filters.is_file():
                config.path_filter_file = filters

        env_silent = os.environ.get("DEFECTLINK_SILENT", "")
        if env_silent.lower() in _TRUTHY:
            config.silent = True

        return config
