"""Loader for manual per-repository overrides."""

from pathlib import Path
from typing import Any

import yaml

from env_sync.core.entities import EnvironmentStatus, Override
from env_sync.core.errors import ConfigError

_ALLOWED_KEYS = {"category", "status", "defaultEnabled"}


class OverrideStore:
    """Read overrides keyed by repository name from a JSON or YAML file.

    Example::

        {
          "si-core": {"category": "core", "defaultEnabled": true},
          "sandbox": {"status": "dormant"}
        }
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> dict[str, Override]:
        """Load overrides. A missing file means no overrides."""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse overrides file {self.path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Overrides file {self.path} must contain a mapping of repository names"
            )

        return {str(name): self._parse_entry(str(name), entry) for name, entry in data.items()}

    def _parse_entry(self, name: str, entry: Any) -> Override:
        if entry is None:
            return Override()
        if not isinstance(entry, dict):
            raise ConfigError(f"Override for '{name}' must be a mapping")

        unknown = set(entry) - _ALLOWED_KEYS
        if unknown:
            raise ConfigError(
                f"Override for '{name}' has unknown keys: {', '.join(sorted(map(str, unknown)))}"
            )

        category = entry.get("category")
        if category is not None and (not isinstance(category, str) or not category):
            raise ConfigError(f"Override for '{name}': category must be a non-empty string")

        status = entry.get("status")
        if status is not None:
            try:
                status = EnvironmentStatus(status)
            except ValueError as e:
                allowed = ", ".join(s.value for s in EnvironmentStatus)
                raise ConfigError(
                    f"Override for '{name}': status must be one of {allowed}, got {status!r}"
                ) from e

        default_enabled = entry.get("defaultEnabled")
        if default_enabled is not None and not isinstance(default_enabled, bool):
            raise ConfigError(f"Override for '{name}': defaultEnabled must be true or false")

        return Override(category=category, status=status, default_enabled=default_enabled)
