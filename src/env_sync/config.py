"""Configuration management."""

import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

import yaml

from env_sync.core import DEFAULT_CATEGORY, DEFAULT_RULES, ClassificationRule, ConfigError


@dataclass
class GitHubConfig:
    """GitHub API settings."""
    organization: str = "sovereign-codex"
    api_base: str = "https://api.github.com"
    timeout: float = 30.0


@dataclass
class PathsConfig:
    """Output and input file locations."""
    output: Path = Path("CODEX_ENVIRONMENTS.md")
    state: Path = Path("manifests/codex-environments.json")
    overrides: Path = Path("manifests/codex-environment-overrides.json")


@dataclass
class ClassificationConfig:
    """Category rules, evaluated in declaration order."""
    default_category: str = DEFAULT_CATEGORY
    rules: tuple[ClassificationRule, ...] = DEFAULT_RULES


@dataclass
class ControlPlaneConfig:
    """Downstream control plane settings."""
    endpoint: Optional[str] = None
    timeout: float = 30.0


@dataclass
class Settings:
    """Application settings."""

    # Secrets (from environment only)
    github_token: Optional[str] = None
    control_plane_token: Optional[str] = None

    # Config sections
    github: GitHubConfig = field(default_factory=GitHubConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    classification: ClassificationConfig = field(default_factory=ClassificationConfig)
    control_plane: ControlPlaneConfig = field(default_factory=ControlPlaneConfig)

    @property
    def organization(self) -> str:
        return self.github.organization

    @property
    def control_plane_endpoint(self) -> Optional[str]:
        return self.control_plane.endpoint


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"{config_path} must contain a mapping")
    return config


def parse_rules(raw_rules: list) -> tuple[ClassificationRule, ...]:
    """Build classification rules from ``[{category, patterns}]`` entries."""
    if not isinstance(raw_rules, list):
        raise ConfigError("classification.rules must be a list")

    rules = []
    for raw in raw_rules:
        if not isinstance(raw, dict) or "category" not in raw or "patterns" not in raw:
            raise ConfigError("Each classification rule needs 'category' and 'patterns'")
        patterns = raw["patterns"]
        if not isinstance(patterns, list):
            raise ConfigError(f"Patterns for category '{raw['category']}' must be a list")
        try:
            rules.append(ClassificationRule.from_strings(str(raw["category"]), [str(p) for p in patterns]))
        except re.error as e:
            raise ConfigError(f"Invalid pattern for category '{raw['category']}': {e}") from e
    return tuple(rules)


def _section(config: dict, name: str) -> dict:
    """Return a config section, which must be a mapping."""
    section = config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping")
    return section


def _apply_section(target: object, section: dict, name: str, convert=None) -> None:
    """Copy known keys of a section onto its dataclass."""
    known = {f.name for f in fields(target)}
    unknown = set(section) - known
    if unknown:
        raise ConfigError(f"Unknown keys in '{name}': {', '.join(sorted(map(str, unknown)))}")

    for key, value in section.items():
        if convert is not None:
            if value is None:
                raise ConfigError(f"'{name}.{key}' cannot be empty")
            value = convert(value)
        setattr(target, key, value)


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    # Load YAML config
    config = load_config(config_path)

    unknown = set(config) - {"github", "paths", "classification", "control_plane"}
    if unknown:
        raise ConfigError(f"Unknown config sections: {', '.join(sorted(map(str, unknown)))}")

    # Build settings
    settings = Settings(
        github_token=os.getenv("GITHUB_TOKEN") or None,
        control_plane_token=os.getenv("CODEX_API_TOKEN") or None,
    )

    # Apply YAML config
    _apply_section(settings.github, _section(config, "github"), "github")
    _apply_section(settings.paths, _section(config, "paths"), "paths", convert=Path)

    classification = _section(config, "classification")
    unknown = set(classification) - {"default_category", "rules"}
    if unknown:
        raise ConfigError(f"Unknown keys in 'classification': {', '.join(sorted(map(str, unknown)))}")
    if "default_category" in classification:
        settings.classification.default_category = str(classification["default_category"])
    if "rules" in classification:
        settings.classification.rules = parse_rules(classification["rules"])

    _apply_section(settings.control_plane, _section(config, "control_plane"), "control_plane")

    # Environment wins over YAML
    if os.getenv("GITHUB_ORG"):
        settings.github.organization = os.environ["GITHUB_ORG"]
    if os.getenv("CODEX_API_URL"):
        settings.control_plane.endpoint = os.environ["CODEX_API_URL"]

    return settings
