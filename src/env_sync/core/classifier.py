"""Rule-based classification of repositories into environments."""

from datetime import datetime, timedelta, timezone
from typing import Mapping, Optional, Sequence

from env_sync.core.entities import (
    ClassificationRule,
    Environment,
    EnvironmentStatus,
    Item,
    Override,
)

DEFAULT_CATEGORY = "modules"
FRESHNESS_WINDOW = timedelta(days=90)

# Earlier rules take priority.
DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule.from_strings(
        "core",
        [r"\bsi-core\b", r"\bcore\b", r"manifest", r"shared", r"infra", r"kernel"],
    ),
    ClassificationRule.from_strings(
        "archives",
        [r"archive", r"deprecated", r"legacy", r"prototype", r"experiment"],
    ),
)

_NO_OVERRIDE = Override()


def classify(
    items: Sequence[Item],
    overrides: Mapping[str, Override],
    now: datetime,
    rules: Sequence[ClassificationRule] = DEFAULT_RULES,
    default_category: str = DEFAULT_CATEGORY,
) -> list[Environment]:
    """Derive one environment per item, preserving input order.

    A naive ``now`` is taken as UTC.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    environments = []
    for item in items:
        override = overrides.get(item.name, _NO_OVERRIDE)
        category = apply_category(item, override.category, rules, default_category)
        status = apply_status(item, override.status, now)
        environments.append(
            Environment(
                id=item.id,
                name=item.name,
                full_name=item.full_name,
                url=item.url,
                description=item.description,
                archived=item.archived,
                last_activity_at=item.last_activity_at,
                category=category,
                status=status,
                default_enabled=apply_default_enabled(status, override.default_enabled),
            )
        )
    return environments


def apply_category(
    item: Item,
    override_category: Optional[str],
    rules: Sequence[ClassificationRule],
    default_category: str = DEFAULT_CATEGORY,
) -> str:
    if override_category:
        return override_category

    for rule in rules:
        if rule.matches(item.name, item.description or ""):
            return rule.category

    return default_category


def apply_status(
    item: Item, override_status: Optional[EnvironmentStatus], now: datetime
) -> EnvironmentStatus:
    if override_status is not None:
        return override_status

    if item.archived:
        return EnvironmentStatus.ARCHIVED

    if item.last_activity_at is not None and item.last_activity_at < now - FRESHNESS_WINDOW:
        return EnvironmentStatus.DORMANT

    return EnvironmentStatus.ACTIVE


def apply_default_enabled(status: EnvironmentStatus, override_value: Optional[bool]) -> bool:
    if override_value is not None:
        return override_value
    return status == EnvironmentStatus.ACTIVE
