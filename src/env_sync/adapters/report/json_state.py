"""Machine-readable JSON state file."""

import json
from typing import Any, Optional

from env_sync.core import Snapshot, SnapshotRenderer
from env_sync.core.entities import format_timestamp


class JsonStateRenderer(SnapshotRenderer):
    """Render ``{generatedAt, organization, environments}`` as pretty JSON."""

    def render(self, snapshot: Snapshot, previous: Optional[str] = None) -> str:
        """Render the state document.

        If ``previous`` holds the same organization and environments, its
        ``generatedAt`` is kept so that an unchanged remote yields a
        byte-identical file.
        """
        state: dict[str, Any] = {
            "generatedAt": format_timestamp(snapshot.generated_at),
            "organization": snapshot.organization,
            "environments": [env.to_dict() for env in snapshot.environments],
        }

        previous_generated_at = self._unchanged_generated_at(state, previous)
        if previous_generated_at is not None:
            state["generatedAt"] = previous_generated_at

        return json.dumps(state, indent=2, ensure_ascii=False) + "\n"

    def _unchanged_generated_at(self, state: dict[str, Any], previous: Optional[str]) -> Optional[str]:
        if not previous:
            return None

        try:
            old_state = json.loads(previous)
        except json.JSONDecodeError:
            # Unreadable state is simply overwritten.
            return None

        if not isinstance(old_state, dict):
            return None

        if (
            old_state.get("organization") == state["organization"]
            and old_state.get("environments") == state["environments"]
            and isinstance(old_state.get("generatedAt"), str)
        ):
            return old_state["generatedAt"]

        return None
