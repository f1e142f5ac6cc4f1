"""Downstream publishers."""

from env_sync.adapters.notifications.control_plane_publisher import ControlPlanePublisher

__all__ = ["ControlPlanePublisher"]
