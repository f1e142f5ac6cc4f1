"""Adapters for GitHub, output sinks and the control plane."""
