"""Exception types shared by the monitors.

Blob names that fail to parse are not exceptions: the parser returns None
and the caller skips the name.
"""

from __future__ import annotations


class MonitorError(Exception):
    """Base class for monitor failures."""


class MissingConfigurationError(MonitorError, ValueError):
    """A required setting or secret is empty."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Secret {name} is missing.")


class CollaboratorFailure(MonitorError, RuntimeError):
    """Blob storage, Pulsar or another HTTP collaborator failed or replied with garbage."""
