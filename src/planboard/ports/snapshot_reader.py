"""Snapshot reader interface."""

from typing import Protocol

from planboard.core.models import Snapshot


class SnapshotReader(Protocol):
    """Interface for reading the planning state from any backend."""

    def read(self) -> Snapshot:
        """Read a full snapshot of every planning collection."""
        ...
