"""Ports - interfaces/protocols for external dependencies."""

from .snapshot_reader import SnapshotReader

__all__ = [
    "SnapshotReader",
]
