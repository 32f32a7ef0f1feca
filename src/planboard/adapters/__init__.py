"""Adapters - I/O implementations of ports."""

from .json_snapshot import JsonSnapshotReader, SnapshotError

__all__ = [
    "JsonSnapshotReader",
    "SnapshotError",
]
