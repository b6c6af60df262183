"""Persistence for the dashboard document."""

from .backing_store import KeyValueStore, MemoryKeyValueStore, FileKeyValueStore
from .activity_log import ActivityLog
from .document_store import DocumentStore
from .factory import create_backing_store

__all__ = [
    'KeyValueStore',
    'MemoryKeyValueStore',
    'FileKeyValueStore',
    'ActivityLog',
    'DocumentStore',
    'create_backing_store',
]
