"""Persistence collaborators for the tracker session."""
from pcctrack.storage.json_store import JsonStore, MemoryStore, RecordStore, read_backup

__all__ = ["JsonStore", "MemoryStore", "RecordStore", "read_backup"]
