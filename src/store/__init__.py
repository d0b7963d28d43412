"""Record Store — append-only хранилище demand/supply/pricing записей."""

from .record_store import RecordStore

__all__ = [
    "RecordStore",
]
