from .buffer import RecordStore, maybe_store

__all__ = [
    "RecordStore",
    "maybe_store",
]
