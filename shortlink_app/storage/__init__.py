"""
Record store module.

Durable slug -> URL persistence behind a Strategy Pattern interface.
"""

from .strategies import RecordStore, SQLAlchemyRecordStore, InMemoryRecordStore

__all__ = [
    "RecordStore",
    "SQLAlchemyRecordStore",
    "InMemoryRecordStore",
]
