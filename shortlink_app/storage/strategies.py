"""
Record store strategies using Strategy Pattern.

The record store is the source of truth for slug -> URL mappings:
- SQLAlchemy: relational database (SQLite, PostgreSQL, ...)
- In-memory: development and tests
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Optional
import logging

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.orm import Session

from shortlink_app.exceptions import SlugAlreadyExists, StorageUnavailable
from shortlink_app.models.short_link import ShortLink

logger = logging.getLogger(__name__)


class RecordStore(ABC):
    """
    Abstract base class for record stores.
    
    Stores only insert and look up; records are never updated or deleted.
    Async for interface consistency with the cache layer.
    """
    
    @abstractmethod
    async def insert(self, record: ShortLink) -> ShortLink:
        """
        Persist a new record.
        
        Raises:
            SlugAlreadyExists: a record with the same slug is already stored
            StorageUnavailable: the store cannot be reached
        """
        pass
    
    @abstractmethod
    async def find_by_slug(self, slug: str) -> Optional[ShortLink]:
        """
        Look up a record by slug.
        
        Raises:
            StorageUnavailable: the store cannot be reached
        """
        pass


class SQLAlchemyRecordStore(RecordStore):
    """
    Record store over a SQLAlchemy session.
    
    The unique index on url_info.slug turns concurrent inserts of the
    same slug into an IntegrityError for all but one writer.
    """
    
    def __init__(self, db: Session):
        self.db = db
    
    async def insert(self, record: ShortLink) -> ShortLink:
        try:
            self.db.add(record)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise SlugAlreadyExists(record.slug) from e
        except (OperationalError, InterfaceError) as e:
            self.db.rollback()
            logger.error("Database unavailable during insert: %s", e)
            raise StorageUnavailable("Failed to insert URL. Please try again later.") from e
        
        self.db.refresh(record)
        return record
    
    async def find_by_slug(self, slug: str) -> Optional[ShortLink]:
        try:
            return self.db.query(ShortLink).filter(ShortLink.slug == slug).first()
        except (OperationalError, InterfaceError) as e:
            self.db.rollback()
            logger.error("Database unavailable during lookup: %s", e)
            raise StorageUnavailable("Failed to look up URL. Please try again later.") from e


class InMemoryRecordStore(RecordStore):
    """
    Dict-backed record store.
    
    Enforces slug uniqueness like the database does. Not shared between
    processes.
    """
    
    def __init__(self):
        self._records: Dict[str, ShortLink] = {}
    
    async def insert(self, record: ShortLink) -> ShortLink:
        if record.slug in self._records:
            raise SlugAlreadyExists(record.slug)
        now = datetime.now(timezone.utc)
        record.created_at = now
        record.updated_at = now
        self._records[record.slug] = record
        return record
    
    async def find_by_slug(self, slug: str) -> Optional[ShortLink]:
        return self._records.get(slug)
    
    def __len__(self):
        return len(self._records)
