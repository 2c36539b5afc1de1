"""Generic in-memory collection store with whole-collection persistence.

A store keeps an ordered list of records, exposes filtered and grouped
views over it, and writes the full list back to the key-value table after
every mutation. Mutations never raise for expected failures; they return a
Status so callers can tell a missing record from a failed write.
"""
import logging
import threading
from typing import Callable, Optional

from palette_navigator.errors import DecodeError, Status, WriteError
from palette_navigator.storage import load_collection, save_collection

logger = logging.getLogger(__name__)


class CollectionStore:
    """Holds one record type keyed by ``record.id``.

    Subclasses set ``key``, ``record_type``, ``text_fields``, ``filter_fields``
    (mapping of filter attribute to record attribute) and ``group_field``.
    """

    key: str = ""
    record_type: type = None
    text_fields: tuple = ("title", "description")
    filter_fields: dict = {}
    group_field: str = ""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.records: list = []
        self.search_text = ""
        for attr in self.filter_fields:
            setattr(self, attr, None)
        self._subscribers: list[Callable] = []
        self._lock = threading.RLock()

    # -- observers --

    def subscribe(self, callback: Callable) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self)

    # -- persistence --

    def load(self) -> Status:
        try:
            records = load_collection(self.db_path, self.key, self.record_type.from_dict)
        except DecodeError as e:
            logger.warning("Discarding unreadable collection: %s", e)
            self.records = []
            return Status.DECODE_ERROR
        self.records = records or []
        logger.debug("Loaded %d records from %s", len(self.records), self.key)
        return Status.OK

    def save(self) -> Status:
        try:
            save_collection(self.db_path, self.key, self.records)
        except WriteError as e:
            logger.error("Could not persist collection: %s", e)
            return Status.WRITE_ERROR
        return Status.OK

    def bootstrap(self, seed: Callable[[], list]) -> Status:
        """Load, then populate with seed data if the collection is empty."""
        status = self.load()
        if not self.records:
            self.records = list(seed())
            logger.info("Seeded %d sample records into %s", len(self.records), self.key)
            self.save()
        return status

    def _commit(self) -> Status:
        status = self.save()
        self._notify()
        return status

    # -- lookup --

    def find(self, record_id: str):
        return next((r for r in self.records if r.id == record_id), None)

    def _index_of(self, record_id: str) -> Optional[int]:
        for i, r in enumerate(self.records):
            if r.id == record_id:
                return i
        return None

    # -- mutations --

    def add(self, record) -> Status:
        with self._lock:
            self.records.append(record)
            return self._commit()

    def update(self, record) -> Status:
        with self._lock:
            index = self._index_of(record.id)
            if index is None:
                logger.debug("update: %s not found in %s", record.id, self.key)
                return Status.NOT_FOUND
            self.records[index] = record
            return self._commit()

    def delete(self, record) -> Status:
        with self._lock:
            index = self._index_of(record.id)
            if index is None:
                logger.debug("delete: %s not found in %s", record.id, self.key)
                return Status.NOT_FOUND
            del self.records[index]
            self._after_delete(record.id)
            return self._commit()

    def _after_delete(self, record_id: str) -> None:
        """Hook for cascading removals."""

    def toggle(self, record, flag: str) -> Status:
        with self._lock:
            stored = self.find(record.id)
            if stored is None:
                logger.debug("toggle %s: %s not found in %s", flag, record.id, self.key)
                return Status.NOT_FOUND
            setattr(stored, flag, not getattr(stored, flag))
            return self._commit()

    # -- derived views --

    def _matches(self, record) -> bool:
        for attr, field_name in self.filter_fields.items():
            wanted = getattr(self, attr)
            if wanted is not None and getattr(record, field_name) != wanted:
                return False
        if not self.search_text:
            return True
        query = self.search_text.casefold()
        return any(query in getattr(record, name).casefold() for name in self.text_fields)

    @property
    def filtered(self) -> list:
        return [r for r in self.records if self._matches(r)]

    @property
    def grouped(self) -> dict:
        groups: dict = {}
        for record in self.filtered:
            groups.setdefault(getattr(record, self.group_field), []).append(record)
        return groups

    def clear_filters(self) -> None:
        for attr in self.filter_fields:
            setattr(self, attr, None)
        self.search_text = ""
