"""
In-memory store for reference values backed by a JSON file.

The whole collection lives in memory as an ordered list and is mirrored
to a single file containing a JSON array.  The file is read once, when
the application starts, and rewritten in full after every successful
mutation.  Changes made to the file by other processes are not picked
up while the service is running.

Mutations are staged on a copy of the collection, written to disk, and
only then made visible.  If the write fails the visible collection is
left as it was, so memory and disk never disagree after a failed
request.  All access goes through a single lock.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from reference_values_api.app.core.exceptions import DecodeError, NotFoundError, StorageError
from reference_values_api.app.schemas.reference_value import (
    ReferenceValue,
    ReferenceValueList,
    ReferenceValueUpdate,
)

logger = logging.getLogger(__name__)


class ReferenceValueStore:
    """Ordered collection of reference values persisted to ``path``."""

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)
        self._records: List[ReferenceValue] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def load(self) -> None:
        """Replace the in-memory collection with the contents of the file.

        Raises :class:`StorageError` if the file cannot be read and
        :class:`DecodeError` if it does not hold a JSON array of
        reference values.
        """
        try:
            data = self.path.read_bytes()
        except OSError as exc:
            raise StorageError(f"cannot read {self.path}: {exc}") from exc
        try:
            records = ReferenceValueList.validate_json(data)
        except ValidationError as exc:
            raise DecodeError(f"invalid reference values in {self.path}: {exc}") from exc
        with self._lock:
            self._records = list(records)
        logger.info("Loaded %d reference values from %s", len(records), self.path)

    def persist(self) -> None:
        """Write the current collection to the backing file."""
        with self._lock:
            self._write(self._records)

    def list(self) -> List[ReferenceValue]:
        """Return a snapshot of the collection in insertion order."""
        with self._lock:
            return list(self._records)

    def find_by_id(self, value_id: str) -> Optional[ReferenceValue]:
        """Return the first record whose id equals ``value_id``, or ``None``."""
        with self._lock:
            index = self._index_of(value_id)
            return None if index is None else self._records[index]

    def append(self, record: ReferenceValue) -> ReferenceValue:
        """Add ``record`` at the end of the collection and persist it.

        Ids are not checked for uniqueness; a duplicate id is stored but
        :meth:`find_by_id` keeps returning the earlier record.
        """
        with self._lock:
            staged = self._records + [record]
            self._write(staged)
            self._records = staged
        logger.info("Created reference value %r", record.id)
        return record

    def replace_fields(self, value_id: str, fields: ReferenceValueUpdate) -> ReferenceValue:
        """Overwrite name, reference, description and image_url of a record.

        The first record with ``value_id`` is updated; its id is kept.
        Raises :class:`NotFoundError` when no record matches.
        """
        with self._lock:
            index = self._index_of(value_id)
            if index is None:
                raise NotFoundError(value_id)
            updated = self._records[index].model_copy(update=fields.mutable_fields())
            staged = list(self._records)
            staged[index] = updated
            self._write(staged)
            self._records = staged
        logger.info("Updated reference value %r", value_id)
        return updated

    def _index_of(self, value_id: str) -> Optional[int]:
        for i, record in enumerate(self._records):
            if record.id == value_id:
                return i
        return None

    def _write(self, records: List[ReferenceValue]) -> None:
        # Caller holds the lock.
        data = ReferenceValueList.dump_json(records, indent=2)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp_path.write_bytes(data)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            logger.error("Failed to save reference values to %s: %s", self.path, exc)
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError:
                pass
            raise StorageError(f"cannot write {self.path}: {exc}") from exc
        logger.debug("Saved %d reference values to %s", len(records), self.path)
