"""Write operations: validated against a fresh snapshot, then delegated to the store."""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import List, Optional, Protocol

from phonebook.core.exceptions import DuplicateNameError
from phonebook.engine.queries import find_by_name
from phonebook.models import PersonInput, PersonRecord

logger = logging.getLogger(__name__)


class PersonStore(Protocol):
    async def fetch_all(self) -> List[PersonRecord]: ...

    async def create(self, record: PersonRecord) -> PersonRecord: ...

    async def update(self, record_id: str, record: PersonRecord) -> PersonRecord: ...


class MutationEngine:
    """Applies directory mutations.

    The check-then-write section of each mutation holds a process-wide lock so
    that two requests in this process never validate against the same stale
    snapshot. Writers in other processes are not covered; the store remains
    the only guard against them.

    The lock is held across the store's create/update call, so a slow write
    delays every other mutation in this process until it completes or hits
    ``STORE_TIMEOUT_SECONDS``. Queries never take the lock.
    """

    def __init__(self, store: PersonStore) -> None:
        self.store = store
        self._write_lock = asyncio.Lock()

    async def add_person(self, person: PersonInput) -> PersonRecord:
        async with self._write_lock:
            persons = await self.store.fetch_all()
            if find_by_name(persons, person.name) is not None:
                logger.info("Rejected duplicate person", extra={"person_name": person.name})
                raise DuplicateNameError(person.name)

            record = PersonRecord(**person.model_dump(), id=str(uuid.uuid4()))
            stored = await self.store.create(record)

        logger.info("Person created", extra={"person_id": stored.id, "person_name": stored.name})
        return stored

    async def edit_phone_number(self, name: str, phone: str) -> Optional[PersonRecord]:
        async with self._write_lock:
            persons = await self.store.fetch_all()
            existing = find_by_name(persons, name)
            if existing is None:
                return None

            updated = existing.model_copy(update={"phone": phone})
            stored = await self.store.update(existing.id, updated)

        logger.info("Phone number updated", extra={"person_id": stored.id, "person_name": stored.name})
        return stored
