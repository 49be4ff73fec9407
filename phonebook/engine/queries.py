"""Read-only operations over a freshly fetched person collection."""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from phonebook.models import PersonRecord, YesNo

logger = logging.getLogger(__name__)


class PersonSource(Protocol):
    async def fetch_all(self) -> List[PersonRecord]: ...


def find_by_name(persons: List[PersonRecord], name: str) -> Optional[PersonRecord]:
    """Return the first person in fetch order whose name matches exactly."""

    return next((person for person in persons if person.name == name), None)


def filter_by_phone(persons: List[PersonRecord], phone: Optional[YesNo]) -> List[PersonRecord]:
    if phone is None:
        return list(persons)
    wants_phone = phone is YesNo.YES
    return [person for person in persons if person.has_phone == wants_phone]


class QueryEngine:
    """Answers directory queries. Every call starts from a new snapshot of the store."""

    def __init__(self, store: PersonSource) -> None:
        self.store = store

    async def person_count(self) -> int:
        persons = await self.store.fetch_all()
        return len(persons)

    async def all_persons(self, phone: Optional[YesNo] = None) -> List[PersonRecord]:
        persons = await self.store.fetch_all()
        matches = filter_by_phone(persons, phone)
        logger.debug(
            "allPersons matched %d of %d records",
            len(matches),
            len(persons),
            extra={"phone_filter": phone.value if phone else None},
        )
        return matches

    async def find_person(self, name: str) -> Optional[PersonRecord]:
        persons = await self.store.fetch_all()
        return find_by_name(persons, name)
