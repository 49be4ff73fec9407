"""Seed the record store with sample people."""

from __future__ import annotations

import asyncio
import logging

from phonebook.core.exceptions import DuplicateNameError
from phonebook.engine.mutations import MutationEngine
from phonebook.models import PersonInput
from phonebook.store.client import record_store

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_PEOPLE = [
    PersonInput(name="Homer Simpson", age=39, phone="555-7334", street="742 Evergreen Terrace", city="Springfield"),
    PersonInput(name="Lisa Simpson", age=8, street="742 Evergreen Terrace", city="Springfield"),
    PersonInput(name="Ned Flanders", age=60, phone="555-8904", street="744 Evergreen Terrace", city="Springfield"),
]


async def seed_people(engine: MutationEngine) -> None:
    for person in SAMPLE_PEOPLE:
        try:
            created = await engine.add_person(person)
        except DuplicateNameError:
            logger.info("Skipping %s; already present", person.name)
            continue
        logger.info("Seeded %s as %s", created.name, created.id)


async def main() -> None:
    await record_store.initialize()
    try:
        await seed_people(MutationEngine(record_store))
    finally:
        await record_store.close()


if __name__ == "__main__":
    asyncio.run(main())
