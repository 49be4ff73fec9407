"""GraphQL contract of the person directory."""

from typing import List, Optional

import strawberry
from graphql import GraphQLError
from pydantic import ValidationError as PydanticValidationError
from strawberry.types import Info

from phonebook.core.exceptions import InvalidPersonError, PhonebookError
from phonebook.engine import fields
from phonebook.engine.mutations import MutationEngine
from phonebook.engine.queries import QueryEngine
from phonebook.models import PersonInput, PersonRecord, YesNo

YesNo = strawberry.enum(YesNo)


@strawberry.type
class Address:
    street: str
    city: Optional[str]


@strawberry.type
class Person:
    name: str
    age: int
    phone: Optional[str]
    id: strawberry.ID
    street: strawberry.Private[str]
    city: strawberry.Private[Optional[str]]

    @strawberry.field
    def birth_year(self) -> str:
        return fields.birth_year(self.age)

    @strawberry.field
    def address(self) -> Address:
        parts = fields.address(self.street, self.city)
        return Address(street=parts.street, city=parts.city)

    @strawberry.field
    def is_of_legal_age(self) -> str:
        return fields.is_of_legal_age(self.age)

    @classmethod
    def from_record(cls, record: PersonRecord) -> "Person":
        return cls(
            name=record.name,
            age=record.age,
            phone=record.phone,
            id=strawberry.ID(record.id),
            street=record.street,
            city=record.city,
        )


def to_graphql_error(exc: PhonebookError) -> GraphQLError:
    extensions = {"code": exc.error_code, **(exc.details or {})}
    return GraphQLError(exc.message, extensions=extensions, original_error=exc)


def _queries(info: Info) -> QueryEngine:
    return info.context["queries"]


def _mutations(info: Info) -> MutationEngine:
    return info.context["mutations"]


@strawberry.type
class Query:
    @strawberry.field
    async def person_count(self, info: Info) -> int:
        try:
            return await _queries(info).person_count()
        except PhonebookError as exc:
            raise to_graphql_error(exc) from exc

    @strawberry.field
    async def all_persons(self, info: Info, phone: Optional[YesNo] = None) -> List[Person]:
        try:
            persons = await _queries(info).all_persons(phone)
        except PhonebookError as exc:
            raise to_graphql_error(exc) from exc
        return [Person.from_record(person) for person in persons]

    @strawberry.field
    async def find_person(self, info: Info, name: str) -> Optional[Person]:
        try:
            person = await _queries(info).find_person(name)
        except PhonebookError as exc:
            raise to_graphql_error(exc) from exc
        return Person.from_record(person) if person else None


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def add_person(
        self,
        info: Info,
        name: str,
        age: int,
        street: str,
        city: str,
        phone: Optional[str] = None,
    ) -> Optional[Person]:
        try:
            person = PersonInput(name=name, age=age, phone=phone, street=street, city=city)
        except PydanticValidationError as exc:
            invalid = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
            raise to_graphql_error(InvalidPersonError("Invalid person arguments", {"invalidArgs": invalid})) from exc

        try:
            created = await _mutations(info).add_person(person)
        except PhonebookError as exc:
            raise to_graphql_error(exc) from exc
        return Person.from_record(created)

    @strawberry.mutation
    async def edit_phone_number(self, info: Info, name: str, phone: str) -> Optional[Person]:
        try:
            updated = await _mutations(info).edit_phone_number(name, phone)
        except PhonebookError as exc:
            raise to_graphql_error(exc) from exc
        return Person.from_record(updated) if updated else None


schema = strawberry.Schema(query=Query, mutation=Mutation)
