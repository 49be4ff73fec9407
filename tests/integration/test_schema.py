from datetime import date

import pytest
from graphql import GraphQLError
from pydantic import ValidationError

from phonebook.api import schema as schema_module
from phonebook.api.schema import schema, to_graphql_error
from phonebook.core.exceptions import DuplicateNameError, StoreUnavailableError
from phonebook.engine.mutations import MutationEngine
from phonebook.engine.queries import QueryEngine
from phonebook.models import PersonInput, PersonRecord, YesNo

PERSON_FIELDS = "name age phone birthYear isOfLegalAge id address { street city }"


class StubStore:
    def __init__(self, persons=None):
        self.persons = list(persons or [])
        self.created = []
        self.updated = []

    async def fetch_all(self):
        return list(self.persons)

    async def create(self, record):
        self.created.append(record)
        self.persons.append(record)
        return record

    async def update(self, record_id, record):
        self.updated.append(record_id)
        return record


class UnavailableStore(StubStore):
    async def fetch_all(self):
        raise StoreUnavailableError("Record store is unavailable")


def _context(store):
    return {"queries": QueryEngine(store), "mutations": MutationEngine(store)}


def _directory():
    return StubStore(
        [
            PersonRecord(id="a", name="Alice", age=40, street="Main", city="Springfield"),
            PersonRecord(id="b", name="Bart", age=10, phone="555-0001", street="Evergreen", city="Springfield"),
        ]
    )


@pytest.mark.asyncio
async def test_person_count_and_find_person():
    result = await schema.execute(
        '{ personCount findPerson(name: "Alice") { %s } }' % PERSON_FIELDS,
        context_value=_context(_directory()),
    )

    assert result.errors is None
    assert result.data["personCount"] == 2
    assert result.data["findPerson"] == {
        "name": "Alice",
        "age": 40,
        "phone": None,
        "birthYear": str(date.today().year - 40),
        "isOfLegalAge": "Yes, it is",
        "id": "a",
        "address": {"street": "Main", "city": "Springfield"},
    }


@pytest.mark.asyncio
async def test_find_person_without_match_is_null():
    result = await schema.execute('{ findPerson(name: "Nobody") { name } }', context_value=_context(_directory()))

    assert result.errors is None
    assert result.data == {"findPerson": None}


@pytest.mark.asyncio
async def test_all_persons_phone_filter():
    query = "query ($phone: YesNo) { allPersons(phone: $phone) { name isOfLegalAge } }"
    context = _context(_directory())

    everyone = await schema.execute(query, context_value=context)
    with_phone = await schema.execute(query, variable_values={"phone": "YES"}, context_value=context)
    without_phone = await schema.execute(query, variable_values={"phone": "NO"}, context_value=context)

    assert [p["name"] for p in everyone.data["allPersons"]] == ["Alice", "Bart"]
    assert with_phone.data["allPersons"] == [{"name": "Bart", "isOfLegalAge": "No, it is not"}]
    assert without_phone.data["allPersons"] == [{"name": "Alice", "isOfLegalAge": "Yes, it is"}]


@pytest.mark.asyncio
async def test_add_person_returns_created_person():
    store = StubStore()
    result = await schema.execute(
        'mutation { addPerson(name: "Lisa", age: 8, street: "Evergreen", city: "Springfield") { %s } }'
        % PERSON_FIELDS,
        context_value=_context(store),
    )

    assert result.errors is None
    person = result.data["addPerson"]
    assert person["name"] == "Lisa"
    assert person["phone"] is None
    assert person["id"] == store.created[0].id


@pytest.mark.asyncio
async def test_add_person_duplicate_is_a_user_input_error():
    store = _directory()
    result = await schema.execute(
        'mutation { addPerson(name: "Alice", age: 1, street: "S", city: "C") { id } }',
        context_value=_context(store),
    )

    assert result.data == {"addPerson": None}
    error = result.errors[0]
    assert error.message == "Name must be unique"
    assert error.extensions["code"] == "BAD_USER_INPUT"
    assert error.extensions["invalidArgs"] == "Alice"
    assert store.created == []


@pytest.mark.asyncio
async def test_add_person_rejects_negative_age():
    store = StubStore()
    result = await schema.execute(
        'mutation { addPerson(name: "Lisa", age: -1, street: "S", city: "C") { id } }',
        context_value=_context(store),
    )

    assert result.errors[0].extensions["code"] == "BAD_USER_INPUT"
    assert result.errors[0].extensions["invalidArgs"] == ["age"]
    assert store.created == []


@pytest.mark.asyncio
async def test_edit_phone_number():
    store = _directory()
    result = await schema.execute(
        'mutation { editPhoneNumber(name: "Alice", phone: "555-1234") { name age phone address { street } } }',
        context_value=_context(store),
    )

    assert result.errors is None
    assert result.data["editPhoneNumber"] == {
        "name": "Alice",
        "age": 40,
        "phone": "555-1234",
        "address": {"street": "Main"},
    }
    assert store.updated == ["a"]


@pytest.mark.asyncio
async def test_edit_phone_number_unknown_name_is_null():
    store = _directory()
    result = await schema.execute(
        'mutation { editPhoneNumber(name: "Nobody", phone: "1") { id } }',
        context_value=_context(store),
    )

    assert result.errors is None
    assert result.data == {"editPhoneNumber": None}
    assert store.updated == []


@pytest.mark.asyncio
async def test_store_outage_under_closed_policy_is_reported():
    result = await schema.execute("{ personCount }", context_value=_context(UnavailableStore()))

    assert result.errors[0].extensions["code"] == "STORE_UNAVAILABLE"


def test_schema_exposes_contract():
    sdl = schema.as_str()

    assert "enum YesNo" in sdl
    assert "allPersons(phone: YesNo" in sdl
    assert "findPerson(name: String!): Person" in sdl
    assert "editPhoneNumber(name: String!, phone: String!): Person" in sdl
    assert "id: ID!" in sdl
    assert "address: Address!" in sdl


@pytest.mark.asyncio
async def test_person_without_city_resolves_null_city():
    store = StubStore([PersonRecord(id="m", name="Moe", age=50, street="Walnut", city=None)])
    result = await schema.execute('{ findPerson(name: "Moe") { address { street city } } }', context_value=_context(store))

    assert result.errors is None
    assert result.data == {"findPerson": {"address": {"street": "Walnut", "city": None}}}


def test_new_person_still_requires_a_city():
    with pytest.raises(ValidationError):
        PersonInput(name="Moe", age=50, street="Walnut", city=None)


def test_yes_no_filter_is_the_registered_model_enum():
    assert schema_module.YesNo is YesNo
    assert schema.get_type_by_name("YesNo") is not None


def test_domain_errors_become_graphql_errors_with_extensions():
    error = to_graphql_error(DuplicateNameError("Alice"))

    assert isinstance(error, GraphQLError)
    assert error.message == "Name must be unique"
    assert error.extensions == {"code": "BAD_USER_INPUT", "invalidArgs": "Alice"}
