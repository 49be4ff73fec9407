from __future__ import annotations

from typing import Any, Dict

from phonebook.engine.mutations import MutationEngine
from phonebook.engine.queries import QueryEngine
from phonebook.store.client import record_store

query_engine = QueryEngine(record_store)
mutation_engine = MutationEngine(record_store)


async def get_graphql_context() -> Dict[str, Any]:
    return {"queries": query_engine, "mutations": mutation_engine}
