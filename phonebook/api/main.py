"""FastAPI application entrypoint for the Phonebook service."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
from strawberry.fastapi import GraphQLRouter

from phonebook.api.dependencies import get_graphql_context
from phonebook.api.middleware.logging import LoggingMiddleware
from phonebook.api.schema import schema
from phonebook.core.config import settings
from phonebook.core.exceptions import ApplicationError, ServiceUnavailableError
from phonebook.core.observability import setup_tracing
from phonebook.store.client import record_store


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Open the record store client on startup and close it on shutdown."""

    await record_store.initialize()
    try:
        yield
    finally:
        await record_store.close()


app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

setup_tracing(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)

graphql_router = GraphQLRouter(
    schema,
    context_getter=get_graphql_context,
    graphql_ide="graphiql" if settings.DEBUG else None,
)
app.include_router(graphql_router, prefix="/graphql")
app.mount("/metrics", make_asgi_app())


@app.get("/health")
async def health() -> Dict[str, str]:
    """Liveness probe; does not contact the record store."""

    return {"status": "ok"}


@app.get("/ready")
async def ready() -> Dict[str, str]:
    """Readiness probe that checks the record store answers."""

    if not await record_store.ping():
        raise ServiceUnavailableError("Record store is unreachable", code="store_unavailable")
    return {"status": "ready"}


@app.exception_handler(ApplicationError)
async def handle_application_error(_: Request, exc: ApplicationError):
    """Return standardized responses for application layer exceptions."""

    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "code": exc.code})
