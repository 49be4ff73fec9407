"""HTTP client for the external person record store."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from phonebook.core.config import settings
from phonebook.core.exceptions import StoreUnavailableError, StoreWriteError, WriteNotConfirmedError
from phonebook.models import PersonRecord
from phonebook.utils.monitoring import track_store_call

logger = logging.getLogger(__name__)

PERSONS_PATH = "/persons"


class RecordStoreClient:
    """Create/read/update access to the `/persons` resource of the record store.

    Reads follow the configured policy: under ``"open"`` any failure is logged
    and degrades to an empty collection, under ``"closed"`` it raises
    `StoreUnavailableError`. Writes always propagate failures.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        read_policy: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url or settings.store_url
        self.timeout = timeout or settings.STORE_TIMEOUT_SECONDS
        self.read_policy = read_policy or settings.STORE_READ_POLICY
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def initialize(self) -> None:
        if self._client is not None:
            return
        logger.info("Connecting to record store at %s", self.base_url)
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("Record store client used before initialize()")
        return self._client

    async def fetch_all(self) -> List[PersonRecord]:
        """Return every stored person, in store order."""

        try:
            with track_store_call("fetch_all"):
                response = await self._http().get(PERSONS_PATH)
                response.raise_for_status()
                payload = response.json()
                if not isinstance(payload, list):
                    raise ValueError(f"expected a list of persons, got {type(payload).__name__}")
        except (httpx.HTTPError, ValueError) as exc:
            if self.read_policy == "closed":
                logger.error("Error fetching persons: %s", exc, extra={"store": self.base_url})
                raise StoreUnavailableError("Record store is unavailable", {"reason": str(exc)}) from exc
            logger.warning(
                "Error fetching persons, serving an empty collection: %s", exc, extra={"store": self.base_url}
            )
            return []

        return self._parse_records(payload)

    def _parse_records(self, payload: List[Any]) -> List[PersonRecord]:
        """Validate records one by one, skipping those the store holds in a malformed shape."""

        persons: List[PersonRecord] = []
        for position, item in enumerate(payload):
            try:
                persons.append(PersonRecord.model_validate(item))
            except ValidationError as exc:
                logger.warning(
                    "Skipping malformed person record at position %d: %s",
                    position,
                    exc,
                    extra={"store": self.base_url},
                )
        return persons

    async def create(self, record: PersonRecord) -> PersonRecord:
        return await self._write("create", "POST", PERSONS_PATH, record)

    async def update(self, record_id: str, record: PersonRecord) -> PersonRecord:
        return await self._write("update", "PUT", f"{PERSONS_PATH}/{record_id}", record)

    async def ping(self) -> bool:
        """Check that the store answers the collection endpoint."""

        try:
            response = await self._http().get(PERSONS_PATH)
        except httpx.HTTPError as exc:
            logger.warning("Record store ping failed: %s", exc)
            return False
        return response.is_success

    async def _write(self, operation: str, method: str, path: str, record: PersonRecord) -> PersonRecord:
        payload = record.model_dump(mode="json", exclude_none=True)
        try:
            with track_store_call(operation):
                response = await self._http().request(method, path, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Record store %s failed for %s: %s", operation, record.id, exc)
            raise StoreWriteError(f"Record store {operation} failed", {"id": record.id, "reason": str(exc)}) from exc

        return self._acknowledged(operation, record, response)

    def _acknowledged(self, operation: str, sent: PersonRecord, response: httpx.Response) -> PersonRecord:
        try:
            stored = PersonRecord.model_validate(response.json())
        except ValueError as exc:
            logger.error("Record store %s for %s returned no usable record", operation, sent.id)
            raise WriteNotConfirmedError(
                f"Record store did not confirm {operation}", {"id": sent.id, "reason": str(exc)}
            ) from exc

        if stored.id != sent.id:
            raise WriteNotConfirmedError(
                f"Record store confirmed {operation} for a different record",
                {"id": sent.id, "acknowledged_id": stored.id},
            )
        return stored


# Singleton instance shared by the query and mutation engines
record_store = RecordStoreClient()
