"""Custom exception hierarchy for the Phonebook service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import status


class ApplicationError(Exception):
    """Base application error with HTTP semantics."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "application_error"

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.message = message


class ServiceUnavailableError(ApplicationError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "service_unavailable"


@dataclass
class PhonebookError(Exception):
    """Base class for domain errors with structured payloads."""

    error_code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        base = f"[{self.error_code}] {self.message}"
        if self.details:
            return f"{base} :: {self.details}"
        return base


class DuplicateNameError(PhonebookError):
    """Raised when a person with the same name already exists."""

    def __init__(self, name: str) -> None:
        super().__init__("BAD_USER_INPUT", "Name must be unique", {"invalidArgs": name})
        self.name = name


class InvalidPersonError(PhonebookError):
    """Raised when mutation arguments do not form a valid person."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("BAD_USER_INPUT", message, details)


class StoreUnavailableError(PhonebookError):
    """Raised when the record store cannot be read under the fail-closed policy."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("STORE_UNAVAILABLE", message, details)


class StoreWriteError(PhonebookError):
    """Raised when a create or update call against the record store fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("STORE_WRITE_FAILED", message, details)


class WriteNotConfirmedError(StoreWriteError):
    """Raised when the store answers a write without a usable record."""
