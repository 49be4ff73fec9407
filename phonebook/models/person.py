"""Person data model definitions."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class YesNo(Enum):
    YES = "YES"
    NO = "NO"


class PersonInput(BaseModel):
    """Arguments accepted when registering a new person."""

    name: str
    age: int = Field(..., ge=0)
    phone: Optional[str] = None
    street: str
    city: str


class PersonRecord(PersonInput):
    """A person as persisted by the record store."""

    # Keys the store adds on its own are kept so updates write them back.
    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Opaque identifier assigned at creation")
    city: Optional[str] = None

    @property
    def has_phone(self) -> bool:
        return bool(self.phone)

