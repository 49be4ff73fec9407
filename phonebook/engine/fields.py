"""Computed fields of the public person view."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

LEGAL_AGE = 18


@dataclass(frozen=True)
class AddressParts:
    street: str
    city: Optional[str]


def birth_year(age: int, today: Optional[date] = None) -> str:
    """Derive the birth year from the stored age, relative to the current year."""

    today = today or date.today()
    return str(today.year - age)


def is_of_legal_age(age: int) -> str:
    return "Yes, it is" if age >= LEGAL_AGE else "No, it is not"


def address(street: str, city: Optional[str]) -> AddressParts:
    return AddressParts(street=street, city=city)
