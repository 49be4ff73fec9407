from .person import PersonInput, PersonRecord, YesNo

__all__ = [
    "PersonInput",
    "PersonRecord",
    "YesNo",
]
