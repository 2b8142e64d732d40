import re
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from people_api.models.people import utc_today

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
DOCUMENT_MAX_LENGTH = 20
MAX_AGE_YEARS = 120

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9]+([a-zA-Z0-9._+-]*[a-zA-Z0-9])?@[a-zA-Z0-9]+([a-zA-Z0-9.-]*[a-zA-Z0-9])?\.[a-zA-Z]{2,}$",
    re.IGNORECASE,
)


def is_valid_email(email: str) -> bool:
    if not email or not email.strip():
        return False
    if len(email) > EMAIL_MAX_LENGTH:
        return False
    if ".." in email:
        return False
    if email.startswith(".") or email.endswith("."):
        return False
    if email.startswith("@") or email.endswith("@"):
        return False
    if email.count("@") != 1:
        return False
    local, domain = email.split("@")
    if not local or not domain:
        return False
    return EMAIL_PATTERN.match(email) is not None


def years_before(day: date, years: int) -> date:
    """same calendar day ``years`` earlier, falling back to feb 28 for leap days"""
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)


def _require_text(value: str, label: str, max_length: int) -> str:
    if not value or not value.strip():
        raise ValueError(f"{label} is required")
    if len(value) > max_length:
        raise ValueError(f"{label} must not exceed {max_length} characters")
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonUpdate(CamelModel):
    first_name: str
    last_name: str
    email: str
    birth_date: date

    @field_validator("first_name")
    @classmethod
    def check_first_name(cls, value: str) -> str:
        return _require_text(value, "First name", NAME_MAX_LENGTH)

    @field_validator("last_name")
    @classmethod
    def check_last_name(cls, value: str) -> str:
        return _require_text(value, "Last name", NAME_MAX_LENGTH)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        _require_text(value, "Email", EMAIL_MAX_LENGTH)
        if not is_valid_email(value):
            raise ValueError("Email must be a valid address")
        return value

    @field_validator("birth_date")
    @classmethod
    def check_birth_date(cls, value: date) -> date:
        today = utc_today()
        if value == date.min:
            raise ValueError("Birth date is required")
        if value >= today:
            raise ValueError("Birth date must be in the past")
        if value <= years_before(today, MAX_AGE_YEARS):
            raise ValueError(f"Birth date must be within the last {MAX_AGE_YEARS} years")
        return value


class PersonCreate(PersonUpdate):
    document: str

    @field_validator("document")
    @classmethod
    def check_document(cls, value: str) -> str:
        return _require_text(value, "Document", DOCUMENT_MAX_LENGTH)


class PersonRead(CamelModel):
    """response projection: stored fields plus the derived full name and age"""
    id: UUID
    first_name: str
    last_name: str
    email: str
    birth_date: date
    document: str
    active: bool
    full_name: str
    age: int
    created_at: datetime
    updated_at: Optional[datetime] = None


class ValidationErrorResponse(BaseModel):
    message: str
    errors: list[str]


class NotFoundResponse(BaseModel):
    message: str


class ServerErrorResponse(BaseModel):
    message: str
    error: str
