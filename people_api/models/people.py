from datetime import date, datetime, timezone
from uuid import UUID, uuid4
from sqlmodel import SQLModel, Field
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return utcnow().date()


def as_utc(value: datetime) -> datetime:
    """treat naive values read back from the database as utc"""
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


class Person(SQLModel, table=True):
    __tablename__ = "people"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    email: str = Field(max_length=255, unique=True, index=True)
    birth_date: date
    document: str = Field(max_length=20, unique=True, index=True)  # immutable after creation
    active: bool = Field(default=True, index=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = Field(default=None, nullable=True)  # null until first mutation

    @classmethod
    def create(cls, first_name: str, last_name: str, email: str, birth_date: date, document: str) -> "Person":
        """new active person with a fresh id; input is validated upstream"""
        return cls(
            first_name=first_name,
            last_name=last_name,
            email=email,
            birth_date=birth_date,
            document=document,
            active=True,
        )

    def update_personal_info(self, first_name: str, last_name: str, email: str, birth_date: date) -> None:
        self.first_name = first_name
        self.last_name = last_name
        self.email = email
        self.birth_date = birth_date
        self.mark_updated()

    def activate(self) -> None:
        self.active = True
        self.mark_updated()

    def deactivate(self) -> None:
        self.active = False
        self.mark_updated()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def age(self, today: Optional[date] = None) -> int:
        """whole years since birth_date, minus one while this year's birthday is still ahead"""
        today = today or utc_today()
        years = today.year - self.birth_date.year
        if (today.month, today.day) < (self.birth_date.month, self.birth_date.day):
            years -= 1
        return years

    def mark_updated(self) -> None:
        now = utcnow()
        # updated_at never precedes created_at
        self.updated_at = max(now, as_utc(self.created_at)) if self.created_at else now
