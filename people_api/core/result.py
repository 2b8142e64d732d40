"""
success/failure envelope returned by every command and query handler.

a result is either ``Success(value)`` or ``Failure(errors)``; there are no
implicit conversions between values, strings and results. callers branch
explicitly, e.g.:

    result = await create_person(uow, payload)
    if isinstance(result, Failure):
        ...
"""
from dataclasses import dataclass, field
from typing import Generic, List, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False


@dataclass(frozen=True)
class Failure:
    errors: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not self.errors:
            raise ValueError("a failure needs at least one error message")

    @classmethod
    def of(cls, *errors: str) -> "Failure":
        return cls(list(errors))

    @property
    def message(self) -> str:
        """all errors joined into a single message"""
        return "; ".join(self.errors)

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True


Result = Union[Success[T], Failure]
