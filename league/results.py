"""
Tagged results returned by validators, the token codec and the services.

An operation either succeeds with ``Ok(value)`` or fails with
``Failure(error)``, where ``error`` is one of the ``league.errors`` types.
Callers branch on ``result.ok`` instead of catching exceptions.
"""

from dataclasses import dataclass
from typing import ClassVar, Generic, TypeVar, Union

from league.errors import ServiceError

T = TypeVar('T')


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    ok: ClassVar[bool] = True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    error: ServiceError
    ok: ClassVar[bool] = False

    def unwrap(self):
        """Re-raise the carried error; for callers that want exceptions."""
        raise self.error

    @property
    def code(self) -> str:
        return self.error.code


Result = Union[Ok[T], Failure]
