from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    DUPLICATE_ISBN = "duplicate_isbn"
    INSUFFICIENT_COPIES = "insufficient_copies"
    INVALID_ADJUSTMENT = "invalid_adjustment"
    VALIDATION = "validation"


@dataclass(frozen=True)
class ServiceError:
    kind: ErrorKind
    message: str
    details: dict = field(default_factory=dict)


@dataclass(frozen=True)
class Result:
    """
    Servis sonucu: ya value ya da error dolu olur.
    İş kuralı hataları exception olarak fırlatılmaz, bu nesneyle döner.
    """
    value: Any = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value=None):
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, **details):
        return cls(error=ServiceError(kind=kind, message=message, details=details))
