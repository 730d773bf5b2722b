from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar


T = TypeVar("T")


class ValidationStatus(Enum):
    VALID = "VALID"
    REINITIALIZED = "REINITIALIZED"


@dataclass(slots=True, frozen=True)
class Checked(Generic[T]):
    """
    Result of an operation whose output is re-validated.

    ``status`` distinguishes a normally computed value from one that
    replaced a NaN/Inf/negative-height result with a fresh random value.
    """

    value: T
    status: ValidationStatus = ValidationStatus.VALID

    @property
    def reinitialized(self) -> bool:
        return self.status == ValidationStatus.REINITIALIZED
