"""Data Transfer Objects for store mutation outcomes."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OperationStatus(str, Enum):
    OK = "ok"
    INVALID = "invalid"    # rejected before any remote call
    SKIPPED = "skipped"    # nothing to do (missing city, empty key)
    FAILED = "failed"      # remote call raised


@dataclass
class OperationResult:
    """Outcome of one controller mutation."""
    operation: str
    status: OperationStatus
    key: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.status == OperationStatus.OK

    @classmethod
    def success(cls, operation: str, key: Optional[str] = None) -> "OperationResult":
        return cls(operation=operation, status=OperationStatus.OK, key=key)

    @classmethod
    def invalid(cls, operation: str, key: Optional[str] = None) -> "OperationResult":
        return cls(operation=operation, status=OperationStatus.INVALID, key=key)

    @classmethod
    def skipped(cls, operation: str, key: Optional[str] = None) -> "OperationResult":
        return cls(operation=operation, status=OperationStatus.SKIPPED, key=key)

    @classmethod
    def failed(cls, operation: str, key: Optional[str], error: BaseException) -> "OperationResult":
        return cls(operation=operation, status=OperationStatus.FAILED, key=key, error=error)
