from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION"
    MALFORMED_INPUT = "MALFORMED_INPUT"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class AppError:
    """Tagged error value returned (not raised) by handler steps."""

    kind: ErrorKind
    status_code: int
    detail: Optional[str] = None
    errors: List[str] = field(default_factory=list)


def validation_error(errors: List[str]) -> AppError:
    return AppError(ErrorKind.VALIDATION, 400, errors=list(errors))


def malformed_input(message: str) -> AppError:
    return AppError(
        ErrorKind.MALFORMED_INPUT,
        400,
        detail=f'invalid request body format : "{message}"',
    )


def not_found() -> AppError:
    return AppError(ErrorKind.NOT_FOUND, 404, detail="not found")


class IngestionError(Exception):
    """Raised when an uploaded object cannot be read or parsed."""

    def __init__(self, bucket: str, key: str, reason: str):
        super().__init__(f"Failed to ingest s3://{bucket}/{key}: {reason}")
        self.bucket = bucket
        self.key = key
        self.reason = reason
