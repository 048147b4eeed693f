"""File storage result models"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class FileRecord(BaseModel):
    """Metadata snapshot of a stored file, computed at query time."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Key the file was requested with")
    size_bytes: int = Field(..., ge=0, description="Size in bytes")
    modified_at: datetime = Field(..., description="Last modification time (UTC)")


class StorageFailure(StrEnum):
    """Why a storage operation did not succeed"""

    INVALID_KEY = "invalid_key"
    INVALID_CONTENT = "invalid_content"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    QUOTA_EXCEEDED = "quota_exceeded"
    IO_ERROR = "io_error"
    NOT_SUPPORTED = "not_supported"


@dataclass(frozen=True)
class StorageResult(Generic[T]):
    """
    Outcome of a storage operation.

    Operations never raise for expected outcomes; they return a result whose
    truthiness is ``ok``. On failure ``value`` is None and ``failure`` says why.
    """

    ok: bool
    value: T | None = None
    failure: StorageFailure | None = None
    detail: str | None = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, value: T | None = None) -> "StorageResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failed(cls, failure: StorageFailure, detail: str | None = None) -> "StorageResult[T]":
        return cls(ok=False, failure=failure, detail=detail)
