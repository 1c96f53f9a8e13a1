from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, TypeVar

from pydantic import TypeAdapter

T = TypeVar("T")


class HttpMethod(StrEnum):
    GET = "GET"
    POST = "POST"


@dataclass(frozen=True)
class ProgressSnapshot:
    bytes_downloaded: int
    total_bytes: int = 0

    @property
    def progress(self) -> float:
        """Fraction in [0, 1] of the download, 0.0 while the total is unknown."""
        if self.total_bytes > 0:
            return self.bytes_downloaded / self.total_bytes
        return 0.0


@dataclass(frozen=True)
class StringResponse:
    raw_response: str

    def to(self, model: type[T]) -> T:
        return TypeAdapter(model).validate_json(self.raw_response)

    def json(self) -> Any:
        return TypeAdapter(Any).validate_json(self.raw_response)


@dataclass(frozen=True)
class ByteResponse:
    raw_response: bytes


@dataclass(frozen=True)
class ProgressByteResponse:
    raw_response: bytes
    total_bytes: int = 0
    downloaded_bytes: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "downloaded_bytes", len(self.raw_response))

    @property
    def progress(self) -> ProgressSnapshot:
        return ProgressSnapshot(self.downloaded_bytes, self.total_bytes)
