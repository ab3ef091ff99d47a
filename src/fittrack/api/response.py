"""Response envelope returned by every backend call."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

UNKNOWN_ERROR = "Error desconocido"


class ErrorKind(Enum):
    """Why a backend call failed."""

    NETWORK = "network"
    HTTP_STATUS = "http_status"
    DECODE = "decode"
    LOGICAL = "logical"
    CONFIG = "config"


@dataclass(frozen=True)
class ApiError:
    """A failed call, tagged with its cause.

    ``status_code`` is only set for HTTP_STATUS errors.
    """

    kind: ErrorKind
    message: str
    status_code: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.message:
            object.__setattr__(self, "message", UNKNOWN_ERROR)

    def __str__(self) -> str:
        return self.message

    @classmethod
    def network(cls, message: str) -> "ApiError":
        return cls(ErrorKind.NETWORK, message)

    @classmethod
    def http_status(cls, status_code: int, reason: str = "") -> "ApiError":
        message = f"Error {status_code}: {reason}" if reason else f"Error {status_code}"
        return cls(ErrorKind.HTTP_STATUS, message, status_code=status_code)

    @classmethod
    def decode(cls, message: str) -> "ApiError":
        return cls(ErrorKind.DECODE, message)

    @classmethod
    def logical(cls, message: Optional[str]) -> "ApiError":
        return cls(ErrorKind.LOGICAL, message or UNKNOWN_ERROR)

    @classmethod
    def config(cls, message: str) -> "ApiError":
        return cls(ErrorKind.CONFIG, message)


@dataclass
class ApiResponse(Generic[T]):
    """Uniform ``{success, data?, error?}`` envelope.

    ``data`` is present iff ``success``; ``error`` is present iff not.
    """

    success: bool
    data: Optional[T] = None
    error: Optional[ApiError] = None

    @classmethod
    def ok(cls, data: T) -> "ApiResponse[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: ApiError) -> "ApiResponse[T]":
        return cls(success=False, error=error)

    @property
    def error_message(self) -> Optional[str]:
        """Human-readable error text, or None on success."""
        return self.error.message if self.error else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire envelope shape."""
        if self.success:
            data = self.data
            if hasattr(data, "to_dict"):
                data = data.to_dict()  # type: ignore[union-attr]
            elif isinstance(data, list):
                data = [d.to_dict() if hasattr(d, "to_dict") else d for d in data]
            return {"success": True, "data": data}
        return {"success": False, "error": self.error_message}


def parse_envelope(
    payload: Any, decode: Optional[Callable[[Any], T]] = None
) -> ApiResponse[T]:
    """
    Turn a decoded JSON body into an ApiResponse.

    Args:
        payload: Parsed JSON body
        decode: Optional converter applied to ``data`` on success

    Returns:
        ApiResponse; malformed envelopes become DECODE errors
    """
    if not isinstance(payload, dict) or "success" not in payload:
        return ApiResponse.fail(ApiError.decode("Respuesta inválida del servidor"))

    if not payload["success"]:
        return ApiResponse.fail(ApiError.logical(payload.get("error")))

    data = payload.get("data")
    if decode is not None:
        try:
            data = decode(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            return ApiResponse.fail(
                ApiError.decode(f"Datos inválidos en la respuesta: {e}")
            )
    return ApiResponse.ok(data)
