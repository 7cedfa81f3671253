"""Tagged result type for upstream calls that may fail."""

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful call carrying its value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed call carrying its error."""

    error: E


type Result[T, E] = Ok[T] | Err[E]


class RpcErrorKind(StrEnum):
    """Why an upstream call failed."""

    NETWORK = "network"
    RPC = "rpc"
    DECODE = "decode"


@dataclass(frozen=True, slots=True)
class RpcError:
    """Failure of a single upstream call."""

    kind: RpcErrorKind
    method: str
    message: str

    def __str__(self) -> str:
        return f"{self.method} failed ({self.kind}): {self.message}"


__all__ = [
    "Err",
    "Ok",
    "Result",
    "RpcError",
    "RpcErrorKind",
]
