import time
from enum import Enum

import msgspec


class TracePhase(Enum):
    ENTER = "ENTER"
    EXIT = "EXIT"


class TraceEvent(msgspec.Struct, frozen=True, kw_only=True):
    operation: str
    phase: TracePhase
    rank: int | None = None
    timestamp: int = msgspec.field(
        default_factory=time.monotonic_ns,
    )
    request_id: int | None = None
    peer: int | None = None
    tag: int | None = None
    error: str | None = None
