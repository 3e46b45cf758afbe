import asyncio
from dataclasses import dataclass, field
from typing import Any, MutableSequence

from .completion_record import CompletionRecord
from .completion_state import CompletionState
from .operation_kind import OperationKind


@dataclass(slots=True, eq=False)
class RequestHandle:
    """
    One in-flight non-blocking operation.

    Handles are created by Endpoint.initiate_send/initiate_receive and
    consumed exactly once by a wait or a successful test. They compare
    by identity.
    """

    request_id: int
    kind: OperationKind
    owner: int
    peer: int
    tag: int
    buffer: MutableSequence[Any]
    completion: asyncio.Future[CompletionRecord] = field(repr=False)
    state: CompletionState = CompletionState.PENDING
    record: CompletionRecord | None = None
    consumed: bool = False

    @property
    def done(self) -> bool:
        return self.state.terminal
