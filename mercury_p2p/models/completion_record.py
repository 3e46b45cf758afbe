import msgspec

from .completion_state import CompletionState
from .operation_kind import OperationKind


class CompletionRecord(msgspec.Struct, frozen=True, kw_only=True):
    request_id: int
    kind: OperationKind
    state: CompletionState
    count: int = 0
    # rank matched on the other side; the destination for sends
    source: int | None = None
    tag: int | None = None
    error: str | None = None
