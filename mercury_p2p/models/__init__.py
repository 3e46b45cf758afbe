from .completion_record import CompletionRecord as CompletionRecord
from .completion_state import CompletionState as CompletionState
from .constants import ANY_SOURCE as ANY_SOURCE, ANY_TAG as ANY_TAG
from .envelope import Envelope as Envelope
from .operation_kind import OperationKind as OperationKind
from .request_handle import RequestHandle as RequestHandle
from .wait_timeout import WaitTimeout as WaitTimeout
