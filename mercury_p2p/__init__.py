from .endpoint import Endpoint as Endpoint
from .env import Env as Env, load_env as load_env
from .errors import (
    P2PError as P2PError,
    InvalidPeer as InvalidPeer,
    InvalidTag as InvalidTag,
    InvalidHandle as InvalidHandle,
    TransportError as TransportError,
    WaitTimeoutError as WaitTimeoutError,
)
from .fabric import Fabric as Fabric
from .models import (
    ANY_SOURCE as ANY_SOURCE,
    ANY_TAG as ANY_TAG,
    CompletionRecord as CompletionRecord,
    CompletionState as CompletionState,
    OperationKind as OperationKind,
    RequestHandle as RequestHandle,
    WaitTimeout as WaitTimeout,
)
from .runtime import World as World, finalize as finalize, init as init
from .tracing import Tracer as Tracer, TraceRecorder as TraceRecorder
