from .errors import (
    P2PError as P2PError,
    InvalidPeer as InvalidPeer,
    InvalidTag as InvalidTag,
    InvalidHandle as InvalidHandle,
    TransportError as TransportError,
    WaitTimeoutError as WaitTimeoutError,
)
