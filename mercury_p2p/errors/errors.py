"""
Exceptions raised by endpoints and the fabric.

Structural errors (bad peer, bad tag, misused handle) are raised
synchronously by the call that detects them. TransportError is raised
from a wait once the fabric has failed the operation. Nothing is
retried.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from mercury_p2p.models import CompletionRecord


class P2PError(Exception):
    pass


class InvalidPeer(P2PError):
    """
    Raised at initiation when the peer is not a rank of the world, or
    when a wildcard source is given to a send.
    """

    def __init__(self, peer: int, size: int) -> None:
        super().__init__(
            f"Err. - peer {peer!r} is not addressable in a world of size {size}"
        )
        self.peer = peer
        self.size = size


class InvalidTag(P2PError):
    """
    Raised at initiation when the tag is not a non-negative integer,
    or when a wildcard tag is given to a send.
    """

    def __init__(self, tag: int) -> None:
        super().__init__(f"Err. - tag {tag!r} is not a valid message tag")
        self.tag = tag


class InvalidHandle(P2PError):
    """
    Raised when waiting on or testing a handle that was already
    consumed or was created by a different endpoint.
    """
    pass


class TransportError(P2PError):
    def __init__(
        self,
        message: str,
        record: CompletionRecord | None = None,
    ) -> None:
        super().__init__(message)
        self.record = record


class WaitTimeoutError(P2PError):
    """
    Raised when a wait exceeds its timeout. The handle stays pending
    and may be waited on again.
    """

    def __init__(self, request_id: int, timeout: float) -> None:
        super().__init__(
            f"Err. - request {request_id} did not complete within {timeout}s"
        )
        self.request_id = request_id
        self.timeout = timeout
