import asyncio
from typing import Any, Iterable, MutableSequence

from mercury_p2p.errors import (
    InvalidHandle,
    InvalidPeer,
    InvalidTag,
    TransportError,
    WaitTimeoutError,
)
from mercury_p2p.fabric import Fabric
from mercury_p2p.logging import Logger
from mercury_p2p.logging.p2p_logging_models import (
    EndpointDebug,
    EndpointError,
    EndpointTrace,
)
from mercury_p2p.models import (
    ANY_SOURCE,
    ANY_TAG,
    CompletionRecord,
    CompletionState,
    OperationKind,
    RequestHandle,
    WaitTimeout,
)
from mercury_p2p.tracing import Tracer, traced


class Endpoint:
    """
    One communicating party of a world, addressed by its rank.

    initiate_send and initiate_receive never suspend: they validate the
    addressing, post the operation to the fabric and return a handle.
    wait, wait_all and wait_any are the only suspension points.
    """

    def __init__(
        self,
        rank: int,
        fabric: Fabric,
        tracer: Tracer | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._rank = rank
        self._fabric = fabric
        self._wait_timeout = fabric.env.wait_timeout
        self._logger = logger or Logger()
        self.tracer = tracer

    @property
    def rank(self) -> int:
        return self._rank

    @property
    def size(self) -> int:
        return self._fabric.size

    def __repr__(self) -> str:
        return f"Endpoint(rank={self._rank}, size={self._fabric.size})"

    @traced("initiate_send")
    def initiate_send(
        self,
        peer: int,
        tag: int,
        buffer: MutableSequence[Any],
    ) -> RequestHandle:
        self._validate_peer(peer, wildcard=False)
        self._validate_tag(tag, wildcard=False)

        handle = self._fabric.create_handle(
            OperationKind.SEND,
            self._rank,
            peer,
            tag,
            buffer,
        )

        self._fabric.post_send(handle)
        self._log_initiated("initiate_send", handle)

        return handle

    @traced("initiate_receive")
    def initiate_receive(
        self,
        peer: int,
        tag: int,
        buffer: MutableSequence[Any],
    ) -> RequestHandle:
        self._validate_peer(peer, wildcard=True)
        self._validate_tag(tag, wildcard=True)

        handle = self._fabric.create_handle(
            OperationKind.RECEIVE,
            self._rank,
            peer,
            tag,
            buffer,
        )

        self._fabric.post_receive(handle)
        self._log_initiated("initiate_receive", handle)

        return handle

    @traced("wait")
    async def wait(
        self,
        handle: RequestHandle,
        timeout: float | None | WaitTimeout = WaitTimeout.DEFAULT,
    ) -> CompletionRecord:
        self._check_handle(handle)

        if timeout is WaitTimeout.DEFAULT:
            timeout = self._wait_timeout

        if not handle.completion.done():
            done, _ = await asyncio.wait(
                [handle.completion],
                timeout=timeout,
            )

            if len(done) == 0:
                raise WaitTimeoutError(handle.request_id, timeout)

        return self._consume(handle)

    @traced("test")
    def test(self, handle: RequestHandle) -> CompletionRecord | None:
        self._check_handle(handle)

        if not handle.completion.done():
            return None

        return self._consume(handle)

    @traced("wait_all")
    async def wait_all(
        self,
        handles: Iterable[RequestHandle],
        timeout: float | None | WaitTimeout = WaitTimeout.DEFAULT,
    ) -> list[CompletionRecord]:
        handles = list(handles)
        self._check_handles(handles)

        if timeout is WaitTimeout.DEFAULT:
            timeout = self._wait_timeout

        pending = [
            handle.completion for handle in handles if not handle.completion.done()
        ]

        if pending:
            _, not_done = await asyncio.wait(
                pending,
                timeout=timeout,
            )

            if not_done:
                first_pending = next(
                    handle for handle in handles if not handle.completion.done()
                )

                raise WaitTimeoutError(first_pending.request_id, timeout)

        records: list[CompletionRecord] = []
        failure: TransportError | None = None

        for handle in handles:
            try:
                records.append(self._consume(handle))

            except TransportError as err:
                records.append(err.record)
                if failure is None:
                    failure = err

        if failure:
            raise failure

        return records

    @traced("wait_any")
    async def wait_any(
        self,
        handles: Iterable[RequestHandle],
        timeout: float | None | WaitTimeout = WaitTimeout.DEFAULT,
    ) -> tuple[int, CompletionRecord]:
        handles = list(handles)
        self._check_handles(handles)

        if len(handles) == 0:
            raise InvalidHandle("Err. - wait_any requires at least one handle")

        if timeout is WaitTimeout.DEFAULT:
            timeout = self._wait_timeout

        if not any(handle.completion.done() for handle in handles):
            done, _ = await asyncio.wait(
                [handle.completion for handle in handles],
                timeout=timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )

            if len(done) == 0:
                raise WaitTimeoutError(handles[0].request_id, timeout)

        index, handle = next(
            (index, handle)
            for index, handle in enumerate(handles)
            if handle.completion.done()
        )

        return index, self._consume(handle)

    def _validate_peer(self, peer: int, wildcard: bool) -> None:
        if wildcard and type(peer) is int and peer == ANY_SOURCE:
            return

        if (
            not isinstance(peer, int)
            or isinstance(peer, bool)
            or peer < 0
            or peer >= self._fabric.size
        ):
            raise InvalidPeer(peer, self._fabric.size)

    def _validate_tag(self, tag: int, wildcard: bool) -> None:
        if wildcard and type(tag) is int and tag == ANY_TAG:
            return

        if (
            not isinstance(tag, int)
            or isinstance(tag, bool)
            or tag < 0
        ):
            raise InvalidTag(tag)

    def _check_handle(self, handle: RequestHandle) -> None:
        if not isinstance(handle, RequestHandle):
            raise InvalidHandle(f"Err. - {handle!r} is not a request handle")

        if handle.consumed:
            raise InvalidHandle(
                f"Err. - request {handle.request_id} was already consumed"
            )

        if handle.owner != self._rank or not self._fabric.issued(handle):
            raise InvalidHandle(
                f"Err. - request {handle.request_id} was not issued by rank {self._rank}"
            )

    def _check_handles(self, handles: list[RequestHandle]) -> None:
        for handle in handles:
            self._check_handle(handle)

        if len({id(handle) for handle in handles}) != len(handles):
            raise InvalidHandle("Err. - the same request handle was passed more than once")

    def _consume(self, handle: RequestHandle) -> CompletionRecord:
        if handle.consumed:
            raise InvalidHandle(
                f"Err. - request {handle.request_id} was already consumed"
            )

        handle.consumed = True
        self._fabric.release(handle)

        record = handle.completion.result()

        if record.state == CompletionState.FAILED:
            self._logger.schedule(
                EndpointError(
                    message=record.error,
                    rank=self._rank,
                    operation=record.kind.value,
                    request_id=record.request_id,
                    peer=handle.peer,
                    tag=handle.tag,
                ),
                name="mercury_p2p.endpoint",
            )

            raise TransportError(
                f"Err. - request {record.request_id} failed: {record.error}",
                record=record,
            )

        self._logger.schedule(
            EndpointTrace(
                message=f"Completed {record.kind.value.lower()} request {record.request_id}",
                rank=self._rank,
                operation=record.kind.value,
                request_id=record.request_id,
                peer=handle.peer,
                tag=handle.tag,
            ),
            name="mercury_p2p.endpoint",
        )

        return record

    def _log_initiated(self, operation: str, handle: RequestHandle) -> None:
        self._logger.schedule(
            EndpointDebug(
                message=f"Posted {handle.kind.value.lower()} request {handle.request_id}",
                rank=self._rank,
                operation=operation,
                request_id=handle.request_id,
                peer=handle.peer,
                tag=handle.tag,
            ),
            name="mercury_p2p.endpoint",
        )
