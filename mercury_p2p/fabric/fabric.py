"""
In-process messaging fabric shared by the endpoints of one world.

The fabric owns the two matching queues of every rank: receives that
were posted before a matching message arrived, and messages that
arrived before a matching receive was posted. A match never completes
inline. Delivery is scheduled on the event loop (after the configured
latency, if any), so completion is always asynchronous to initiation.

Matching is by (source, tag), with ANY_SOURCE and ANY_TAG accepted on
the receive side. Messages from one source with one tag match in the
order they were sent.
"""

import asyncio
import itertools
from collections import defaultdict, deque
from typing import Any, Deque, Dict, MutableSequence, Tuple

from mercury_p2p.env import Env
from mercury_p2p.errors import TransportError
from mercury_p2p.logging import Logger
from mercury_p2p.logging.p2p_logging_models import FabricDebug, FabricError
from mercury_p2p.models import (
    ANY_SOURCE,
    ANY_TAG,
    CompletionRecord,
    CompletionState,
    Envelope,
    OperationKind,
    RequestHandle,
)


class Fabric:

    def __init__(
        self,
        size: int,
        env: Env,
        logger: Logger | None = None,
    ) -> None:
        if size < 1:
            raise ValueError(f"Err. - world size must be at least 1, got {size}")

        self.size = size
        self.env = env

        self._loop = asyncio.get_running_loop()
        self._latency = env.delivery_latency
        self._logger = logger or Logger()

        self._request_ids = itertools.count()
        self._issued: Dict[int, RequestHandle] = {}

        self._posted_receives: Dict[int, Deque[RequestHandle]] = defaultdict(deque)
        self._unexpected: Dict[
            int,
            Deque[Tuple[Envelope, RequestHandle]]
        ] = defaultdict(deque)

        self._in_flight: Dict[
            int,
            Tuple[asyncio.Handle, RequestHandle, RequestHandle]
        ] = {}

        self._closed = False
        self._close_reason: str | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending_count(self) -> int:
        return len([
            handle for handle in self._issued.values() if not handle.done
        ])

    def create_handle(
        self,
        kind: OperationKind,
        owner: int,
        peer: int,
        tag: int,
        buffer: MutableSequence[Any],
    ) -> RequestHandle:
        if self._closed:
            raise TransportError(
                f"Err. - fabric is closed: {self._close_reason}"
            )

        handle = RequestHandle(
            request_id=next(self._request_ids),
            kind=kind,
            owner=owner,
            peer=peer,
            tag=tag,
            buffer=buffer,
            completion=self._loop.create_future(),
        )

        return handle

    def issued(self, handle: RequestHandle) -> bool:
        return self._issued.get(handle.request_id) is handle

    def release(self, handle: RequestHandle) -> None:
        self._issued.pop(handle.request_id, None)

    def post_send(self, handle: RequestHandle) -> None:
        try:
            envelope = Envelope.pack(
                handle.owner,
                handle.peer,
                handle.tag,
                handle.buffer,
            )

        except Exception as err:
            raise TransportError(
                f"Err. - send buffer of request {handle.request_id} could not be serialized: {err}"
            ) from err

        self._issued[handle.request_id] = handle

        posted = self._posted_receives[envelope.destination]

        for index, receive in enumerate(posted):
            if self._matches(receive, envelope):
                del posted[index]
                self._schedule_delivery(envelope, handle, receive)
                return

        self._unexpected[envelope.destination].append((envelope, handle))

    def post_receive(self, handle: RequestHandle) -> None:
        self._issued[handle.request_id] = handle

        unexpected = self._unexpected[handle.owner]

        for index, (envelope, send) in enumerate(unexpected):
            if self._matches(handle, envelope):
                del unexpected[index]
                self._schedule_delivery(envelope, send, handle)
                return

        self._posted_receives[handle.owner].append(handle)

    def close(self, reason: str = "fabric closed") -> None:
        if self._closed:
            return

        self._closed = True
        self._close_reason = reason

        pending = self.pending_count
        if pending > 0:
            self._logger.schedule(
                FabricError(
                    message=f"Closing fabric with {pending} pending operations: {reason}",
                    pending=pending,
                ),
                name="mercury_p2p.fabric",
            )

        for timer, send, receive in self._in_flight.values():
            timer.cancel()
            self._fail(send, reason)
            self._fail(receive, reason)

        self._in_flight.clear()

        for posted in self._posted_receives.values():
            for receive in posted:
                self._fail(receive, reason)

        self._posted_receives.clear()

        for unexpected in self._unexpected.values():
            for _, send in unexpected:
                self._fail(send, reason)

        self._unexpected.clear()

    def _matches(
        self,
        receive: RequestHandle,
        envelope: Envelope,
    ) -> bool:
        return (
            receive.peer in (ANY_SOURCE, envelope.source)
        ) and (
            receive.tag in (ANY_TAG, envelope.tag)
        )

    def _schedule_delivery(
        self,
        envelope: Envelope,
        send: RequestHandle,
        receive: RequestHandle,
    ) -> None:
        if self._latency > 0:
            timer = self._loop.call_later(
                self._latency,
                self._deliver,
                envelope,
                send,
                receive,
            )

        else:
            timer = self._loop.call_soon(
                self._deliver,
                envelope,
                send,
                receive,
            )

        self._in_flight[receive.request_id] = (timer, send, receive)

    def _deliver(
        self,
        envelope: Envelope,
        send: RequestHandle,
        receive: RequestHandle,
    ) -> None:
        self._in_flight.pop(receive.request_id, None)

        self._complete(
            send,
            CompletionRecord(
                request_id=send.request_id,
                kind=send.kind,
                state=CompletionState.COMPLETE,
                count=envelope.count,
                source=envelope.destination,
                tag=envelope.tag,
            ),
        )

        if envelope.count > len(receive.buffer):
            self._fail(
                receive,
                f"message of {envelope.count} elements truncated by a receive buffer of {len(receive.buffer)}",
                source=envelope.source,
                tag=envelope.tag,
            )
            return

        receive.buffer[:envelope.count] = envelope.unpack()

        self._complete(
            receive,
            CompletionRecord(
                request_id=receive.request_id,
                kind=receive.kind,
                state=CompletionState.COMPLETE,
                count=envelope.count,
                source=envelope.source,
                tag=envelope.tag,
            ),
        )

        self._logger.schedule(
            FabricDebug(
                message="Delivered message",
                source=envelope.source,
                destination=envelope.destination,
                tag=envelope.tag,
                count=envelope.count,
            ),
            name="mercury_p2p.fabric",
        )

    def _fail(
        self,
        handle: RequestHandle,
        reason: str,
        source: int | None = None,
        tag: int | None = None,
    ) -> None:
        self._complete(
            handle,
            CompletionRecord(
                request_id=handle.request_id,
                kind=handle.kind,
                state=CompletionState.FAILED,
                source=source,
                tag=tag,
                error=reason,
            ),
        )

    def _complete(
        self,
        handle: RequestHandle,
        record: CompletionRecord,
    ) -> None:
        if handle.done:
            return

        handle.state = record.state
        handle.record = record

        if not handle.completion.done():
            handle.completion.set_result(record)
