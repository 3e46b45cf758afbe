"""
The non-blocking send/receive scenario a tracer is validated against:
init, one initiate_send, one initiate_receive, two waits, finalize.
"""

import asyncio
from typing import Any

import msgspec
import orjson

from mercury_p2p.env import Env
from mercury_p2p.models import CompletionRecord
from mercury_p2p.runtime import finalize, init
from mercury_p2p.tracing import Tracer


class ScenarioResult(msgspec.Struct, kw_only=True):
    send: CompletionRecord
    receive: CompletionRecord
    received: list[Any]


async def run_isend_irecv(
    value: Any,
    tag: int = 1234,
    env: Env | None = None,
    tracer: Tracer | None = None,
) -> ScenarioResult:
    """
    Single rank sending to itself: the send is posted before the
    receive and both are waited on in initiation order.
    """
    world = await init(size=1, env=env, tracer=tracer)
    endpoint = world.endpoint(0)

    buffer = [value]
    received = [None]

    send_handle = endpoint.initiate_send(0, tag, buffer)
    receive_handle = endpoint.initiate_receive(0, tag, received)

    send_record = await endpoint.wait(send_handle)
    receive_record = await endpoint.wait(receive_handle)

    await finalize(world)

    return ScenarioResult(
        send=send_record,
        receive=receive_record,
        received=received,
    )


async def run_exchange(
    value: Any,
    tag: int = 1234,
    env: Env | None = None,
    tracer: Tracer | None = None,
) -> ScenarioResult:
    """
    Two ranks, one task each: rank 0 sends to rank 1.
    """
    world = await init(size=2, env=env, tracer=tracer)
    sender = world.endpoint(0)
    receiver = world.endpoint(1)

    received = [None]

    async def send():
        handle = sender.initiate_send(receiver.rank, tag, [value])
        return await sender.wait(handle)

    async def receive():
        handle = receiver.initiate_receive(sender.rank, tag, received)
        return await receiver.wait(handle)

    send_record, receive_record = await asyncio.gather(
        send(),
        receive(),
    )

    await finalize(world)

    return ScenarioResult(
        send=send_record,
        receive=receive_record,
        received=received,
    )


def main():
    result = asyncio.run(run_isend_irecv(42))
    print(orjson.dumps(msgspec.to_builtins(result), option=orjson.OPT_INDENT_2).decode())


if __name__ == "__main__":
    main()
