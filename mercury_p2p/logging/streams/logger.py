from __future__ import annotations

import asyncio
from collections import deque
from typing import Deque, Dict

from mercury_p2p.logging.models import Entry, Log

from .logger_stream import LoggerStream


class Logger:
    """
    Named log streams shared by one world. log() is awaited by
    coroutines. schedule() is for calls that must not suspend: the
    write runs as a task and any error it raised surfaces from close().
    Entries logged after close() are dropped.
    """

    def __init__(self) -> None:
        self._streams: Dict[str, LoggerStream] = {}
        self._pending: Deque[asyncio.Task] = deque()
        self._closed = False

    def __getitem__(self, name: str) -> LoggerStream:
        if self._streams.get(name) is None:
            self._streams[name] = LoggerStream(name)

        return self._streams[name]

    @property
    def closed(self) -> bool:
        return self._closed

    async def log(
        self,
        entry: Entry,
        name: str = "default",
        template: str | None = None,
        path: str | None = None,
    ):
        if self._closed:
            return

        await self[name].log(
            Log.from_caller(entry),
            template=template,
            path=path,
        )

    def schedule(
        self,
        entry: Entry,
        name: str = "default",
        template: str | None = None,
        path: str | None = None,
    ):
        if self._closed:
            return

        self._pending.append(
            asyncio.ensure_future(
                self[name].log(
                    Log.from_caller(entry),
                    template=template,
                    path=path,
                )
            )
        )

        # finished writes with nothing to report
        while self._pending and self._pending[0].done() and not (
            self._pending[0].cancelled() or self._pending[0].exception()
        ):
            self._pending.popleft()

    async def close(self):
        if self._closed:
            return

        self._closed = True

        pending = list(self._pending)
        self._pending.clear()

        results = await asyncio.gather(*pending, return_exceptions=True)

        await asyncio.gather(*[
            stream.close() for stream in self._streams.values()
        ])

        for result in results:
            if isinstance(result, Exception):
                raise result
