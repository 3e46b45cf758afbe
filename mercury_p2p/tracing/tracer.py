import pathlib

import msgspec
import orjson

from .trace_event import TraceEvent, TracePhase


class Tracer:
    """
    Observer of operation boundaries. Subclasses receive one enter
    event and one exit event per traced call and must not mutate the
    call's arguments.
    """

    def enter(self, event: TraceEvent) -> None:
        pass

    def exit(self, event: TraceEvent) -> None:
        pass


class TraceRecorder(Tracer):

    def __init__(self) -> None:
        self._events: list[TraceEvent] = []

    @property
    def events(self) -> list[TraceEvent]:
        return list(self._events)

    def enter(self, event: TraceEvent) -> None:
        self._events.append(event)

    def exit(self, event: TraceEvent) -> None:
        self._events.append(event)

    def operations(
        self,
        phase: TracePhase | None = TracePhase.ENTER,
        rank: int | None = None,
    ) -> list[str]:
        return [
            event.operation
            for event in self._events
            if (
                phase is None or event.phase == phase
            ) and (
                rank is None or event.rank == rank
            )
        ]

    def clear(self) -> None:
        self._events.clear()

    def dump(self) -> bytes:
        return orjson.dumps([
            msgspec.structs.asdict(event) for event in self._events
        ])

    def write(self, path: str) -> None:
        trace_path = pathlib.Path(path).absolute()
        trace_path.parent.mkdir(parents=True, exist_ok=True)
        trace_path.write_bytes(self.dump())
