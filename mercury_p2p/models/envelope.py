import cloudpickle
import msgspec
from typing import Any, Sequence


class Envelope(msgspec.Struct, frozen=True, kw_only=True):
    source: int
    destination: int
    tag: int
    count: int
    payload: bytes

    @classmethod
    def pack(
        cls,
        source: int,
        destination: int,
        tag: int,
        buffer: Sequence[Any],
    ):
        elements = list(buffer)

        return cls(
            source=source,
            destination=destination,
            tag=tag,
            count=len(elements),
            payload=cloudpickle.dumps(elements),
        )

    def unpack(self) -> list[Any]:
        return cloudpickle.loads(self.payload)
