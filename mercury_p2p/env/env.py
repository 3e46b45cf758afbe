from __future__ import annotations
from pydantic import BaseModel, StrictStr, StrictInt, field_validator
from typing import Callable, Dict, Literal, Union

from .time_parser import TimeParser

PrimaryType = Union[str, int, float, bytes, bool]


class Env(BaseModel):
    MERCURY_P2P_WORLD_SIZE: StrictInt = 2
    MERCURY_P2P_WAIT_TIMEOUT: StrictStr | None = None
    MERCURY_P2P_DELIVERY_LATENCY: StrictStr = "0s"
    MERCURY_P2P_LOG_LEVEL: StrictStr = "info"
    MERCURY_P2P_LOG_OUTPUT: Literal["stdout", "stderr"] = "stderr"
    MERCURY_P2P_LOGS_DIRECTORY: StrictStr | None = None
    MERCURY_P2P_TRACE_FILE: StrictStr | None = None

    @field_validator(
        "MERCURY_P2P_WAIT_TIMEOUT",
        "MERCURY_P2P_DELIVERY_LATENCY",
    )
    @classmethod
    def validate_duration(cls, value: str | None) -> str | None:
        if value is not None:
            TimeParser(value)

        return value

    @classmethod
    def types_map(cls) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "MERCURY_P2P_WORLD_SIZE": int,
            "MERCURY_P2P_WAIT_TIMEOUT": str,
            "MERCURY_P2P_DELIVERY_LATENCY": str,
            "MERCURY_P2P_LOG_LEVEL": str,
            "MERCURY_P2P_LOG_OUTPUT": str,
            "MERCURY_P2P_LOGS_DIRECTORY": str,
            "MERCURY_P2P_TRACE_FILE": str,
        }

    @property
    def wait_timeout(self) -> float | None:
        if self.MERCURY_P2P_WAIT_TIMEOUT is None:
            return None

        return TimeParser(self.MERCURY_P2P_WAIT_TIMEOUT).time

    @property
    def delivery_latency(self) -> float:
        return TimeParser(self.MERCURY_P2P_DELIVERY_LATENCY).time
