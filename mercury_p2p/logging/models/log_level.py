from __future__ import annotations
from enum import Enum
from typing import Literal

LogLevelName = Literal[
    'trace',
    'debug',
    'info',
    'warn',
    'error',
    'critical',
    'fatal'
]


class LogLevel(Enum):
    """
    Entry severities, declared from least to most severe.
    """
    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
    FATAL = "FATAL"

    @property
    def severity(self) -> int:
        return list(LogLevel).index(self)

    @classmethod
    def from_name(cls, level_name: LogLevelName | str) -> LogLevel:
        return cls.__members__.get(level_name.upper(), LogLevel.INFO)
