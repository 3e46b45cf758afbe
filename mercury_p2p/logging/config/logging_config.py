import contextvars
from typing import Literal

from mercury_p2p.logging.models import LogLevel, LogLevelName


LogOutput = Literal['stdout', 'stderr']

_log_level: contextvars.ContextVar[LogLevel] = contextvars.ContextVar(
    "mercury_p2p_log_level",
    default=LogLevel.INFO,
)
_log_output: contextvars.ContextVar[LogOutput] = contextvars.ContextVar(
    "mercury_p2p_log_output",
    default="stderr",
)
_log_directory: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "mercury_p2p_log_directory",
    default=None,
)


class LoggingConfig:
    """
    Level, console stream and log directory shared by every logger.
    Settings live in context variables, so an update() made inside a
    task applies to that task and the tasks it starts.
    """

    def update(
        self,
        log_directory: str | None = None,
        log_level: LogLevelName | None = None,
        log_output: LogOutput | None = None,
    ):
        if log_directory:
            _log_directory.set(log_directory)

        if log_level:
            _log_level.set(LogLevel.from_name(log_level))

        if log_output:
            _log_output.set(log_output)

    def enabled(self, level: LogLevel) -> bool:
        return level.severity >= _log_level.get().severity

    @property
    def level(self) -> LogLevel:
        return _log_level.get()

    @property
    def output(self) -> LogOutput:
        return _log_output.get()

    @property
    def directory(self) -> str | None:
        return _log_directory.get()
