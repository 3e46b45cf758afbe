import datetime
import sys
import threading

import msgspec

from .entry import Entry


def _utc_now() -> str:
    return datetime.datetime.now(datetime.UTC).isoformat()


class Log(msgspec.Struct, kw_only=True):
    """
    An entry together with the call site that produced it. This is
    the record written, one JSON object per line, to log files.
    """

    entry: Entry
    filename: str
    function_name: str
    line_number: int
    thread_id: int = msgspec.field(default_factory=threading.get_native_id)
    timestamp: str = msgspec.field(default_factory=_utc_now)

    @classmethod
    def from_caller(cls, entry: Entry, depth: int = 2):
        frame = sys._getframe(depth)

        return cls(
            entry=entry,
            filename=frame.f_code.co_filename,
            function_name=frame.f_code.co_name,
            line_number=frame.f_lineno,
        )

    def to_line(self, template: str) -> str:
        return self.entry.to_template(
            template,
            context={
                "filename": self.filename,
                "function_name": self.function_name,
                "line_number": self.line_number,
                "thread_id": self.thread_id,
                "timestamp": self.timestamp,
            },
        )
