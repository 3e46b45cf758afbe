from .models import Entry, LogLevel


class EndpointTrace(Entry, kw_only=True):
    rank: int
    operation: str
    request_id: int
    peer: int
    tag: int
    level: LogLevel = LogLevel.TRACE

class EndpointDebug(Entry, kw_only=True):
    rank: int
    operation: str
    request_id: int
    peer: int
    tag: int
    level: LogLevel = LogLevel.DEBUG

class EndpointError(Entry, kw_only=True):
    rank: int
    operation: str
    request_id: int
    peer: int
    tag: int
    level: LogLevel = LogLevel.ERROR

class FabricDebug(Entry, kw_only=True):
    source: int
    destination: int
    tag: int
    count: int
    level: LogLevel = LogLevel.DEBUG

class FabricError(Entry, kw_only=True):
    pending: int
    level: LogLevel = LogLevel.ERROR

class WorldInfo(Entry, kw_only=True):
    size: int
    level: LogLevel = LogLevel.INFO
