from .trace_event import TraceEvent as TraceEvent, TracePhase as TracePhase
from .traced import traced as traced
from .tracer import Tracer as Tracer, TraceRecorder as TraceRecorder
