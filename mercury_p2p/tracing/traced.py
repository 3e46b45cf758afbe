import functools
import inspect
from typing import Any, Callable, TypeVar

from mercury_p2p.models import CompletionRecord, RequestHandle

from .trace_event import TraceEvent, TracePhase


T = TypeVar("T")


def _describe(
    operation: str,
    phase: TracePhase,
    rank: int | None,
    arguments: dict[str, Any],
    result: Any = None,
    error: BaseException | None = None,
) -> TraceEvent:
    request_id: int | None = None
    peer: int | None = arguments.get("peer")
    tag: int | None = arguments.get("tag")

    if isinstance(handle := arguments.get("handle"), RequestHandle):
        request_id = handle.request_id
        peer = handle.peer
        tag = handle.tag

    if isinstance(result, tuple) and len(result) == 2:
        _, result = result

    if isinstance(result, RequestHandle):
        request_id = result.request_id

    elif isinstance(result, CompletionRecord):
        request_id = result.request_id
        peer = result.source
        tag = result.tag

    return TraceEvent(
        operation=operation,
        phase=phase,
        rank=rank,
        request_id=request_id,
        peer=peer,
        tag=tag,
        error=type(error).__name__ if error else None,
    )


def traced(operation: str):
    """
    Report entry to and exit from an endpoint method to the owning
    endpoint's tracer. Arguments and the return value pass through
    untouched. Exceptions are reported on the exit event and re-raised.
    """

    def wraps(func: Callable[..., T]) -> Callable[..., T]:
        signature = inspect.signature(func)

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(owner, *args, **kwargs):
                tracer = owner.tracer
                if tracer is None:
                    return await func(owner, *args, **kwargs)

                arguments = signature.bind(owner, *args, **kwargs).arguments
                tracer.enter(
                    _describe(operation, TracePhase.ENTER, owner.rank, arguments)
                )

                try:
                    result = await func(owner, *args, **kwargs)

                except BaseException as err:
                    tracer.exit(
                        _describe(operation, TracePhase.EXIT, owner.rank, arguments, error=err)
                    )
                    raise

                tracer.exit(
                    _describe(operation, TracePhase.EXIT, owner.rank, arguments, result=result)
                )

                return result

            async_wrapper.is_traced = True
            async_wrapper.operation = operation

            return async_wrapper

        @functools.wraps(func)
        def wrapper(owner, *args, **kwargs):
            tracer = owner.tracer
            if tracer is None:
                return func(owner, *args, **kwargs)

            arguments = signature.bind(owner, *args, **kwargs).arguments
            tracer.enter(
                _describe(operation, TracePhase.ENTER, owner.rank, arguments)
            )

            try:
                result = func(owner, *args, **kwargs)

            except BaseException as err:
                tracer.exit(
                    _describe(operation, TracePhase.EXIT, owner.rank, arguments, error=err)
                )
                raise

            tracer.exit(
                _describe(operation, TracePhase.EXIT, owner.rank, arguments, result=result)
            )

            return result

        wrapper.is_traced = True
        wrapper.operation = operation

        return wrapper

    return wraps
