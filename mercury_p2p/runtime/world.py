import asyncio

from mercury_p2p.endpoint import Endpoint
from mercury_p2p.env import Env
from mercury_p2p.errors import InvalidPeer
from mercury_p2p.fabric import Fabric
from mercury_p2p.logging import Logger
from mercury_p2p.logging.p2p_logging_models import WorldInfo
from mercury_p2p.tracing import Tracer, TraceEvent, TracePhase, TraceRecorder


class World:
    """
    The set of endpoints sharing one fabric, created by init() and torn
    down by finalize(). Passed explicitly wherever a communicator is
    needed.
    """

    def __init__(
        self,
        fabric: Fabric,
        env: Env,
        tracer: Tracer | None = None,
        logger: Logger | None = None,
    ) -> None:
        self.env = env
        self.tracer = tracer

        self._fabric = fabric
        self._logger = logger or Logger()
        self._endpoints = [
            Endpoint(
                rank,
                fabric,
                tracer=tracer,
                logger=self._logger,
            ) for rank in range(fabric.size)
        ]

        self._finalized = False

    @property
    def size(self) -> int:
        return self._fabric.size

    @property
    def endpoints(self) -> list[Endpoint]:
        return list(self._endpoints)

    @property
    def fabric(self) -> Fabric:
        return self._fabric

    @property
    def finalized(self) -> bool:
        return self._finalized

    def endpoint(self, rank: int) -> Endpoint:
        if type(rank) is not int or rank < 0 or rank >= self.size:
            raise InvalidPeer(rank, self.size)

        return self._endpoints[rank]

    async def finalize(self) -> None:
        if self._finalized:
            return

        self._finalized = True

        if self.tracer:
            self.tracer.enter(
                TraceEvent(
                    operation="finalize",
                    phase=TracePhase.ENTER,
                )
            )

        error: BaseException | None = None

        try:
            pending = self._fabric.pending_count
            self._fabric.close("world finalized")

            await self._logger.log(
                WorldInfo(
                    message=f"Finalized world with {pending} pending operations",
                    size=self.size,
                ),
                name="mercury_p2p.world",
            )

            await self._logger.close()

        except BaseException as err:
            error = err
            raise

        finally:
            if self.tracer:
                self.tracer.exit(
                    TraceEvent(
                        operation="finalize",
                        phase=TracePhase.EXIT,
                        error=type(error).__name__ if error else None,
                    )
                )

        trace_file = self.env.MERCURY_P2P_TRACE_FILE
        if trace_file and isinstance(self.tracer, TraceRecorder):
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(
                None,
                self.tracer.write,
                trace_file,
            )
