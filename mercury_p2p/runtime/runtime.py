from mercury_p2p.env import Env, load_env
from mercury_p2p.fabric import Fabric
from mercury_p2p.logging import Logger, LoggingConfig
from mercury_p2p.logging.p2p_logging_models import WorldInfo
from mercury_p2p.tracing import Tracer, TraceEvent, TracePhase, TraceRecorder

from .world import World


async def init(
    size: int | None = None,
    env: Env | None = None,
    tracer: Tracer | None = None,
) -> World:
    if env is None:
        env = load_env(Env)

    if tracer is None and env.MERCURY_P2P_TRACE_FILE:
        tracer = TraceRecorder()

    if size is None:
        size = env.MERCURY_P2P_WORLD_SIZE

    if size < 1:
        raise ValueError(f"Err. - world size must be at least 1, got {size}")

    if tracer:
        tracer.enter(
            TraceEvent(
                operation="init",
                phase=TracePhase.ENTER,
            )
        )

    logging_config = LoggingConfig()
    logging_config.update(
        log_directory=env.MERCURY_P2P_LOGS_DIRECTORY,
        log_level=env.MERCURY_P2P_LOG_LEVEL,
        log_output=env.MERCURY_P2P_LOG_OUTPUT,
    )

    logger = Logger()

    world = World(
        Fabric(
            size,
            env,
            logger=logger,
        ),
        env,
        tracer=tracer,
        logger=logger,
    )

    await logger.log(
        WorldInfo(
            message=f"Initialized world of {size} endpoints",
            size=size,
        ),
        name="mercury_p2p.world",
    )

    if tracer:
        tracer.exit(
            TraceEvent(
                operation="init",
                phase=TracePhase.EXIT,
            )
        )

    return world


async def finalize(world: World) -> None:
    await world.finalize()
