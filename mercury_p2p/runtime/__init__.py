from .runtime import init as init, finalize as finalize
from .world import World as World
