from enum import Enum


class WaitTimeout(Enum):
    """
    Passed as a wait timeout to use the world's configured
    MERCURY_P2P_WAIT_TIMEOUT. An explicit None blocks until completion.
    """
    DEFAULT = "DEFAULT"
