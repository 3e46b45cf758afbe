from .isend_irecv import (
    ScenarioResult as ScenarioResult,
    run_exchange as run_exchange,
    run_isend_irecv as run_isend_irecv,
)
