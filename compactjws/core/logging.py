"""structlog access for compact-jws.

Library modules log through ``get_logger(__name__)`` and never configure
logging themselves. Routine events are emitted at debug level:
``signer_verifier_created``, ``token_generated``, ``signature_checked``,
``claims_checked`` and ``claim_rejected`` (with the failing claim name).
Building an unsigned ``none`` signer/verifier logs
``insecure_signer_verifier_created`` at warning level, which is the only event
visible at the default level. Events carry the algorithm and outcome flags;
keys, signatures and claim values are never logged.
"""

import logging
from typing import cast

import structlog

# Only the insecure-constructor warning passes at this level.
DEFAULT_LOG_LEVEL = "WARNING"


def setup_logging(level: str = DEFAULT_LOG_LEVEL, json_output: bool = False) -> None:
    """Configure structlog for applications that want the library's events.

    Output is ``key=value`` lines by default, or one JSON object per event
    with ``json_output``. Unknown level names fall back to ``WARNING``.
    """
    log_level = _coerce_log_level(level)
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.processors.KeyValueRenderer(key_order=["event", "level"])
    )

    structlog.reset_defaults()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        context_class=dict,
        # Module-level loggers are created at import; caching would pin the first config.
        cache_logger_on_first_use=False,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )

    logging.basicConfig(level=log_level, format="%(message)s")


def _coerce_log_level(level: str) -> int:
    numeric = logging.getLevelName(level.upper())
    if isinstance(numeric, int):
        return numeric
    return logging.getLevelName(DEFAULT_LOG_LEVEL)


def get_logger(name: str | None = None) -> structlog.types.FilteringBoundLogger:
    return cast(structlog.types.FilteringBoundLogger, structlog.get_logger(name))
