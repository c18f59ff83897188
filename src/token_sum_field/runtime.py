"""Process-level setup of logging and tracing from :class:`Settings`."""

from __future__ import annotations

import logging

from token_sum_field.config import Settings
from token_sum_field.observability import configure_logging, init_tracing


logger = logging.getLogger(__name__)


def init_runtime(settings: Settings | None = None) -> Settings:
    """Apply logging and tracing configuration and return the settings used."""
    active = settings or Settings()
    configure_logging(
        level=active.log_level,
        json_output=active.log_json,
        logger_levels=active.logger_levels,
        trace_categories=active.trace_categories,
        trace_level=active.trace_level,
    )
    if active.tracing_enabled:
        init_tracing(service_name=active.service_name)
    logger.debug("Runtime initialized (tracing=%s)", active.tracing_enabled)
    return active
