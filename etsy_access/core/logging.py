"""Logging setup with contextual dimensions.

Usage:
    from etsy_access.core.logging import logger

    op_logger = logger.with_context(operation="request_token", mark=mark)
    op_logger.info("Started")   # -> "Started [operation=request_token mark=...]"
"""

import logging
import sys
from typing import Any, MutableMapping, Optional, Tuple

from etsy_access.core.config import Environment, settings

LOGGER_NAME = "etsy_access"


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that attaches a set of dimensions to every record.

    Dimensions are rendered at the end of the message and also passed
    through ``extra`` so structured handlers can pick them up.
    """

    def __init__(self, logger: logging.Logger, dimensions: Optional[dict] = None) -> None:
        """Create an adapter over ``logger`` with the given dimensions."""
        super().__init__(logger, {})
        self.dimensions: dict = dict(dimensions or {})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, Any]:
        """Append dimensions to the message and merge them into ``extra``."""
        if not self.dimensions:
            return msg, kwargs

        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("dimensions", self.dimensions)
        kwargs["extra"] = extra

        rendered = " ".join(f"{key}={value}" for key, value in self.dimensions.items())
        return f"{msg} [{rendered}]", kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger carrying these dimensions on top of the current ones."""
        return ContextualLogger(self.logger, {**self.dimensions, **dimensions})


def _configure_logger(name: str) -> logging.Logger:
    base = logging.getLogger(name)
    if not base.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        base.addHandler(handler)

    level = settings.LOG_LEVEL
    if settings.ENVIRONMENT == Environment.LOCAL and level == "INFO":
        level = "DEBUG"
    base.setLevel(level)
    return base


logger = ContextualLogger(_configure_logger(LOGGER_NAME))
