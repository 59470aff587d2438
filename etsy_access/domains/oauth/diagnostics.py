"""Correlation markers and exception capture for signed calls."""

import json
import uuid
from typing import Any, Optional

from etsy_access.core.exceptions import EtsyCallException
from etsy_access.core.logging import ContextualLogger, logger as default_logger


def new_mark() -> str:
    """Create a correlation marker shared by all log lines of one operation."""
    return uuid.uuid4().hex


def method_call_info(
    url: str,
    mark: str,
    description: str,
    method_result: Optional[Any] = None,
    **additional_info: Any,
) -> str:
    """Render a one-line JSON description of a call for logs."""
    info: dict = {"description": description, "url": url, "mark": mark}
    if method_result is not None:
        info["result"] = method_result
    if additional_info:
        info["additional_info"] = additional_info
    return json.dumps(info, default=str)


class ErrorWrapper:
    """Wraps exceptions raised by a signed call with the call's context."""

    def __init__(self, logger: Optional[ContextualLogger] = None) -> None:
        """Initialize with the logger captured exceptions are reported to."""
        self._logger = logger or default_logger

    def capture(
        self,
        exception: BaseException,
        *,
        url: str,
        mark: str,
        description: str,
        logger: Optional[ContextualLogger] = None,
    ) -> EtsyCallException:
        """Wrap and log ``exception``.

        Returns:
            The wrapped exception, chained to the original one. The caller
            decides whether to raise it or report it as a failed attempt.
        """
        wrapped = EtsyCallException(
            url, mark, description, message=str(exception) or type(exception).__name__
        )
        wrapped.__cause__ = exception

        (logger or self._logger).error(
            f"{type(exception).__name__} during {description}: "
            f"{method_call_info(url, mark, description)}",
            exc_info=exception,
        )
        return wrapped
