"""Shared exceptions module."""

from typing import Optional


class EtsyAccessException(Exception):
    """Base exception for etsy-access."""

    pass


class ValidationFailure(EtsyAccessException, ValueError):
    """Raised when a public operation receives malformed input.

    Never retried and never wrapped: it reaches the caller synchronously.
    """

    def __init__(self, message: Optional[str] = "Invalid argument"):
        """Create a new ValidationFailure instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class EtsyCallException(EtsyAccessException):
    """Exception raised while building or executing a signed call.

    Carries the request context so the failure can be traced back from logs.
    The original exception is available as ``__cause__``.
    """

    def __init__(
        self,
        url: str,
        mark: str,
        description: str,
        message: Optional[str] = "Signed call failed",
    ):
        """Create a new EtsyCallException instance.

        Args:
        ----
            url (str): The request URL being called.
            mark (str): Correlation marker of the operation.
            description (str): Human-readable description of the attempted operation.
            message (str, optional): The error message. Has default message.

        """
        self.url = url
        self.mark = mark
        self.description = description
        self.message = message
        super().__init__(f"{message} ({description}, url={url}, mark={mark})")
