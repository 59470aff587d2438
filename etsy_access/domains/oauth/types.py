"""Value types for the OAuth domain.

These live in a separate module to avoid circular imports between
service implementations and protocol definitions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from etsy_access.core.exceptions import ValidationFailure

# Ordered name -> value mapping, built fresh for every signed request.
RequestParameters = Dict[str, str]


@dataclass(frozen=True, slots=True)
class OAuthCredentials:
    """Token pair returned by a handshake step.

    ``login_url`` is only set for temporary credentials, where it points the
    user at the authorization page.
    """

    token: str
    token_secret: str
    login_url: Optional[str] = None

    def __post_init__(self) -> None:
        """Reject empty token material."""
        if not self.token:
            raise ValidationFailure("OAuth token must not be empty")
        if not self.token_secret:
            raise ValidationFailure("OAuth token secret must not be empty")


@dataclass(frozen=True, slots=True)
class SigningContext:
    """Consumer (and optionally token) credentials used to sign requests.

    Immutable, so one context can be shared by concurrent signing operations.
    """

    consumer_key: str
    consumer_secret: str
    token: Optional[str] = None
    token_secret: Optional[str] = None

    def __post_init__(self) -> None:
        """Reject missing consumer credentials."""
        if not self.consumer_key:
            raise ValidationFailure("Consumer key must not be empty")
        if not self.consumer_secret:
            raise ValidationFailure("Consumer secret must not be empty")


class FailureReason(str, Enum):
    """Why an exchange attempt produced no credentials."""

    REQUEST_ERROR = "request_error"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True, slots=True)
class ExchangeOk:
    """Successful exchange."""

    credentials: OAuthCredentials
    attempts_made: int = 1

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class ExchangeFailed:
    """Exchange that produced no credentials, after ``attempts_made`` attempts."""

    reason: FailureReason
    last_error: Optional[BaseException] = None
    attempts_made: int = 1

    @property
    def ok(self) -> bool:
        return False

    @property
    def credentials(self) -> None:
        return None


ExchangeResult = Union[ExchangeOk, ExchangeFailed]
