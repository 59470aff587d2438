"""OAuth 1.0a signing and credential exchange for the Etsy API."""

from etsy_access.domains.oauth.authentication_service import EtsyAuthenticationService
from etsy_access.domains.oauth.authenticator import OAuthenticator, build_url
from etsy_access.domains.oauth.retry import RetryPolicy, backoff_seconds
from etsy_access.domains.oauth.types import (
    ExchangeFailed,
    ExchangeOk,
    ExchangeResult,
    FailureReason,
    OAuthCredentials,
    SigningContext,
)

__all__ = [
    "EtsyAuthenticationService",
    "ExchangeFailed",
    "ExchangeOk",
    "ExchangeResult",
    "FailureReason",
    "OAuthCredentials",
    "OAuthenticator",
    "RetryPolicy",
    "SigningContext",
    "backoff_seconds",
    "build_url",
]
