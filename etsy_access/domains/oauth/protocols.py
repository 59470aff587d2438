"""Protocols for OAuth domain dependencies."""

from typing import Protocol, Sequence

from etsy_access.domains.oauth.types import ExchangeResult


class CredentialExchangerProtocol(Protocol):
    """OAuth 1.0a handshake capability."""

    async def get_temporary_credentials(self, scopes: Sequence[str]) -> ExchangeResult:
        """Obtain temporary credentials and the user login URL."""
        ...

    async def get_permanent_credentials(
        self,
        temporary_token: str,
        temporary_token_secret: str,
        verifier_code: str,
    ) -> ExchangeResult:
        """Exchange temporary credentials and a verifier for an access token."""
        ...
