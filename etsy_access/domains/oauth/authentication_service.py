"""OAuth 1.0a credential exchange against the Etsy API.

This service handles the handshake:
1. Obtain temporary credentials and the login URL (request token)
2. The user authorizes the application and receives a verifier code
3. Exchange temporary credentials and verifier for permanent credentials

Every exchange call is retried with exponential backoff. Transient problems
(HTTP errors, unreadable responses) never raise: the caller receives an
``ExchangeFailed`` once retries are exhausted.

Reference: RFC 5849 - The OAuth 1.0 Protocol
"""

import asyncio
from typing import Callable, Dict, Optional, Sequence
from urllib.parse import unquote

import httpx

from etsy_access.core.config import Settings
from etsy_access.core.config import settings as default_settings
from etsy_access.core.exceptions import ValidationFailure
from etsy_access.core.logging import ContextualLogger, logger as default_logger
from etsy_access.domains.oauth.authenticator import OAuthenticator, build_url
from etsy_access.domains.oauth.diagnostics import ErrorWrapper, method_call_info, new_mark
from etsy_access.domains.oauth.endpoints import (
    ACCESS_TOKEN_PATH,
    OUT_OF_BAND_CALLBACK,
    REQUEST_TOKEN_PATH,
)
from etsy_access.domains.oauth.protocols import CredentialExchangerProtocol
from etsy_access.domains.oauth.query import parse_query_params
from etsy_access.domains.oauth.retry import RetryPolicy, Sleep
from etsy_access.domains.oauth.types import (
    ExchangeFailed,
    ExchangeOk,
    ExchangeResult,
    FailureReason,
    OAuthCredentials,
    SigningContext,
)

LOGIN_URL_PREFIX = "login_url="


def parse_temporary_credentials(body: str) -> Optional[OAuthCredentials]:
    """Extract the login URL and token pair from a request-token response.

    The body looks like ``login_url=<url-encoded authorization URL>`` where
    the authorization URL carries ``oauth_token`` and ``oauth_token_secret``
    in its own query string.
    """
    if not body or "login_url" not in body:
        return None

    login_url = unquote(body.replace(LOGIN_URL_PREFIX, ""))
    url_parts = login_url.split("?")
    if len(url_parts) != 2:
        return None

    query_params = parse_query_params(url_parts[1])
    token = query_params.get("oauth_token")
    token_secret = query_params.get("oauth_token_secret")
    if not token or not token_secret:
        return None

    return OAuthCredentials(token=token, token_secret=token_secret, login_url=login_url)


def parse_permanent_credentials(body: str) -> Optional[OAuthCredentials]:
    """Extract the token pair from an access-token response (a bare query string)."""
    query_params = parse_query_params(body)
    token = query_params.get("oauth_token")
    token_secret = query_params.get("oauth_token_secret")
    if not token or not token_secret:
        return None

    return OAuthCredentials(token=token, token_secret=token_secret)


class EtsyAuthenticationService(CredentialExchangerProtocol):
    """Obtains temporary and permanent OAuth 1.0a credentials.

    Only the consumer key and secret are needed. The instance holds no
    mutable state, so concurrent exchanges may share it.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Optional[Sleep] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the service.

        Args:
            config: Settings with consumer credentials; defaults to the global settings
            http_client: Client used for requests; a short-lived one is created
                per request when omitted
            sleep: Coroutine used for backoff waits (asyncio.sleep by default)
            logger: Base logger for this service

        Raises:
            ValidationFailure: If the consumer key or secret is empty
        """
        self._config = config or default_settings
        self._http_client = http_client
        self._logger = logger or default_logger.with_context(service="etsy_authentication")
        self._authenticator = OAuthenticator(
            SigningContext(
                consumer_key=self._config.CONSUMER_KEY,
                consumer_secret=self._config.CONSUMER_SECRET,
            )
        )
        self._retry_policy = RetryPolicy(
            self._config.RETRY_ATTEMPTS, sleep=sleep or asyncio.sleep, logger=self._logger
        )
        self._error_wrapper = ErrorWrapper(self._logger)

    async def get_temporary_credentials(self, scopes: Sequence[str]) -> ExchangeResult:
        """Return temporary credentials and the login URL for the user.

        Args:
            scopes: Permissions to request (e.g. ``["listings_r", "transactions_r"]``)

        Returns:
            ``ExchangeOk`` with ``login_url``, token and token secret, or
            ``ExchangeFailed`` once retries are exhausted

        Raises:
            ValidationFailure: If ``scopes`` is empty
        """
        if not scopes:
            raise ValidationFailure("At least one scope is required")

        mark = new_mark()
        description = "get temporary credentials"
        logger = self._logger.with_context(mark=mark)
        request_parameters = {
            "scopes": " ".join(scopes),
            "oauth_callback": OUT_OF_BAND_CALLBACK,
        }

        async def _attempt() -> ExchangeResult:
            return await self._exchange(
                path=REQUEST_TOKEN_PATH,
                token_secret=None,
                request_parameters=request_parameters,
                parse=parse_temporary_credentials,
                mark=mark,
                description=description,
                logger=logger,
            )

        return await self._retry_policy.run(_attempt, description=description, logger=logger)

    async def get_permanent_credentials(
        self,
        temporary_token: str,
        temporary_token_secret: str,
        verifier_code: str,
    ) -> ExchangeResult:
        """Return the access token pair for making authorized API calls.

        Args:
            temporary_token: Token from ``get_temporary_credentials``
            temporary_token_secret: Token secret from ``get_temporary_credentials``
            verifier_code: Code shown to the user after authorizing the app

        Returns:
            ``ExchangeOk`` with token and token secret, or ``ExchangeFailed``
            once retries are exhausted

        Raises:
            ValidationFailure: If any argument is empty
        """
        if not temporary_token:
            raise ValidationFailure("Temporary token must not be empty")
        if not temporary_token_secret:
            raise ValidationFailure("Temporary token secret must not be empty")
        if not verifier_code:
            raise ValidationFailure("Verifier code must not be empty")

        mark = new_mark()
        description = "get permanent credentials"
        logger = self._logger.with_context(mark=mark)
        request_parameters = {
            "oauth_token": temporary_token,
            "oauth_verifier": verifier_code,
        }

        async def _attempt() -> ExchangeResult:
            return await self._exchange(
                path=ACCESS_TOKEN_PATH,
                token_secret=temporary_token_secret,
                request_parameters=request_parameters,
                parse=parse_permanent_credentials,
                mark=mark,
                description=description,
                logger=logger,
            )

        return await self._retry_policy.run(_attempt, description=description, logger=logger)

    async def _exchange(
        self,
        *,
        path: str,
        token_secret: Optional[str],
        request_parameters: Dict[str, str],
        parse: Callable[[str], Optional[OAuthCredentials]],
        mark: str,
        description: str,
        logger: ContextualLogger,
    ) -> ExchangeResult:
        """Run one signed GET against ``path`` and parse the credentials.

        A fresh nonce and timestamp are generated on every call.
        """
        url = self._config.API_BASE_URL + path

        try:
            oauth_parameters = self._authenticator.build_signed_parameters(
                url, "GET", token_secret, request_parameters
            )
            url = build_url(url, oauth_parameters)

            logger.debug(f"Started: {method_call_info(url, mark, description)}")
            body = await self._get(url)
            logger.debug(
                f"Finished: {method_call_info(url, mark, description, method_result=body)}"
            )
        except Exception as e:
            error = self._error_wrapper.capture(
                e, url=url, mark=mark, description=description, logger=logger
            )
            return ExchangeFailed(reason=FailureReason.REQUEST_ERROR, last_error=error)

        credentials = parse(body)
        if credentials is None:
            logger.warning(f"Unexpected response to {description}: {body!r}")
            return ExchangeFailed(reason=FailureReason.MALFORMED_RESPONSE)

        logger.info(f"Successfully completed {description}")
        return ExchangeOk(credentials=credentials)

    async def _get(self, url: str) -> str:
        """Issue a GET and return the body text; raises on non-2xx status."""
        if self._http_client is not None:
            response = await self._http_client.get(url)
        else:
            async with httpx.AsyncClient() as client:
                response = await client.get(url)
        response.raise_for_status()
        return response.text
