"""OAuth 1.0a parameter normalization for signed Etsy requests.

Produces the full, signed parameter set of a request and serializes it into
a URL. Instances are immutable and safe to share between concurrent tasks:
every call generates its own nonce and timestamp.
"""

import time
import uuid
from typing import Mapping, Optional
from urllib.parse import unquote, urlsplit

from etsy_access.domains.oauth import signer
from etsy_access.domains.oauth.query import parse_query_params
from etsy_access.domains.oauth.types import RequestParameters, SigningContext

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"
NONCE_LENGTH = 11

_DEFAULT_PORTS = {"http": 80, "https": 443}


def base_url_of(url: str) -> str:
    """Return scheme, host and path of ``url``, dropping query and fragment."""
    parts = urlsplit(url)
    host = parts.hostname or ""
    if parts.port and parts.port != _DEFAULT_PORTS.get(parts.scheme):
        host = f"{host}:{parts.port}"
    return f"{parts.scheme}://{host}{parts.path}"


def build_url(url: str, parameters: Mapping[str, str]) -> str:
    """Append ``parameters`` to the base URL of ``url`` as a query string."""
    query = "&".join(
        f"{signer.percent_encode(key)}={signer.percent_encode(value)}"
        for key, value in parameters.items()
    )
    return f"{base_url_of(url)}?{query}"


class OAuthenticator:
    """Builds signed OAuth 1.0a parameter sets for one signing context."""

    def __init__(self, context: SigningContext) -> None:
        """Initialize with the consumer (and optionally token) credentials."""
        self._context = context

    @property
    def context(self) -> SigningContext:
        return self._context

    def _generate_nonce(self) -> str:
        """Random 11-character uppercase alphanumeric nonce."""
        return uuid.uuid4().hex[:NONCE_LENGTH].upper()

    def _get_timestamp(self) -> str:
        """Current Unix timestamp as string."""
        return str(int(time.time()))

    def build_signed_parameters(
        self,
        url: str,
        http_method: str,
        token_secret: Optional[str],
        extra_parameters: Optional[Mapping[str, str]] = None,
    ) -> RequestParameters:
        """Assemble and sign the OAuth parameters of a request.

        Args:
            url: Request URL; its own query parameters are signed too
            http_method: HTTP method of the request
            token_secret: Secret of the token used for signing, if any
            extra_parameters: Request parameters; they override OAuth defaults

        Returns:
            Ordered parameters including ``oauth_signature``. For non-GET
            requests the extra parameters are left out, since they travel in
            the body.
        """
        extra_parameters = extra_parameters or {}

        parameters: RequestParameters = {
            "oauth_consumer_key": self._context.consumer_key,
            "oauth_nonce": self._generate_nonce(),
            "oauth_signature_method": SIGNATURE_METHOD,
            "oauth_timestamp": self._get_timestamp(),
            "oauth_version": OAUTH_VERSION,
        }

        if self._context.token:
            parameters["oauth_token"] = self._context.token

        parameters.update(extra_parameters)

        # Parameters already set win over duplicates in the URL itself
        for key, value in parse_query_params(urlsplit(url).query).items():
            parameters.setdefault(unquote(key), unquote(value))

        parameters.pop("oauth_signature", None)

        parameters["oauth_signature"] = signer.sign(
            base_url_of(url),
            http_method,
            self._context.consumer_secret,
            token_secret,
            parameters,
        )

        if http_method.upper() != "GET":
            for key in extra_parameters:
                parameters.pop(key, None)

        return parameters

    def get_uri_with_oauth_query_parameters(
        self,
        url: str,
        http_method: str = "GET",
        extra_parameters: Optional[Mapping[str, str]] = None,
    ) -> str:
        """Return ``url`` signed with this context's own token secret.

        Used by resource calls made after the handshake, once the context
        holds permanent credentials.
        """
        parameters = self.build_signed_parameters(
            url, http_method, self._context.token_secret, extra_parameters
        )
        return build_url(url, parameters)
