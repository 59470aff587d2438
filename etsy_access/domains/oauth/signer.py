"""HMAC-SHA1 request signing.

Reference: RFC 5849 section 3.4 - Signature
"""

import base64
import hashlib
import hmac
from typing import Mapping, Optional

UNRESERVED_CHARACTERS = frozenset(
    b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_.~"
)


def percent_encode(value: str) -> str:
    """Percent-encode a value according to RFC 3986.

    Works on the UTF-8 bytes, so a multi-byte character becomes several
    ``%XX`` triplets. Only A-Z, a-z, 0-9, -, _, . and ~ are left as-is.
    """
    return "".join(
        chr(byte) if byte in UNRESERVED_CHARACTERS else f"%{byte:02X}"
        for byte in str(value).encode("utf-8")
    )


def normalize_parameters(parameters: Mapping[str, str]) -> str:
    """Join encoded parameters as ``key=value`` pairs, sorted by encoded key."""
    encoded = sorted(
        (percent_encode(key), percent_encode(value)) for key, value in parameters.items()
    )
    return "&".join(f"{key}={value}" for key, value in encoded)


def build_signature_base_string(method: str, base_url: str, parameters: Mapping[str, str]) -> str:
    """Build the signature base string.

    Format: HTTP_METHOD&URL&NORMALIZED_PARAMS, where the last two parts are
    percent-encoded once more.
    """
    parts = [
        method.upper(),
        percent_encode(base_url),
        percent_encode(normalize_parameters(parameters)),
    ]
    return "&".join(parts)


def build_signing_key(consumer_secret: str, token_secret: Optional[str] = None) -> str:
    """Return ``consumer_secret&token_secret``.

    The secrets are concatenated without percent-encoding, which is what the
    deployed Etsy signer expects. RFC 5849 encodes them first; the two only
    differ for secrets containing reserved characters.
    """
    return f"{consumer_secret}&{token_secret or ''}"


def sign_hmac_sha1(base_string: str, signing_key: str) -> str:
    """Sign the base string using HMAC-SHA1 and base64-encode the digest."""
    digest = hmac.new(
        signing_key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1
    ).digest()
    return base64.b64encode(digest).decode("utf-8")


def sign(
    base_url: str,
    http_method: str,
    consumer_secret: str,
    token_secret: Optional[str],
    parameters: Mapping[str, str],
) -> str:
    """Compute the ``oauth_signature`` value for a request.

    Args:
        base_url: Scheme, host and path of the request, without query
        http_method: HTTP method, any case
        consumer_secret: Application shared secret
        token_secret: Secret of the token the request is made with, if any
        parameters: Every parameter to sign, without ``oauth_signature``

    Returns:
        Base64 HMAC-SHA1 signature
    """
    base_string = build_signature_base_string(http_method, base_url, parameters)
    return sign_hmac_sha1(base_string, build_signing_key(consumer_secret, token_secret))
