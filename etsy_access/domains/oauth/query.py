"""Tolerant query-string splitting used for handshake responses."""

from etsy_access.domains.oauth.types import RequestParameters


def parse_query_params(query: str) -> RequestParameters:
    """Split ``key=value&key=value`` text into a dict.

    Pairs without exactly one ``=`` are ignored and the first occurrence of a
    key wins. Values are returned as-is, without URL-decoding.
    """
    result: RequestParameters = {}
    if not query:
        return result

    for pair in query.split("&"):
        key_value = pair.split("=")
        if len(key_value) != 2:
            continue
        key, value = key_value
        result.setdefault(key, value)

    return result
