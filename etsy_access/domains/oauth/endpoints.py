"""Etsy OAuth 1.0a endpoint paths, relative to ``Settings.API_BASE_URL``."""

REQUEST_TOKEN_PATH = "/v2/oauth/request_token"
ACCESS_TOKEN_PATH = "/v2/oauth/access_token"

# Out-of-band callback: the user copies the verifier code by hand.
OUT_OF_BAND_CALLBACK = "oob"
