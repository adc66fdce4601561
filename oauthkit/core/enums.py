from enum import Enum


class OAuthProviders(str, Enum):
    """Built-in OAuth 1.0a providers."""

    DROPBOX = "dropbox"
    TWITTER = "twitter"
    LINKEDIN = "linkedin"
    GOOGLE = "google"
    TUMBLR = "tumblr"


class SignatureMethods(str, Enum):
    """Signature method names as they appear in ``oauth_signature_method``."""

    HMAC_SHA1 = "HMAC-SHA1"
    HMAC_SHA256 = "HMAC-SHA256"
    RSA_SHA1 = "RSA-SHA1"
    PLAINTEXT = "PLAINTEXT"


class RequestKind(str, Enum):
    """Kind of outbound request, one per handshake step."""

    TOKEN = "token"  # Step 1: request token
    AUTHORIZE = "authorize"  # Step 2: browser redirect, never sent
    ACCESS = "access"  # Step 3: access token
    RESOURCE = "resource"  # Signed API call with an access token

    @property
    def step(self) -> str:
        """Handshake step name used in logs and error context."""
        return _REQUEST_STEPS[self]


_REQUEST_STEPS = {
    RequestKind.TOKEN: "request_token",
    RequestKind.AUTHORIZE: "authorize",
    RequestKind.ACCESS: "access_token",
    RequestKind.RESOURCE: "user_info",
}
