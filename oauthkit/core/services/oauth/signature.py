"""
OAuth 1.0a signature strategies.

A strategy turns an unsigned :class:`OAuthRequest` into a signed one using
the consumer secret and, from the access-token step on, the token secret.
Computation is delegated to ``oauthlib.oauth1.Client``; the strategies only
map request parameters onto it and write the result back to the request.

Example usage:
    from oauthkit.core.services.oauth.signature import resolve_signature

    signature = resolve_signature("HMAC-SHA1")
    request.sign(signature, consumer)            # request token step
    request.sign(signature, consumer, token)     # every later step
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Union
from urllib.parse import urlencode

from oauthlib import oauth1

from oauthkit.core.config import settings
from oauthkit.core.enums import SignatureMethods
from oauthkit.core.exceptions.types import ConfigurationException

if TYPE_CHECKING:
    from oauthkit.core.services.oauth.base import AccessToken, Consumer, RequestToken
    from oauthkit.core.services.oauth.request import OAuthRequest


__all__ = [
    "SignatureMethod",
    "OAuthlibSignature",
    "HmacSha1Signature",
    "HmacSha256Signature",
    "PlaintextSignature",
    "RsaSha1Signature",
    "resolve_signature",
]

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Request parameters that oauthlib expects as client arguments rather than
# as plain query or body parameters.
PROTOCOL_PARAMS = ("oauth_consumer_key", "oauth_callback", "oauth_token", "oauth_verifier")


class SignatureMethod(ABC):
    """
    Abstract signing strategy.

    Subclasses must set ``name`` to the value sent as
    ``oauth_signature_method`` and implement :meth:`sign`.
    """

    name: str

    @abstractmethod
    def sign(
        self,
        request: "OAuthRequest",
        consumer: "Consumer",
        token: Union["RequestToken", "AccessToken", None] = None,
    ) -> "OAuthRequest":
        """
        Sign ``request`` in place and return it.

        Args:
            request: The outbound request carrying OAuth parameters.
            consumer: The consumer whose secret signs the request.
            token: The request or access token. Omitted for the request
                   token step, where no token exists yet.

        Returns:
            OAuthRequest: The same request, now carrying signed URL,
                          headers and body.
        """

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class OAuthlibSignature(SignatureMethod):
    """
    Base for strategies backed by ``oauthlib.oauth1.Client``.

    The signature travels in the ``Authorization`` header. Non-protocol
    parameters go to the query string for GET requests and to a
    form-encoded body otherwise.

    Args:
        nonce: Fixed ``oauth_nonce``, for reproducible signatures.
        timestamp: Fixed ``oauth_timestamp``, for reproducible signatures.
    """

    _oauthlib_method: str

    def __init__(self, nonce: str | None = None, timestamp: str | None = None):
        self._nonce = nonce
        self._timestamp = timestamp

    def _client_options(self) -> dict:
        return {}

    def sign(self, request, consumer, token=None):
        params = dict(request.params)
        protocol = {name: params.pop(name, None) for name in PROTOCOL_PARAMS}

        client = oauth1.Client(
            consumer.key,
            client_secret=consumer.secret,
            resource_owner_key=token.access_token if token else protocol["oauth_token"],
            resource_owner_secret=token.secret if token else None,
            callback_uri=protocol["oauth_callback"],
            verifier=protocol["oauth_verifier"],
            signature_method=self._oauthlib_method,
            signature_type=oauth1.SIGNATURE_TYPE_AUTH_HEADER,
            nonce=self._nonce,
            timestamp=self._timestamp,
            **self._client_options(),
        )

        if request.method in ("GET", "HEAD"):
            uri = request.url_with_query(params)
            body = None
            headers: dict[str, str] = {}
        else:
            uri = request.url
            body = urlencode(params)
            headers = {"Content-Type": FORM_CONTENT_TYPE}

        signed_uri, signed_headers, signed_body = client.sign(
            uri, http_method=request.method, body=body, headers=headers
        )
        request.set_signed(signed_uri, dict(signed_headers), signed_body)
        return request


class HmacSha1Signature(OAuthlibSignature):
    name = SignatureMethods.HMAC_SHA1.value
    _oauthlib_method = oauth1.SIGNATURE_HMAC_SHA1


class HmacSha256Signature(OAuthlibSignature):
    name = SignatureMethods.HMAC_SHA256.value
    _oauthlib_method = oauth1.SIGNATURE_HMAC_SHA256


class PlaintextSignature(OAuthlibSignature):
    name = SignatureMethods.PLAINTEXT.value
    _oauthlib_method = oauth1.SIGNATURE_PLAINTEXT


class RsaSha1Signature(OAuthlibSignature):
    """
    RSA-SHA1 strategy. The consumer secret is ignored; the private key comes
    from ``rsa_key`` or ``OAUTH_RSA_PRIVATE_KEY``.
    """

    name = SignatureMethods.RSA_SHA1.value
    _oauthlib_method = oauth1.SIGNATURE_RSA_SHA1

    def __init__(
        self,
        rsa_key: str | None = None,
        nonce: str | None = None,
        timestamp: str | None = None,
    ):
        super().__init__(nonce=nonce, timestamp=timestamp)
        self._rsa_key = rsa_key or settings.OAUTH_RSA_PRIVATE_KEY
        if not self._rsa_key:
            raise ConfigurationException(
                "RSA-SHA1 signing requires a private key; "
                "pass rsa_key or set OAUTH_RSA_PRIVATE_KEY."
            )

    def _client_options(self) -> dict:
        return {"rsa_key": self._rsa_key}


_SIGNATURE_METHODS: dict[str, type[SignatureMethod]] = {
    SignatureMethods.HMAC_SHA1.value: HmacSha1Signature,
    SignatureMethods.HMAC_SHA256.value: HmacSha256Signature,
    SignatureMethods.PLAINTEXT.value: PlaintextSignature,
    SignatureMethods.RSA_SHA1.value: RsaSha1Signature,
}


def resolve_signature(signature: Union[str, SignatureMethod]) -> SignatureMethod:
    """
    Resolve a signature method name or instance into a strategy instance.

    Args:
        signature: A name such as ``"HMAC-SHA1"`` (case-insensitive), a
                   :class:`SignatureMethods` member, or an existing strategy.

    Returns:
        SignatureMethod: The strategy. Instances are returned unchanged.

    Raises:
        ConfigurationException: If the name is unknown or the value is
                                neither a name nor a strategy.
    """
    if isinstance(signature, SignatureMethod):
        return signature

    if isinstance(signature, SignatureMethods):
        key = signature.value
    elif isinstance(signature, str):
        key = signature.strip().upper()
    else:
        raise ConfigurationException(
            f"Signature must be a method name or SignatureMethod, got {type(signature).__name__}."
        )

    strategy_class = _SIGNATURE_METHODS.get(key)
    if strategy_class is None:
        raise ConfigurationException(
            f"Unknown signature method {signature!r}. "
            f"Expected one of: {', '.join(sorted(_SIGNATURE_METHODS))}."
        )
    return strategy_class()
