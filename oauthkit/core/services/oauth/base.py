"""
Base OAuth 1.0a provider and the values passed between handshake steps.

Example usage:
    from oauthkit.core.services.oauth import Consumer, get_provider

    provider = get_provider("dropbox")
    consumer = Consumer(key="key", secret="secret", callback="https://app.com/cb")

    # Step 1: Request token
    request_token = await provider.request_token(consumer)

    # Step 2: Send the user to the provider
    redirect = provider.authorize_url(request_token)

    # Step 3: Exchange the authorized token, verifier from the callback
    request_token = request_token.with_verifier(verifier)
    access_token = await provider.access_token(
        consumer, request_token, callback_params=callback_query
    )

    # Step 4: Identify the user
    user_info = await provider.get_user_info(consumer, access_token)
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Sequence, Union

import httpx

from oauthkit.core.config import auth_logger, settings
from oauthkit.core.enums import RequestKind
from oauthkit.core.exceptions.types import ConfigurationException, OAuthException
from oauthkit.core.services.oauth.request import OAuthRequest, OAuthResponse
from oauthkit.core.services.oauth.signature import SignatureMethod, resolve_signature


__all__ = [
    "BaseOAuthProvider",
    "Consumer",
    "RequestToken",
    "AccessToken",
    "OAuthCredentials",
    "OAuthUserInfo",
]


@dataclass(frozen=True)
class Consumer:
    """
    The registered client application.

    Attributes:
        key: Public consumer key.
        secret: Consumer secret. Only read by signature strategies.
        callback: Redirect URL sent as ``oauth_callback``. ``"oob"`` means
                  the user copies the verifier by hand.
        scope: ``None``, a single scope string, or an ordered sequence of
               scopes. Sequences are stored as tuples.
    """

    key: str
    secret: str
    callback: str = "oob"
    scope: Union[str, Sequence[str], None] = None

    def __post_init__(self):
        if self.scope is not None and not isinstance(self.scope, str):
            object.__setattr__(self, "scope", tuple(self.scope))


@dataclass(frozen=True)
class RequestToken:
    """
    Temporary token from step 1, traded for an :class:`AccessToken` in step 3.

    Attributes:
        access_token: The ``oauth_token`` value.
        secret: The ``oauth_token_secret`` value.
        verifier: ``oauth_verifier`` from the authorization redirect.
    """

    access_token: str
    secret: str
    verifier: str | None = None

    def with_verifier(self, verifier: str) -> "RequestToken":
        return replace(self, verifier=verifier)


@dataclass(frozen=True)
class AccessToken:
    """
    Authorized token from step 3, used to sign resource calls.

    Attributes:
        access_token: The ``oauth_token`` value.
        secret: The ``oauth_token_secret`` value.
        uid: The provider's identifier for the user, when it sends one.
    """

    access_token: str
    secret: str
    uid: str | None = None


@dataclass(frozen=True)
class OAuthCredentials:
    """Credentials attached to an identity record."""

    uid: str | None
    provider: str
    access_token: str
    secret: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "uid": self.uid,
            "provider": self.provider,
            "access_token": self.access_token,
            "secret": self.secret,
        }


@dataclass
class OAuthUserInfo:
    """
    Normalized identity information from OAuth providers.

    Attributes:
        name: Display name.
        location: Free-form location or country, if the provider has one.
        credentials: uid, provider name and the access token pair.
        nickname: Screen name or handle.
        email: Email address.
        image: URL to a profile picture.
        description: Profile headline or bio.
        urls: Named profile links.
        raw_data: The complete response from the provider API.
    """

    name: str | None
    location: str | None
    credentials: OAuthCredentials
    nickname: str | None = None
    email: str | None = None
    image: str | None = None
    description: str | None = None
    urls: dict[str, str] = field(default_factory=dict)
    raw_data: Any = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert user info to a dictionary.

        Returns:
            dict: Dictionary representation, credentials nested.
        """
        return {
            "name": self.name,
            "location": self.location,
            "nickname": self.nickname,
            "email": self.email,
            "image": self.image,
            "description": self.description,
            "urls": dict(self.urls),
            "credentials": self.credentials.to_dict(),
        }


class BaseOAuthProvider(ABC):
    """
    Abstract base class for OAuth 1.0a providers.

    A provider is immutable configuration plus stateless handshake steps;
    every call builds and signs a fresh request, so one instance can serve
    concurrent flows. All flow state lives in the :class:`Consumer` and token
    values the caller passes in.

    Subclasses must implement:
        - url_request_token, url_authorize, url_access_token: endpoint URLs
        - get_user_info: map the provider's profile response

    Subclasses may override:
        - provider_name: slug; derived from the class name when unset
        - uid_key: access-token response field holding the user id, or
          ``None`` when the provider does not send one
        - scope_separator: joins sequence scopes
        - signature_method: default signature method name

    Args:
        signature: Signature method name or strategy, overriding the class default.
        params: Extra parameters merged into every signed request.
        http_client: Shared httpx client. Never closed by the provider.
    """

    provider_name: str | None = None
    signature_method: str | None = None
    uid_key: str | None = "uid"
    scope_separator: str = ","

    def __init__(
        self,
        signature: Union[str, SignatureMethod, None] = None,
        params: Mapping[str, Any] | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._signature = resolve_signature(
            signature or self.signature_method or settings.OAUTH_SIGNATURE_METHOD
        )
        self._name = self.provider_name or self._name_from_class()
        self._params = MappingProxyType(dict(params or {}))
        self._client = http_client

        for accessor in ("url_request_token", "url_authorize", "url_access_token"):
            if not getattr(self, accessor)():
                raise ConfigurationException(
                    f"Provider {self._name!r} has no {accessor} endpoint."
                )

    @classmethod
    def _name_from_class(cls) -> str:
        name = re.sub(r"(OAuth)?Provider$", "", cls.__name__)
        return (name or cls.__name__).lower()

    @property
    def name(self) -> str:
        return self._name

    @property
    def signature(self) -> SignatureMethod:
        return self._signature

    @property
    def params(self) -> Mapping[str, Any]:
        return self._params

    @abstractmethod
    def url_request_token(self) -> str:
        """Return the request token endpoint."""

    @abstractmethod
    def url_authorize(self) -> str:
        """Return the user authorization endpoint."""

    @abstractmethod
    def url_access_token(self) -> str:
        """Return the access token endpoint."""

    @abstractmethod
    async def get_user_info(
        self, consumer: Consumer, token: AccessToken
    ) -> OAuthUserInfo:
        """
        Retrieve basic identity information for the authorized user.

        Args:
            consumer: The consumer that obtained ``token``.
            token: Access token from :meth:`access_token`.

        Returns:
            OAuthUserInfo: Normalized user information.

        Raises:
            OAuthException: If the response is unreadable or lacks required fields.
        """

    def _scope(self, consumer: Consumer) -> str | None:
        if consumer.scope is None or isinstance(consumer.scope, str):
            return consumer.scope
        return self.scope_separator.join(consumer.scope)

    def _required_param(self, response: OAuthResponse, name: str, step: str) -> str:
        value = response.param(name)
        if value is None:
            auth_logger.error(f"{self._name} {step} response lacks {name}")
            raise OAuthException(
                message=f"{self._name} {step} response lacks {name}.",
                step=step,
                field=name,
            )
        return value

    async def request_token(
        self, consumer: Consumer, params: Mapping[str, Any] | None = None
    ) -> RequestToken:
        """
        Ask the provider for a request token.

        The request is signed with the consumer only; no token exists yet.

        Args:
            consumer: The consumer asking for authorization.
            params: Additional request parameters.

        Returns:
            RequestToken: Token to send the user to :meth:`authorize_url` with.

        Raises:
            OAuthException: If ``oauth_token`` or ``oauth_token_secret`` is missing.
            TransportException: If the request fails or is rejected.
        """
        auth_logger.info(f"{self._name} request token started")
        request = OAuthRequest(
            RequestKind.TOKEN,
            "GET",
            self.url_request_token(),
            {
                "oauth_consumer_key": consumer.key,
                "oauth_callback": consumer.callback,
                "scope": self._scope(consumer),
            },
        )
        request.update_params(self._params)
        if params:
            request.update_params(params)

        request.sign(self._signature, consumer)
        response = await request.execute(self._client)

        token = RequestToken(
            access_token=self._required_param(response, "oauth_token", "request_token"),
            secret=self._required_param(response, "oauth_token_secret", "request_token"),
        )
        auth_logger.info(f"{self._name} request token obtained")
        return token

    def authorize_url(
        self, token: RequestToken, params: Mapping[str, Any] | None = None
    ) -> str:
        """
        Build the URL to redirect the user to for authorization.

        Nothing is signed or sent; the browser makes this request.

        Args:
            token: Request token from :meth:`request_token`.
            params: Additional query parameters.

        Returns:
            str: The authorization URL.
        """
        request = OAuthRequest(
            RequestKind.AUTHORIZE,
            "GET",
            self.url_authorize(),
            {"oauth_token": token.access_token},
        )
        if params:
            request.update_params(params)
        return request.as_url()

    async def access_token(
        self,
        consumer: Consumer,
        token: RequestToken,
        params: Mapping[str, Any] | None = None,
        callback_params: Mapping[str, Any] | None = None,
    ) -> AccessToken:
        """
        Exchange an authorized request token for an access token.

        The request is signed with both the consumer and the request token.
        The uid is read from the response, then from ``callback_params``.

        Args:
            consumer: The consumer that obtained ``token``.
            token: Request token carrying the verifier from the redirect.
            params: Additional request parameters.
            callback_params: Parameters the provider sent to the callback URL,
                             consulted when the response has no uid.

        Returns:
            AccessToken: The authorized token pair and uid.

        Raises:
            OAuthException: If the verifier, token fields or uid are missing.
            TransportException: If the request fails or is rejected.
        """
        auth_logger.info(f"{self._name} access token started")
        if not token.verifier:
            raise OAuthException(
                message=f"{self._name} access token exchange needs a request token with a verifier.",
                step="access_token",
                field="oauth_verifier",
            )

        request = OAuthRequest(
            RequestKind.ACCESS,
            "POST",
            self.url_access_token(),
            {
                "oauth_consumer_key": consumer.key,
                "oauth_token": token.access_token,
                "oauth_verifier": token.verifier,
            },
        )
        request.update_params(self._params)
        if params:
            request.update_params(params)

        request.sign(self._signature, consumer, token)
        response = await request.execute(self._client)

        token_key = self._required_param(response, "oauth_token", "access_token")
        token_secret = self._required_param(response, "oauth_token_secret", "access_token")

        uid = None
        if self.uid_key:
            uid = response.param(self.uid_key)
            if uid is None and callback_params and callback_params.get(self.uid_key):
                uid = str(callback_params[self.uid_key])
            if uid is None:
                auth_logger.error(f"{self._name} access token response lacks {self.uid_key}")
                raise OAuthException(
                    message=f"{self._name} access_token response lacks {self.uid_key}.",
                    step="access_token",
                    field=self.uid_key,
                )

        access_token = AccessToken(access_token=token_key, secret=token_secret, uid=uid)
        auth_logger.info(f"{self._name} access token obtained: uid={uid}")
        return access_token

    async def _fetch_resource(
        self,
        consumer: Consumer,
        token: AccessToken,
        url: str,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Signed GET to a resource endpoint, decoded as JSON."""
        auth_logger.info(f"{self._name} user info started: {url}")
        request = OAuthRequest(
            RequestKind.RESOURCE,
            "GET",
            url,
            {"oauth_consumer_key": consumer.key, "oauth_token": token.access_token},
        )
        request.update_params(self._params)
        if params:
            request.update_params(params)

        request.sign(self._signature, consumer, token)
        response = await request.execute(self._client)

        try:
            data = response.json()
        except ValueError as e:
            auth_logger.error(f"{self._name} user info response is not JSON: {e}")
            raise OAuthException(
                message=f"{self._name} user info response could not be parsed.",
                step="user_info",
            ) from e
        auth_logger.info(f"{self._name} user info fetched")
        return data

    def _require(self, data: Any, key: str) -> Any:
        try:
            return data[key]
        except (KeyError, IndexError, TypeError) as e:
            auth_logger.error(f"{self._name} user info response lacks {key}")
            raise OAuthException(
                message=f"{self._name} user info response lacks {key}.",
                step="user_info",
                field=str(key),
            ) from e

    def _credentials(self, token: AccessToken, uid: Any = None) -> OAuthCredentials:
        return OAuthCredentials(
            uid=str(uid) if uid is not None else token.uid,
            provider=self._name,
            access_token=token.access_token,
            secret=token.secret,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self._name!r} signature={self._signature.name}>"
