"""
Outbound OAuth requests and their responses.

:class:`OAuthRequest` carries the OAuth parameters of one handshake step.
It is signed by a :class:`~oauthkit.core.services.oauth.signature.SignatureMethod`,
then either executed over httpx or rendered as a browser URL.
:class:`OAuthResponse` reads single parameters from the reply, whether the
provider answered form-encoded or JSON.

Example usage:
    request = OAuthRequest("token", "GET", "https://api.example.com/oauth/request_token", {
        "oauth_consumer_key": consumer.key,
        "oauth_callback": consumer.callback,
    })
    request.sign(signature, consumer)
    response = await request.execute(client)
    token_key = response.param("oauth_token")
"""

from typing import TYPE_CHECKING, Any, Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

from oauthkit.core.config import http_logger, settings
from oauthkit.core.enums import RequestKind
from oauthkit.core.exceptions.types import TransportException

if TYPE_CHECKING:
    from oauthkit.core.services.oauth.signature import SignatureMethod


__all__ = ["OAuthRequest", "OAuthResponse"]


class OAuthResponse:
    """
    Read-only view over a provider response.

    Args:
        response: The successful httpx response.
    """

    def __init__(self, response: httpx.Response):
        self._response = response
        self._params: dict[str, str] | None = None

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def text(self) -> str:
        return self._response.text

    def json(self) -> Any:
        """Decode the body as JSON. Raises ``ValueError`` when it is not JSON."""
        return self._response.json()

    def _looks_like_json(self) -> bool:
        content_type = self._response.headers.get("content-type", "")
        return "json" in content_type or self.text.lstrip().startswith("{")

    def _parse_params(self) -> dict[str, str]:
        if self._looks_like_json():
            try:
                data = self.json()
            except ValueError:
                data = None
            if isinstance(data, dict):
                return {
                    key: str(value)
                    for key, value in data.items()
                    if value is not None and not isinstance(value, (dict, list))
                }
        return dict(parse_qsl(self.text.strip()))

    def param(self, name: str, default: str | None = None) -> str | None:
        """
        Return one response parameter.

        Args:
            name: Parameter name, e.g. ``oauth_token``.
            default: Value returned when the parameter is absent or empty.

        Returns:
            str | None: The parameter value as a string.
        """
        if self._params is None:
            self._params = self._parse_params()
        return self._params.get(name) or default

    def __repr__(self) -> str:
        return f"<OAuthResponse status={self.status_code}>"


class OAuthRequest:
    """
    One outbound OAuth request.

    Args:
        kind: The handshake step this request belongs to (see :class:`RequestKind`).
        method: HTTP method, e.g. ``"GET"`` or ``"POST"``.
        url: Endpoint URL. An existing query string is preserved.
        params: Initial parameters. ``None`` values are skipped.
    """

    def __init__(
        self,
        kind: RequestKind | str,
        method: str,
        url: str,
        params: Mapping[str, Any] | None = None,
    ):
        self.kind = RequestKind(kind)
        self.method = method.upper()
        self.url = url
        self._params: dict[str, str] = {}
        self._signed: tuple[str, dict[str, str], str | None] | None = None
        if params:
            self.update_params(params)

    @property
    def params(self) -> dict[str, str]:
        return dict(self._params)

    @property
    def is_signed(self) -> bool:
        return self._signed is not None

    @property
    def signed_headers(self) -> dict[str, str]:
        return dict(self._signed[1]) if self._signed else {}

    def update_params(self, params: Mapping[str, Any]) -> "OAuthRequest":
        """
        Merge parameters into the request. Later values win.

        Any previous signature is discarded, since it no longer covers the
        parameter set.
        """
        for key, value in params.items():
            if value is None:
                continue
            self._params[key] = value if isinstance(value, str) else str(value)
        self._signed = None
        return self

    def url_with_query(self, params: Mapping[str, str]) -> str:
        scheme, netloc, path, query, fragment = urlsplit(self.url)
        pairs = parse_qsl(query, keep_blank_values=True) + list(params.items())
        return urlunsplit((scheme, netloc, path, urlencode(pairs), fragment))

    def as_url(self) -> str:
        """Render the request as a GET URL, e.g. for a browser redirect."""
        return self.url_with_query(self._params)

    def sign(self, signature: "SignatureMethod", consumer, token=None) -> "OAuthRequest":
        return signature.sign(self, consumer, token)

    def set_signed(
        self, url: str, headers: dict[str, str], body: str | None
    ) -> None:
        self._signed = (url, headers, body)

    def _wire_form(self) -> tuple[str, dict[str, str], str | None]:
        if self._signed is not None:
            return self._signed
        if self.method in ("GET", "HEAD"):
            return self.as_url(), {}, None
        return (
            self.url,
            {"Content-Type": "application/x-www-form-urlencoded"},
            urlencode(self._params),
        )

    async def _send(self, client: httpx.AsyncClient) -> httpx.Response:
        url, headers, body = self._wire_form()
        return await client.request(self.method, url, headers=headers, content=body)

    async def execute(self, client: httpx.AsyncClient | None = None) -> OAuthResponse:
        """
        Send the request and wrap the reply.

        Args:
            client: Shared httpx client. When omitted a short-lived client
                    is opened for this call with ``OAUTH_HTTP_TIMEOUT``.

        Returns:
            OAuthResponse: The successful (2xx) response.

        Raises:
            TransportException: On network errors or non-2xx responses.
        """
        step = self.kind.step
        http_logger.info(f"OAuth {step} request: {self.method} {self.url}")

        try:
            if client is None:
                async with httpx.AsyncClient(
                    timeout=httpx.Timeout(settings.OAUTH_HTTP_TIMEOUT)
                ) as owned_client:
                    response = await self._send(owned_client)
            else:
                response = await self._send(client)
        except httpx.RequestError as e:
            http_logger.error(
                f"OAuth {step} request network error: {type(e).__name__}: {e}"
            )
            raise TransportException(
                message=f"OAuth {step} request to {self.url} failed: network error",
                step=step,
                url=self.url,
            ) from e

        if not response.is_success:
            http_logger.error(
                f"OAuth {step} request failed: status={response.status_code}, "
                f"response={response.text[:200]}"
            )
            raise TransportException(
                message=(
                    f"OAuth {step} request to {self.url} failed: "
                    f"status={response.status_code}"
                ),
                step=step,
                url=self.url,
                upstream_status=response.status_code,
                details={"response": response.text[:500]},
            )

        http_logger.info(f"OAuth {step} request succeeded: status={response.status_code}")
        return OAuthResponse(response)

    def __repr__(self) -> str:
        return f"<OAuthRequest {self.kind.value} {self.method} {self.url}>"
