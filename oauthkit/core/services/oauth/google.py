"""
Google OAuth 1.0a provider.

Google expects space-separated scopes.
"""

from oauthkit.core.services.oauth.base import (
    AccessToken,
    BaseOAuthProvider,
    Consumer,
    OAuthUserInfo,
)


__all__ = ["GoogleProvider"]


class GoogleProvider(BaseOAuthProvider):
    """
    Google provider.

    Google Endpoints:
        - Request token: https://www.google.com/accounts/OAuthGetRequestToken
        - Authorization: https://www.google.com/accounts/OAuthAuthorizeToken
        - Access token: https://www.google.com/accounts/OAuthGetAccessToken
        - User info: https://www.googleapis.com/oauth2/v1/userinfo
    """

    provider_name = "google"
    uid_key = None
    scope_separator = " "

    _REQUEST_TOKEN_URL = "https://www.google.com/accounts/OAuthGetRequestToken"
    _AUTHORIZATION_URL = "https://www.google.com/accounts/OAuthAuthorizeToken"
    _ACCESS_TOKEN_URL = "https://www.google.com/accounts/OAuthGetAccessToken"
    _USER_INFO_URL = "https://www.googleapis.com/oauth2/v1/userinfo"

    def url_request_token(self) -> str:
        return self._REQUEST_TOKEN_URL

    def url_authorize(self) -> str:
        return self._AUTHORIZATION_URL

    def url_access_token(self) -> str:
        return self._ACCESS_TOKEN_URL

    async def get_user_info(
        self, consumer: Consumer, token: AccessToken
    ) -> OAuthUserInfo:
        user = await self._fetch_resource(
            consumer, token, self._USER_INFO_URL, {"alt": "json"}
        )
        uid = self._require(user, "id")

        return OAuthUserInfo(
            name=user.get("name"),
            location=user.get("locale"),
            email=user.get("email"),
            image=user.get("picture"),
            credentials=self._credentials(token, uid),
            raw_data=user,
        )
