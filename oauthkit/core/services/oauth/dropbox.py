"""
Dropbox OAuth 1.0a provider.

Only the handshake and the account lookup needed to identify the user are
implemented, not the Dropbox API.
"""

from oauthkit.core.services.oauth.base import (
    AccessToken,
    BaseOAuthProvider,
    Consumer,
    OAuthUserInfo,
)


__all__ = ["DropboxProvider"]


class DropboxProvider(BaseOAuthProvider):
    """
    Dropbox provider.

    Dropbox Endpoints:
        - Request token: https://api.dropbox.com/0/oauth/request_token
        - Authorization: https://www.dropbox.com/0/oauth/authorize
        - Access token: https://api.dropbox.com/0/oauth/access_token
        - Account info: https://api.dropbox.com/0/account/info
    """

    provider_name = "dropbox"
    uid_key = "uid"

    _REQUEST_TOKEN_URL = "https://api.dropbox.com/0/oauth/request_token"
    _AUTHORIZATION_URL = "https://www.dropbox.com/0/oauth/authorize"
    _ACCESS_TOKEN_URL = "https://api.dropbox.com/0/oauth/access_token"
    _ACCOUNT_INFO_URL = "https://api.dropbox.com/0/account/info"

    def url_request_token(self) -> str:
        return self._REQUEST_TOKEN_URL

    def url_authorize(self) -> str:
        return self._AUTHORIZATION_URL

    def url_access_token(self) -> str:
        return self._ACCESS_TOKEN_URL

    async def get_user_info(
        self, consumer: Consumer, token: AccessToken
    ) -> OAuthUserInfo:
        user = await self._fetch_resource(consumer, token, self._ACCOUNT_INFO_URL)

        return OAuthUserInfo(
            name=self._require(user, "display_name"),
            location=user.get("country"),
            email=user.get("email"),
            credentials=self._credentials(token),
            raw_data=user,
        )
