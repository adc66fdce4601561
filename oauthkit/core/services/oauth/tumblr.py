"""
Tumblr OAuth 1.0a provider.

Identity comes from the primary blog of the authorizing account.
"""

from oauthkit.core.services.oauth.base import (
    AccessToken,
    BaseOAuthProvider,
    Consumer,
    OAuthUserInfo,
)


__all__ = ["TumblrProvider"]


class TumblrProvider(BaseOAuthProvider):
    """Tumblr provider. The blog name doubles as uid and nickname."""

    provider_name = "tumblr"
    uid_key = None

    _REQUEST_TOKEN_URL = "https://www.tumblr.com/oauth/request_token"
    _AUTHORIZATION_URL = "https://www.tumblr.com/oauth/authorize"
    _ACCESS_TOKEN_URL = "https://www.tumblr.com/oauth/access_token"
    _USER_INFO_URL = "https://api.tumblr.com/v2/user/info"

    def url_request_token(self) -> str:
        return self._REQUEST_TOKEN_URL

    def url_authorize(self) -> str:
        return self._AUTHORIZATION_URL

    def url_access_token(self) -> str:
        return self._ACCESS_TOKEN_URL

    async def get_user_info(
        self, consumer: Consumer, token: AccessToken
    ) -> OAuthUserInfo:
        payload = await self._fetch_resource(consumer, token, self._USER_INFO_URL)
        user = self._require(self._require(payload, "response"), "user")
        name = self._require(user, "name")

        return OAuthUserInfo(
            name=name,
            location=None,
            nickname=name,
            credentials=self._credentials(token, name),
            raw_data=payload,
        )
