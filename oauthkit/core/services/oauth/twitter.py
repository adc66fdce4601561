"""
Twitter OAuth 1.0a provider.

The access token response carries ``user_id``, which is then used to look
the user up.
"""

from oauthkit.core.services.oauth.base import (
    AccessToken,
    BaseOAuthProvider,
    Consumer,
    OAuthUserInfo,
)


__all__ = ["TwitterProvider"]


class TwitterProvider(BaseOAuthProvider):
    """
    Twitter provider.

    Twitter Endpoints:
        - Request token: https://api.twitter.com/oauth/request_token
        - Authorization: https://api.twitter.com/oauth/authenticate
        - Access token: https://api.twitter.com/oauth/access_token
        - User lookup: https://api.twitter.com/1.1/users/lookup.json
    """

    provider_name = "twitter"
    uid_key = "user_id"

    _REQUEST_TOKEN_URL = "https://api.twitter.com/oauth/request_token"
    _AUTHORIZATION_URL = "https://api.twitter.com/oauth/authenticate"
    _ACCESS_TOKEN_URL = "https://api.twitter.com/oauth/access_token"
    _USER_LOOKUP_URL = "https://api.twitter.com/1.1/users/lookup.json"

    def url_request_token(self) -> str:
        return self._REQUEST_TOKEN_URL

    def url_authorize(self) -> str:
        return self._AUTHORIZATION_URL

    def url_access_token(self) -> str:
        return self._ACCESS_TOKEN_URL

    async def get_user_info(
        self, consumer: Consumer, token: AccessToken
    ) -> OAuthUserInfo:
        users = await self._fetch_resource(
            consumer, token, self._USER_LOOKUP_URL, {"user_id": token.uid}
        )
        user = self._require(users, 0)

        return OAuthUserInfo(
            name=self._require(user, "name"),
            location=user.get("location"),
            nickname=user.get("screen_name"),
            image=user.get("profile_image_url"),
            description=user.get("description"),
            urls={"website": user["url"]} if user.get("url") else {},
            credentials=self._credentials(token, user.get("id_str") or token.uid),
            raw_data=user,
        )
