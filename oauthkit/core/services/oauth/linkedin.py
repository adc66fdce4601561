"""
LinkedIn OAuth 1.0a provider.
"""

from oauthkit.core.services.oauth.base import (
    AccessToken,
    BaseOAuthProvider,
    Consumer,
    OAuthUserInfo,
)


__all__ = ["LinkedInProvider"]


class LinkedInProvider(BaseOAuthProvider):
    """
    LinkedIn provider. The access token response has no uid; it comes from
    the profile ``id``.

    LinkedIn Endpoints:
        - Request token: https://api.linkedin.com/uas/oauth/requestToken
        - Authorization: https://api.linkedin.com/uas/oauth/authorize
        - Access token: https://api.linkedin.com/uas/oauth/accessToken
        - Profile: https://api.linkedin.com/v1/people/~
    """

    provider_name = "linkedin"
    uid_key = None

    _REQUEST_TOKEN_URL = "https://api.linkedin.com/uas/oauth/requestToken"
    _AUTHORIZATION_URL = "https://api.linkedin.com/uas/oauth/authorize"
    _ACCESS_TOKEN_URL = "https://api.linkedin.com/uas/oauth/accessToken"
    _PROFILE_URL = (
        "https://api.linkedin.com/v1/people/"
        "~:(id,first-name,last-name,headline,picture-url,location,public-profile-url)"
    )

    def url_request_token(self) -> str:
        return self._REQUEST_TOKEN_URL

    def url_authorize(self) -> str:
        return self._AUTHORIZATION_URL

    def url_access_token(self) -> str:
        return self._ACCESS_TOKEN_URL

    async def get_user_info(
        self, consumer: Consumer, token: AccessToken
    ) -> OAuthUserInfo:
        profile = await self._fetch_resource(
            consumer, token, self._PROFILE_URL, {"format": "json"}
        )
        uid = self._require(profile, "id")
        location = profile.get("location")
        name = " ".join(
            part
            for part in (profile.get("firstName"), profile.get("lastName"))
            if part
        )

        return OAuthUserInfo(
            name=name or None,
            location=location.get("name") if isinstance(location, dict) else None,
            description=profile.get("headline"),
            image=profile.get("pictureUrl"),
            urls=(
                {"linkedin": profile["publicProfileUrl"]}
                if profile.get("publicProfileUrl")
                else {}
            ),
            credentials=self._credentials(token, uid),
            raw_data=profile,
        )
