"""
Test suite for TwitterProvider.

Run all tests:
    pytest tests/services/oauth/test_twitter.py -v
"""

import pytest

from oauthkit.core.exceptions.types import OAuthException


class TestTwitterProviderConfig:

    def test_provider_name_and_uid_key(self):
        from oauthkit.core.services.oauth.twitter import TwitterProvider

        provider = TwitterProvider()

        assert provider.name == "twitter"
        assert provider.uid_key == "user_id"

    def test_authorize_endpoint(self):
        from oauthkit.core.services.oauth.twitter import TwitterProvider

        assert TwitterProvider().url_authorize() == "https://api.twitter.com/oauth/authenticate"


class TestTwitterAccessToken:

    @pytest.mark.asyncio
    async def test_access_token_reads_user_id(
        self, consumer, request_token, transport, form
    ):
        from oauthkit.core.services.oauth.twitter import TwitterProvider

        mock = transport(
            form("oauth_token=A&oauth_token_secret=B&user_id=783214&screen_name=twitter")
        )
        async with mock.client() as client:
            provider = TwitterProvider(http_client=client)
            token = await provider.access_token(consumer, request_token)

        assert token.uid == "783214"


class TestTwitterUserInfo:

    @pytest.mark.asyncio
    async def test_get_user_info_success(self, consumer, access_token, transport, as_json):
        from oauthkit.core.services.oauth.twitter import TwitterProvider

        mock = transport(
            as_json(
                [
                    {
                        "id_str": "42",
                        "screen_name": "ann",
                        "name": "Ann",
                        "location": "Lagos",
                        "profile_image_url": "https://pbs.twimg.com/ann.png",
                        "description": "Hello",
                        "url": "https://ann.example.com",
                    }
                ]
            )
        )
        async with mock.client() as client:
            provider = TwitterProvider(http_client=client)
            user_info = await provider.get_user_info(consumer, access_token)

        assert user_info.name == "Ann"
        assert user_info.nickname == "ann"
        assert user_info.location == "Lagos"
        assert user_info.image == "https://pbs.twimg.com/ann.png"
        assert user_info.description == "Hello"
        assert user_info.urls == {"website": "https://ann.example.com"}
        assert user_info.credentials.uid == "42"
        assert user_info.credentials.provider == "twitter"

    @pytest.mark.asyncio
    async def test_get_user_info_looks_up_uid(
        self, consumer, access_token, transport, as_json
    ):
        from oauthkit.core.services.oauth.twitter import TwitterProvider

        mock = transport(as_json([{"name": "Ann"}]))
        async with mock.client() as client:
            provider = TwitterProvider(http_client=client)
            await provider.get_user_info(consumer, access_token)

        sent = mock.requests[0]
        assert sent.url.path == "/1.1/users/lookup.json"
        assert sent.url.params["user_id"] == "42"

    @pytest.mark.asyncio
    async def test_get_user_info_empty_lookup(
        self, consumer, access_token, transport, as_json
    ):
        from oauthkit.core.services.oauth.twitter import TwitterProvider

        mock = transport(as_json([]))
        async with mock.client() as client:
            provider = TwitterProvider(http_client=client)

            with pytest.raises(OAuthException) as exc_info:
                await provider.get_user_info(consumer, access_token)

        assert exc_info.value.step == "user_info"
