"""
OAuth 1.0a provider services.

This package contains the three-legged OAuth 1.0a handshake:
- BaseOAuthProvider: Abstract base class running the handshake steps
- DropboxProvider, TwitterProvider, LinkedInProvider, GoogleProvider,
  TumblrProvider: Built-in providers
- Signature strategies and the provider registry

Example usage:
    from oauthkit.core.services.oauth import consumer_from_settings, get_provider

    provider = get_provider("twitter")
    consumer = consumer_from_settings("twitter")

    request_token = await provider.request_token(consumer)
    url = provider.authorize_url(request_token)

    # User authorizes, callback receives oauth_verifier
    access_token = await provider.access_token(
        consumer, request_token.with_verifier(verifier)
    )

    user_info = await provider.get_user_info(consumer, access_token)
"""

from oauthkit.core.enums import OAuthProviders
from oauthkit.core.services.oauth.base import (
    AccessToken,
    BaseOAuthProvider,
    Consumer,
    OAuthCredentials,
    OAuthUserInfo,
    RequestToken,
)
from oauthkit.core.services.oauth.dropbox import DropboxProvider
from oauthkit.core.services.oauth.google import GoogleProvider
from oauthkit.core.services.oauth.linkedin import LinkedInProvider
from oauthkit.core.services.oauth.registry import (
    available_providers,
    consumer_from_settings,
    get_provider,
    register_provider,
)
from oauthkit.core.services.oauth.request import OAuthRequest, OAuthResponse
from oauthkit.core.services.oauth.signature import SignatureMethod, resolve_signature
from oauthkit.core.services.oauth.tumblr import TumblrProvider
from oauthkit.core.services.oauth.twitter import TwitterProvider

register_provider(OAuthProviders.DROPBOX.value, DropboxProvider)
register_provider(OAuthProviders.TWITTER.value, TwitterProvider)
register_provider(OAuthProviders.LINKEDIN.value, LinkedInProvider)
register_provider(OAuthProviders.GOOGLE.value, GoogleProvider)
register_provider(OAuthProviders.TUMBLR.value, TumblrProvider)

__all__ = [
    "AccessToken",
    "BaseOAuthProvider",
    "Consumer",
    "OAuthCredentials",
    "OAuthRequest",
    "OAuthResponse",
    "OAuthUserInfo",
    "RequestToken",
    "SignatureMethod",
    "DropboxProvider",
    "GoogleProvider",
    "LinkedInProvider",
    "TumblrProvider",
    "TwitterProvider",
    "available_providers",
    "consumer_from_settings",
    "get_provider",
    "register_provider",
    "resolve_signature",
]
