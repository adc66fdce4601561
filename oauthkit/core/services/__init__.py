# OAuth providers
from oauthkit.core.services.oauth import (
    AccessToken,
    BaseOAuthProvider,
    Consumer,
    OAuthUserInfo,
    RequestToken,
    available_providers,
    consumer_from_settings,
    get_provider,
    register_provider,
)

__all__ = [
    # OAuth
    "AccessToken",
    "BaseOAuthProvider",
    "Consumer",
    "OAuthUserInfo",
    "RequestToken",
    "available_providers",
    "consumer_from_settings",
    "get_provider",
    "register_provider",
]
