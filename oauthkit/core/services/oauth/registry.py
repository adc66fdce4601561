"""
Registry mapping provider names to provider factories.

Built-in providers are registered when ``oauthkit.core.services.oauth`` is
imported. Applications can add their own:

    from oauthkit.core.services.oauth.registry import register_provider

    register_provider("example", ExampleProvider)
    provider = get_provider("example", signature="PLAINTEXT")
"""

from typing import Any, Callable, Sequence, Union

from oauthkit.core.config import app_logger, settings
from oauthkit.core.exceptions.types import ConfigurationException
from oauthkit.core.services.oauth.base import BaseOAuthProvider, Consumer


__all__ = [
    "register_provider",
    "get_provider",
    "available_providers",
    "consumer_from_settings",
]

ProviderFactory = Callable[..., BaseOAuthProvider]

_registry: dict[str, ProviderFactory] = {}


def register_provider(name: str, factory: ProviderFactory) -> None:
    """
    Register a provider factory under ``name``.

    Registering the same factory twice is a no-op.

    Raises:
        ConfigurationException: If ``name`` is taken by another factory.
    """
    key = name.lower()
    existing = _registry.get(key)
    if existing is not None and existing is not factory:
        raise ConfigurationException(
            f"OAuth provider {key!r} is already registered to {existing!r}."
        )
    _registry[key] = factory
    app_logger.debug(f"Registered OAuth provider: {key}")


def get_provider(name: str, **options: Any) -> BaseOAuthProvider:
    """
    Create the provider registered under ``name``.

    Args:
        name: Provider name, case-insensitive.
        **options: Passed to the factory (``signature``, ``params``, ``http_client``).

    Raises:
        ConfigurationException: If no provider is registered under ``name``.
    """
    factory = _registry.get(name.lower())
    if factory is None:
        raise ConfigurationException(
            f"Unknown OAuth provider {name!r}. "
            f"Available: {', '.join(available_providers()) or 'none'}."
        )
    return factory(**options)


def available_providers() -> list[str]:
    return sorted(_registry)


def consumer_from_settings(
    name: str, scope: Union[str, Sequence[str], None] = None
) -> Consumer:
    """
    Build a :class:`Consumer` from ``<NAME>_CONSUMER_KEY`` / ``<NAME>_CONSUMER_SECRET``.

    Raises:
        ConfigurationException: If either credential is not configured.
    """
    key, secret = settings.consumer_credentials(name)
    if not key or not secret:
        raise ConfigurationException(
            f"No consumer credentials for {name!r}; set "
            f"{name.upper()}_CONSUMER_KEY and {name.upper()}_CONSUMER_SECRET."
        )
    return Consumer(
        key=key, secret=secret, callback=settings.OAUTH_CALLBACK_URL, scope=scope
    )
