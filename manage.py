import asyncio
from typing import Annotated

from rich import print, print_json
import typer

from oauthkit.core.config import app_logger
from oauthkit.core.exceptions.types import AppException
from oauthkit.core.services.oauth import (
    BaseOAuthProvider,
    Consumer,
    available_providers,
    consumer_from_settings,
    get_provider,
)

app = typer.Typer()


async def authorize_task(provider: BaseOAuthProvider, consumer: Consumer) -> dict:
    """
    Runs the full three-legged handshake against ``provider`` interactively.

    The user opens the printed authorization URL, approves access and pastes
    back the verifier shown by the provider (or found in the callback URL).
    Providers that send the uid only to the callback are asked for it too.

    Returns:
        dict: The identity record of the authorized user.
    """
    # Step 1: Request token
    request_token = await provider.request_token(consumer)

    # Step 2: Authorize
    print("[cyan]Point your browser to:[/cyan]")
    print(provider.authorize_url(request_token))
    verifier = typer.prompt("Verifier (oauth_verifier)")

    callback_params = {}
    if provider.uid_key:
        uid = typer.prompt(
            f"Callback {provider.uid_key} (leave empty if none)",
            default="",
            show_default=False,
        )
        if uid:
            callback_params[provider.uid_key] = uid

    # Step 3: Access token
    access_token = await provider.access_token(
        consumer,
        request_token.with_verifier(verifier.strip()),
        callback_params=callback_params,
    )

    # Step 4: Identify
    user_info = await provider.get_user_info(consumer, access_token)
    return user_info.to_dict()


@app.command()
def providers():
    """
    Lists the registered OAuth providers.

    Usage:
        python manage.py providers
    """
    for name in available_providers():
        print(f"[green]{name}[/green]")


@app.command()
def authorize(
    provider_name: Annotated[str, typer.Argument(help="Registered provider name, e.g. 'dropbox'.")],
    scope: Annotated[
        list[str] | None,
        typer.Option("--scope", "-s", help="Scope to request; repeat for several."),
    ] = None,
    signature: Annotated[
        str | None,
        typer.Option(help="Signature method, e.g. 'HMAC-SHA1' or 'PLAINTEXT'."),
    ] = None,
):
    """
    Authorizes against a provider and prints the user's identity as JSON.

    Consumer credentials are read from <PROVIDER>_CONSUMER_KEY and
    <PROVIDER>_CONSUMER_SECRET.

    Examples:
        python manage.py authorize dropbox
        python manage.py authorize google -s https://www.googleapis.com/auth/userinfo.email
    """
    try:
        provider = get_provider(provider_name, signature=signature)
        consumer = consumer_from_settings(provider.name, scope=scope or None)
        identity = asyncio.run(authorize_task(provider, consumer))
    except AppException as e:
        app_logger.error(f"Authorization with {provider_name} failed: {e.message}")
        print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)

    print_json(data=identity)


if __name__ == "__main__":
    app()
