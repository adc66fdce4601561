"""
Test suite for manage.py CLI commands.

This module tests the Typer CLI commands in manage.py.

Run all tests:
    pytest tests/test_manage.py -v

Run with coverage:
    pytest tests/test_manage.py --cov=manage --cov-report=term-missing -v
"""

import json
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from manage import app, authorize_task
from oauthkit.core.config import settings
from oauthkit.core.services.oauth.base import Consumer

runner = CliRunner()


@pytest.fixture
def dropbox_credentials(monkeypatch):
    monkeypatch.setattr(settings, "DROPBOX_CONSUMER_KEY", "dkey")
    monkeypatch.setattr(settings, "DROPBOX_CONSUMER_SECRET", "dsecret")


class TestProvidersCommand:

    def test_lists_registered_providers(self):
        result = runner.invoke(app, ["providers"])

        assert result.exit_code == 0
        for name in ("dropbox", "google", "linkedin", "tumblr", "twitter"):
            assert name in result.output


class TestAuthorizeCommand:

    def test_authorize_help(self):
        result = runner.invoke(app, ["authorize", "--help"])

        assert result.exit_code == 0
        assert "--scope" in result.output

    def test_unknown_provider(self):
        result = runner.invoke(app, ["authorize", "myspace"])

        assert result.exit_code == 1
        assert "Unknown OAuth provider" in result.output

    def test_missing_credentials(self, monkeypatch):
        monkeypatch.setattr(settings, "DROPBOX_CONSUMER_KEY", "")
        monkeypatch.setattr(settings, "DROPBOX_CONSUMER_SECRET", "")

        result = runner.invoke(app, ["authorize", "dropbox"])

        assert result.exit_code == 1
        assert "No consumer credentials" in result.output

    def test_unknown_signature_method(self, dropbox_credentials):
        result = runner.invoke(app, ["authorize", "dropbox", "--signature", "MD5"])

        assert result.exit_code == 1

    def test_prints_identity(self, dropbox_credentials):
        identity = {
            "name": "Ann",
            "location": "US",
            "credentials": {"uid": "42", "provider": "dropbox"},
        }
        with patch(
            "manage.authorize_task", new=AsyncMock(return_value=identity)
        ) as mock_task:
            result = runner.invoke(app, ["authorize", "dropbox", "-s", "account"])

        assert result.exit_code == 0
        assert json.loads(result.output) == identity
        provider, consumer = mock_task.call_args.args
        assert provider.name == "dropbox"
        assert consumer.key == "dkey"
        assert consumer.scope == ("account",)


class TestAuthorizeTask:

    @pytest.mark.asyncio
    async def test_runs_handshake(self, transport, form, as_json, recording_signature):
        from oauthkit.core.services.oauth.dropbox import DropboxProvider

        mock = transport(
            form("oauth_token=req&oauth_token_secret=req_secret"),
            form("oauth_token=acc&oauth_token_secret=acc_secret"),
            as_json({"display_name": "Ann", "country": "US"}),
        )
        consumer = Consumer(key="k", secret="s")
        async with mock.client() as client:
            provider = DropboxProvider(signature=recording_signature, http_client=client)
            with patch("manage.typer.prompt", side_effect=["v123 ", "1001"]):
                identity = await authorize_task(provider, consumer)

        assert identity["name"] == "Ann"
        assert identity["credentials"]["uid"] == "1001"
        assert recording_signature.calls[1]["token"].verifier == "v123"
