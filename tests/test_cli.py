"""Tests for the onetimesecret command-line front end."""
import base64
from pathlib import Path

import pytest

from onetimesecret.cli import main as cli_main
from onetimesecret.secrets.domains.ots_client import Client

from .conftest import make_response


@pytest.fixture
def temp_home(tmp_path, monkeypatch):
    """Fixture to isolate the CLI from the real home directory and environment."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setattr(Path, "home", lambda: fake_home)
    monkeypatch.delenv("OTS_USERNAME", raising=False)
    monkeypatch.delenv("OTS_APITOKEN", raising=False)
    return fake_home


@pytest.fixture
def cli(temp_home, fake_session, monkeypatch):
    """Route every client the CLI builds through the fake session."""
    monkeypatch.setattr(
        cli_main, "Client",
        lambda username, api_token: Client(username, api_token, session=fake_session),
    )
    return cli_main.main


class TestCreateCommand:
    """Test suite for 'onetimesecret create'."""

    def test_generate_prints_value_and_link(self, cli, fake_session, metadata_payload, capsys):
        metadata_payload["value"] = "Vn7sQp2x"
        fake_session.send.return_value = make_response(200, metadata_payload)

        cli(["create"])

        out = capsys.readouterr().out
        assert "Secret value: Vn7sQp2x" in out
        assert f"Secret path: https://onetimesecret.com/secret/{metadata_payload['secret_key']}" in out
        assert f"Metadata key (do not share): {metadata_payload['metadata_key']}" in out

    def test_value_creates_secret(self, cli, fake_session, sent_request, metadata_payload, capsys):
        fake_session.send.return_value = make_response(200, metadata_payload)

        cli(["create", "--value", "abc123"])

        assert sent_request().url.endswith("/share")
        assert sent_request().body == "secret=abc123"
        out = capsys.readouterr().out
        assert "Secret value" not in out
        assert "Secret path: " in out

    def test_email_reports_recipient(self, cli, fake_session, sent_request, metadata_payload, capsys):
        metadata_payload["recipient"] = ["friend@example.com"]
        metadata_payload["value"] = "Vn7sQp2x"
        fake_session.send.return_value = make_response(200, metadata_payload)

        cli(["--username", "me@example.com", "--apitoken", "tok3n", "create", "--email", "friend@example.com"])

        req = sent_request()
        assert req.body == "recipient=friend%40example.com"
        expected = "Basic " + base64.b64encode(b"me@example.com:tok3n").decode("ascii")
        assert req.headers["Authorization"] == expected
        out = capsys.readouterr().out
        assert "Email with link has been sent to friend@example.com" in out
        assert "Secret path" not in out

    def test_empty_value_is_usage_error(self, cli, fake_session):
        with pytest.raises(SystemExit) as exc_info:
            cli(["create", "--value", ""])
        assert exc_info.value.code == 2
        fake_session.send.assert_not_called()

    def test_whitespace_value_is_sent_as_given(self, cli, fake_session, sent_request, metadata_payload, capsys):
        fake_session.send.return_value = make_response(200, metadata_payload)

        cli(["create", "--value", "   "])

        assert sent_request().url.endswith("/share")
        assert sent_request().body == "secret=+++"
        assert "Secret value" not in capsys.readouterr().out

    def test_invalid_email_is_usage_error(self, cli, fake_session):
        with pytest.raises(SystemExit) as exc_info:
            cli(["create", "--email", "not-an-address"])
        assert exc_info.value.code == 2

    def test_service_error_exits_1(self, cli, fake_session, capsys):
        fake_session.send.return_value = make_response(403, {"message": "Over quota"})

        with pytest.raises(SystemExit) as exc_info:
            cli(["create", "--value", "abc123"])

        assert exc_info.value.code == 1
        assert "Error: could not create secret: Over quota" in capsys.readouterr().err


class TestInspectCommand:
    """Test suite for 'onetimesecret inspect'."""

    def test_unread_secret(self, cli, fake_session, metadata_payload, capsys):
        fake_session.send.return_value = make_response(200, metadata_payload)

        cli(["inspect", metadata_payload["metadata_key"]])

        out = capsys.readouterr().out
        assert "Password set: false" in out
        assert "Status      : unread" in out
        assert "Received at" not in out
        assert "Expires     : 2017-03-29 23:13:04 +0000 UTC" in out
        assert "Created on  : 2017-03-22 23:13:04 +0000 UTC" in out
        assert "Created by  : anon" in out
        assert "Sent to" not in out
        assert f"Secret URL  : https://onetimesecret.com/secret/{metadata_payload['secret_key']}" in out

    def test_read_secret(self, cli, fake_session, metadata_payload, capsys):
        del metadata_payload["secret_key"]
        metadata_payload["received"] = 1490224400
        metadata_payload["recipient"] = ["friend@example.com"]
        metadata_payload["passphrase_required"] = True
        fake_session.send.return_value = make_response(200, metadata_payload)

        cli(["inspect", "qjpjroeit8wra0ojeyhcw5pjsgwtuq7"])

        out = capsys.readouterr().out
        assert "Password set: true" in out
        assert "Status      : read" in out
        assert "Received at : 2017-03-22 23:13:20 +0000 UTC" in out
        assert "Sent to     : friend@example.com" in out
        assert "Secret URL" not in out

    def test_multiple_keys(self, cli, fake_session, metadata_payload, capsys):
        fake_session.send.return_value = make_response(200, metadata_payload)

        cli(["inspect", "keyone", "keytwo"])

        assert fake_session.send.call_count == 2
        assert capsys.readouterr().out.count("Status      :") == 2

    def test_unknown_key_exits_1(self, cli, fake_session, capsys):
        fake_session.send.return_value = make_response(404, {"message": "Unknown secret"})

        with pytest.raises(SystemExit) as exc_info:
            cli(["inspect", "missingkey"])

        assert exc_info.value.code == 1
        assert "Error: cannot fetch info about secret: Unknown secret" in capsys.readouterr().err

    def test_invalid_key_is_usage_error(self, cli, fake_session):
        with pytest.raises(SystemExit) as exc_info:
            cli(["inspect", "../recent"])
        assert exc_info.value.code == 2
        fake_session.send.assert_not_called()

    def test_requires_a_key(self, cli):
        with pytest.raises(SystemExit) as exc_info:
            cli(["inspect"])
        assert exc_info.value.code == 2


class TestGlobalBehaviour:
    """Configuration, version and usage handling."""

    def test_no_command_prints_help(self, cli, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli([])
        assert exc_info.value.code == 2
        assert "usage: onetimesecret" in capsys.readouterr().out

    def test_version(self, cli, capsys):
        cli(["version"])
        assert capsys.readouterr().out.strip() == f"onetimesecret {cli_main.VERSION}"

    def test_missing_explicit_config_exits_1(self, cli, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli(["--cfg", str(tmp_path / "missing.yaml"), "inspect", "somekey"])

        assert exc_info.value.code == 1
        assert "Configuration file not found" in capsys.readouterr().err

    def test_config_file_credentials_are_used(self, cli, temp_home, fake_session, sent_request, metadata_payload):
        (temp_home / ".onetimesecret.yaml").write_text("username: file-user\napitoken: file-token\n")
        fake_session.send.return_value = make_response(200, metadata_payload)

        cli(["inspect", "somekey"])

        expected = "Basic " + base64.b64encode(b"file-user:file-token").decode("ascii")
        assert sent_request().headers["Authorization"] == expected

    def test_anonymous_without_config(self, cli, fake_session, sent_request, metadata_payload):
        fake_session.send.return_value = make_response(200, metadata_payload)

        cli(["inspect", "somekey"])

        assert "Authorization" not in sent_request().headers
