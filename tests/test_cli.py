"""CLI tests."""

from click.testing import CliRunner

from linkedcommunity.auth.jwt import verify_token
from linkedcommunity.cli.main import cli
from linkedcommunity.config import Settings

SECRET = "cli-test-secret-abcdefghijklmnopqrstuvwxyz"


def test_issue_token(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", SECRET)
    result = CliRunner().invoke(cli, ["issue-token", "7", "ada@example.com"])
    assert result.exit_code == 0, result.output

    claims = verify_token(Settings(_env_file=None), result.output.strip())
    assert claims.user_id == 7
    assert claims.email == "ada@example.com"


def test_commands_refuse_to_run_without_secret(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    result = CliRunner().invoke(cli, ["issue-token", "7", "ada@example.com"])
    assert result.exit_code == 1
    assert "jwt_secret" in result.output.lower()
