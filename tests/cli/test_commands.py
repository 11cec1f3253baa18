"""CLI command tests using Click CliRunner.

Strategy: point config.yaml in a temp cwd at a temp database, and patch the
LLM factory where a command would otherwise reach the network.
"""

import json
from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def cli_db(tmp_path, monkeypatch):
    """Temp cwd whose config.yaml points at a temp database."""
    db_path = tmp_path / "cli.db"
    (tmp_path / "config.yaml").write_text(f"paths:\n  db_path: {db_path}\n")
    monkeypatch.chdir(tmp_path)
    return db_path


@pytest.fixture
def account(cli_db):
    from web.user_store import create_user, init_db

    init_db(cli_db)
    return create_user("me@test.com", "hash", db_path=cli_db)


def test_db_init(runner, cli_db):
    result = runner.invoke(cli, ["db", "init"])
    assert result.exit_code == 0
    assert cli_db.exists()


def test_checkin(runner, cli_db, account):
    from mood import MoodStore

    result = runner.invoke(cli, ["checkin", "-e", "me@test.com", "-f", "Happy", "-d", "Sunny"])
    assert result.exit_code == 0
    assert "Checked in" in result.output

    (record,) = MoodStore(cli_db).list_for_user(account["id"])
    assert record.feeling == "Happy"
    assert record.description == "Sunny"


def test_checkin_unknown_account(runner, cli_db):
    result = runner.invoke(cli, ["checkin", "-e", "ghost@test.com", "-f", "Happy"])
    assert result.exit_code == 1


def test_week_summary(runner, cli_db, account):
    from mood import MoodStore

    store = MoodStore(cli_db)
    store.create(account["id"], "Happy", created_at=datetime(2024, 5, 13, 9, 0))
    store.create(account["id"], "Sad", created_at=datetime(2024, 5, 15, 9, 0))

    result = runner.invoke(cli, ["week", "-e", "me@test.com", "-w", "2024-05-15"])
    assert result.exit_code == 0
    assert "2024-05-13" in result.output
    assert "Happy" in result.output
    assert "Sad" in result.output


def test_week_invalid_date(runner, cli_db, account):
    result = runner.invoke(cli, ["week", "-e", "me@test.com", "-w", "someday"])
    assert result.exit_code == 2
    assert "Invalid weekStart date" in result.output


def test_week_insight(runner, cli_db, account):
    from mood import MoodStore

    MoodStore(cli_db).create(account["id"], "Calm", created_at=datetime(2024, 5, 14, 8, 0))
    provider = MagicMock()
    provider.generate.return_value = json.dumps(
        {"insight": "Calm carried you.", "tryThis": "Take a short walk."}
    )

    with patch("llm.create_llm_provider", return_value=provider):
        result = runner.invoke(cli, ["week", "-e", "me@test.com", "-w", "2024-05-15", "--insight"])

    assert result.exit_code == 0
    assert "Calm carried you." in result.output
    assert "Take a short walk." in result.output
    provider.generate.assert_called_once()


def test_week_insight_upstream_error(runner, cli_db, account):
    from llm import LLMUpstreamError
    from mood import MoodStore

    MoodStore(cli_db).create(account["id"], "Calm", created_at=datetime(2024, 5, 14, 8, 0))
    provider = MagicMock()
    provider.generate.side_effect = LLMUpstreamError("boom", status_code=503, body="overloaded")

    with patch("llm.create_llm_provider", return_value=provider):
        result = runner.invoke(cli, ["week", "-e", "me@test.com", "-w", "2024-05-15", "--insight"])

    assert result.exit_code == 1
    assert "overloaded" in result.output


def test_serve_invokes_uvicorn(runner, cli_db):
    with patch("uvicorn.run") as mock_run:
        result = runner.invoke(cli, ["serve", "--port", "4000"])
    assert result.exit_code == 0
    assert mock_run.call_args.kwargs["port"] == 4000


def test_week_insight_empty_week_needs_no_key(runner, cli_db, account, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    result = runner.invoke(cli, ["week", "-e", "me@test.com", "-w", "2024-05-15", "--insight"])
    assert result.exit_code == 0
    assert "No check-ins yet" in result.output


def test_week_insight_missing_key(runner, cli_db, account, monkeypatch):
    from mood import MoodStore

    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    MoodStore(cli_db).create(account["id"], "Calm", created_at=datetime(2024, 5, 14, 8, 0))
    result = runner.invoke(cli, ["week", "-e", "me@test.com", "-w", "2024-05-15", "--insight"])
    assert result.exit_code == 1
    assert "OPENAI_API_KEY" in result.output
