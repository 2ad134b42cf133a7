"""Tests for the QQ Bot onboarding CLI"""

import json

import pytest
from typer.testing import CliRunner

from openclaw_qqbot.cli import qqbot_app

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep the host environment and any local .env out of CLI runs"""
    monkeypatch.delenv("QQBOT_APP_ID", raising=False)
    monkeypatch.delenv("QQBOT_CLIENT_SECRET", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "openclaw.json"
    path.write_text(json.dumps({
        "gateway": {"port": 18789},
        "channels": {"qqbot": {"name": "main", "appId": "1", "clientSecret": "x"}},
    }))
    return path


def test_status_json(config_path):
    result = runner.invoke(qqbot_app, ["status", "--config", str(config_path), "--json"])

    assert result.exit_code == 0
    assert '"configured": true' in result.output
    assert '"quickstartScore": 1' in result.output


def test_status_table_unconfigured(tmp_path):
    result = runner.invoke(qqbot_app, ["status", "--config", str(tmp_path / "missing.json")])

    assert result.exit_code == 0
    assert "qqbot" in result.output
    assert "no" in result.output


def test_status_invalid_config(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{channels: ")

    result = runner.invoke(qqbot_app, ["status", "--config", str(path)])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_configure_writes_credentials(tmp_path):
    path = tmp_path / "openclaw.json"

    result = runner.invoke(
        qqbot_app,
        ["configure", "--config", str(path)],
        input="102146862\ns3cr3t\n",
    )

    assert result.exit_code == 0, result.output
    written = json.loads(path.read_text(encoding="utf-8"))
    assert written["channels"]["qqbot"] == {
        "enabled": True,
        "appId": "102146862",
        "clientSecret": "s3cr3t",
    }


def test_configure_account_override(config_path):
    result = runner.invoke(
        qqbot_app,
        ["configure", "--config", str(config_path), "--account", "teamA"],
        input="2\ny\n",
    )

    assert result.exit_code == 0, result.output
    qqbot = json.loads(config_path.read_text())["channels"]["qqbot"]
    assert qqbot["accounts"] == {"teamA": {"enabled": True, "appId": "2", "clientSecret": "y"}}
    assert qqbot["appId"] == "1"
    assert qqbot["name"] == "main"


def test_configure_keep_existing_does_not_save(config_path):
    before = config_path.read_text()

    result = runner.invoke(qqbot_app, ["configure", "--config", str(config_path)], input="y\n")

    assert result.exit_code == 0, result.output
    assert "No changes" in result.output
    assert config_path.read_text() == before
    assert not config_path.with_name("openclaw.json.bak1").exists()


def test_disable_persists(config_path):
    result = runner.invoke(qqbot_app, ["disable", "--config", str(config_path)])

    assert result.exit_code == 0
    written = json.loads(config_path.read_text())
    assert written["channels"]["qqbot"]["enabled"] is False
    assert written["channels"]["qqbot"]["clientSecret"] == "x"
    assert written["gateway"] == {"port": 18789}


def test_disable_keeps_env_reference(tmp_path, monkeypatch):
    monkeypatch.setenv("MY_QQ_SECRET", "real-secret-value")
    path = tmp_path / "openclaw.json"
    path.write_text(json.dumps({
        "channels": {"qqbot": {"appId": "1", "clientSecret": "${MY_QQ_SECRET}"}},
    }))

    result = runner.invoke(qqbot_app, ["disable", "--config", str(path)])

    assert result.exit_code == 0, result.output
    text = path.read_text()
    assert "real-secret-value" not in text
    assert json.loads(text)["channels"]["qqbot"] == {
        "enabled": False,
        "appId": "1",
        "clientSecret": "${MY_QQ_SECRET}",
    }


def test_status_with_pairing_dm_policy(tmp_path):
    path = tmp_path / "openclaw.json"
    path.write_text(json.dumps({
        "channels": {"qqbot": {"appId": "1", "clientSecret": "x", "dmPolicy": "pairing"}},
    }))

    result = runner.invoke(qqbot_app, ["status", "--config", str(path), "--json"])

    assert result.exit_code == 0, result.output
    assert '"configured": true' in result.output
