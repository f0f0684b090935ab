"""Tests for the command line interface."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

import main
from config import IncapsulaConfig
from utils.incapsula.incapsula_exceptions import IncapsulaServiceError
from utils.incapsula.incapsula_types import SubAccount, SubAccountPayload


@pytest.fixture
def mock_api():
    api = MagicMock()
    api.__aenter__.return_value = api
    api.__aexit__.return_value = False
    api.subaccount.add_sub_account = AsyncMock()
    api.subaccount.get_sub_account = AsyncMock()
    api.subaccount.list_sub_accounts = AsyncMock()
    api.subaccount.delete_sub_account = AsyncMock(return_value=None)
    return api


@pytest.fixture
def runner(mock_api):
    config = IncapsulaConfig(API_ID="12345", API_KEY="secret-key")
    with patch.object(main, "get_config_sync", return_value=config), \
            patch.object(main.IncapsulaAPI, "from_config", return_value=mock_api):
        yield CliRunner()


class TestCli:

    def test_add(self, runner, mock_api):
        mock_api.subaccount.add_sub_account.return_value = SubAccount(
            sub_account_id=7, sub_account_name="x", parent_id=100
        )

        result = runner.invoke(main.cli, ["add", "x", "--parent-id", "100", "--ref-id", "r1"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"sub_account_id": 7, "sub_account_name": "x", "parent_id": 100}
        payload = mock_api.subaccount.add_sub_account.call_args.args[0]
        assert payload == SubAccountPayload("x", ref_id="r1", parent_id=100)

    def test_get_found(self, runner, mock_api):
        mock_api.subaccount.get_sub_account.return_value = SubAccount(sub_account_id=55, sub_account_name="s")

        result = runner.invoke(main.cli, ["get", "55", "--parent-id", "100"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["sub_account_id"] == 55
        mock_api.subaccount.get_sub_account.assert_awaited_once_with(100, 55)

    def test_get_not_found(self, runner, mock_api):
        mock_api.subaccount.get_sub_account.return_value = None

        result = runner.invoke(main.cli, ["get", "55"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_list(self, runner, mock_api):
        mock_api.subaccount.list_sub_accounts.return_value = [
            SubAccount(sub_account_id=1, sub_account_name="a"),
            SubAccount(sub_account_id=2, sub_account_name="b"),
        ]

        result = runner.invoke(main.cli, ["list", "--parent-id", "100"])

        assert result.exit_code == 0, result.output
        assert [s["sub_account_id"] for s in json.loads(result.output)] == [1, 2]

    def test_delete(self, runner, mock_api):
        result = runner.invoke(main.cli, ["delete", "42"])

        assert result.exit_code == 0, result.output
        mock_api.subaccount.delete_sub_account.assert_awaited_once_with(42)

    def test_service_error_exits_nonzero(self, runner, mock_api):
        body = '{"res":1,"res_message":"Subaccount not found"}'
        mock_api.subaccount.delete_sub_account.side_effect = IncapsulaServiceError(
            f"Error from Incapsula service when deleting subaccount id: 42: {body}", res=1, body=body
        )

        result = runner.invoke(main.cli, ["delete", "42"])

        assert result.exit_code == 1
        assert "Subaccount not found" in result.output

    def test_invalid_config_exits_nonzero(self, mock_api):
        with patch.object(main, "get_config_sync", side_effect=ValueError("❌ INCAPSULA_API_ID is required")):
            result = CliRunner().invoke(main.cli, ["delete", "42"])

        assert result.exit_code == 1
        assert "INCAPSULA_API_ID" in result.output


class TestLogLevel:

    def test_default_comes_from_log_level_env(self, runner, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        monkeypatch.setenv("LOG_LEVEL", "error")

        with patch.object(main, "setup_logging") as setup_logging:
            result = runner.invoke(main.cli, ["delete", "42"])

        assert result.exit_code == 0, result.output
        setup_logging.assert_called_once_with("ERROR")

    def test_debug_env_forces_debug(self, runner, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("LOG_LEVEL", "ERROR")

        with patch.object(main, "setup_logging") as setup_logging:
            result = runner.invoke(main.cli, ["delete", "42"])

        assert result.exit_code == 0, result.output
        setup_logging.assert_called_once_with("DEBUG")

    def test_option_overrides_env(self, runner, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")

        with patch.object(main, "setup_logging") as setup_logging:
            result = runner.invoke(main.cli, ["--log-level", "info", "delete", "42"])

        assert result.exit_code == 0, result.output
        setup_logging.assert_called_once_with("INFO")

    def test_unknown_level_is_usage_error(self, runner):
        with patch.object(main, "setup_logging") as setup_logging:
            result = runner.invoke(main.cli, ["--log-level", "FOO", "delete", "42"])

        assert result.exit_code == 2
        assert "FOO" in result.output
        setup_logging.assert_not_called()
