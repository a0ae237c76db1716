"""Tests for the `efris` CLI and config persistence."""

import json

import httpx
import pytest

from efris.client import AsyncEFRIS
from efris.config import ClientConfig, load_config, save_config
from conftest import DEVICE_NO, TIN, FakeEFRISServer

click_testing = pytest.importorskip("click.testing")
pytest.importorskip("rich")


class TestConfigFile:
    def test_save_and_load(self, tmp_path) -> None:
        path = tmp_path / "efris" / "config.json"
        save_config(ClientConfig(tin=TIN, device_no=DEVICE_NO, private_key_path="/keys/taxpayer.pfx"), path)

        loaded = load_config(path)
        assert loaded.tin == TIN
        assert loaded.private_key_path == "/keys/taxpayer.pfx"
        assert "private_key_password" not in json.loads(path.read_text())

    def test_missing_file(self, tmp_path) -> None:
        assert load_config(tmp_path / "missing.json") is None

    def test_corrupt_file(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert load_config(path) is None

        path.write_text(json.dumps({"tin": TIN}))
        assert load_config(path) is None


@pytest.fixture
def cli_server(private_key, monkeypatch) -> FakeEFRISServer:
    import efris.cli.main as cli_main

    server = FakeEFRISServer(private_key.public_key())
    monkeypatch.setattr(cli_main, "_get_client", lambda: AsyncEFRIS(
        tin=TIN, device_no=DEVICE_NO, private_key=private_key, transport=httpx.MockTransport(server),
    ))
    return server


class TestCommands:
    def test_help(self) -> None:
        from efris.cli.main import main

        result = click_testing.CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "handshake" in result.output

    def test_send_json_output(self, cli_server) -> None:
        from efris.cli.main import main

        cli_server.reply("T108", {"invoiceNo": "A001"})
        result = click_testing.CliRunner().invoke(
            main, ["send", "T108", "--data", '{"invoiceNo": "A001"}', "--no-encrypt", "--json"],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["data"] == {"invoiceNo": "A001"}
        assert cli_server.bootstrap_calls == 0

    def test_handshake(self, cli_server) -> None:
        from efris.cli.main import main

        result = click_testing.CliRunner().invoke(main, ["handshake"])
        assert result.exit_code == 0, result.output
        assert "128-bit" in result.output
        assert cli_server.bootstrap_calls == 1

    def test_handshake_rejected(self, cli_server) -> None:
        from efris.cli.main import main

        cli_server.key_exchange_code = "2099"
        result = click_testing.CliRunner().invoke(main, ["handshake"])
        assert result.exit_code == 1
        assert "2099" in result.output

    def test_invoice_get(self, cli_server) -> None:
        from efris.cli.main import main

        cli_server.reply("T108", {"basicInformation": {"invoiceNo": "A001"}}, encrypted=True)
        result = click_testing.CliRunner().invoke(main, ["invoice", "get", "A001", "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["data"]["basicInformation"]["invoiceNo"] == "A001"

    def test_send_rejects_invalid_json(self, cli_server) -> None:
        from efris.cli.main import main

        result = click_testing.CliRunner().invoke(main, ["send", "T108", "--data", "{invoiceNo: A001}"])

        assert result.exit_code == 2
        assert "not valid JSON" in result.output
        assert cli_server.requests == []
