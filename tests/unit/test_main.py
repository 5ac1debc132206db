"""Unit tests for the entry point helpers."""

from __future__ import annotations

from pathlib import Path

from kaspabot.config import AppConfig, DiscordConfig, ProvidersConfig
from kaspabot.main import build_providers, parse_args, resolve_logo_path, run


class TestParseArgs:
    def test_defaults(self) -> None:
        args = parse_args([])
        assert args.config_dir == "configs"
        assert args.log_level is None

    def test_overrides(self) -> None:
        args = parse_args(["--config-dir", "/etc/kaspabot", "--log-level", "DEBUG"])
        assert args.config_dir == "/etc/kaspabot"
        assert args.log_level == "DEBUG"


class TestAssembly:
    async def test_build_providers(self) -> None:
        config = AppConfig(
            providers=ProvidersConfig(
                kaspa_api_url="https://kaspa.test/",
                coingecko_api_url="https://gecko.test/api/v3/",
                coingecko_coin_id="kaspa",
                request_timeout_s=3.0,
            )
        )

        kaspa, coingecko = build_providers(config)
        assert kaspa.http.url_for("info/price") == "https://kaspa.test/info/price"
        assert coingecko.http.url_for("coins/markets") == "https://gecko.test/api/v3/coins/markets"
        assert coingecko.coin_id == "kaspa"
        await kaspa.close()
        await coingecko.close()

    def test_resolve_logo_path(self, tmp_path: Path) -> None:
        logo = tmp_path / "kaspa_logo.png"
        config = AppConfig(discord=DiscordConfig(logo_path=str(logo)))
        assert resolve_logo_path(config) is None

        logo.write_bytes(b"png")
        assert resolve_logo_path(config) == logo

    async def test_run_without_token_returns(self) -> None:
        config = AppConfig(discord=DiscordConfig(bot_token=""))
        await run(config)
