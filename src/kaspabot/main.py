"""KaspaBot entry point.

Assembles the data providers, command registry, cooldown tracker and
dispatcher from configuration and runs the Discord bot with graceful
shutdown support.
"""

from __future__ import annotations

import argparse
import asyncio
import signal
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from kaspabot.commands import build_registry
from kaspabot.config import AppConfig, load_config
from kaspabot.core.cooldown import CooldownTracker
from kaspabot.core.dispatcher import CommandDispatcher
from kaspabot.discord.bot import KaspaBotDiscord
from kaspabot.discord.context import BotContext
from kaspabot.logging import get_logger, setup_logging
from kaspabot.monitoring.metrics import MetricsCollector
from kaspabot.providers import CoinGeckoProvider, JsonHttpClient, KaspaApiProvider


def _package_version() -> str:
    try:
        return version("kaspabot")
    except PackageNotFoundError:
        return "0.0.0"


def build_providers(
    config: AppConfig, metrics: MetricsCollector | None = None
) -> tuple[KaspaApiProvider, CoinGeckoProvider]:
    """Create the Kaspa API and CoinGecko providers.

    Args:
        config: Application configuration.
        metrics: Collector for upstream request counts.

    Returns:
        (kaspa, coingecko) providers, each owning its HTTP session.
    """
    providers = config.providers
    kaspa = KaspaApiProvider(
        JsonHttpClient(
            "kaspa",
            providers.kaspa_api_url,
            timeout_s=providers.request_timeout_s,
            user_agent=providers.user_agent,
            metrics=metrics,
        )
    )
    coingecko = CoinGeckoProvider(
        JsonHttpClient(
            "coingecko",
            providers.coingecko_api_url,
            timeout_s=providers.request_timeout_s,
            user_agent=providers.user_agent,
            metrics=metrics,
        ),
        coin_id=providers.coingecko_coin_id,
        target_coin_id=providers.coingecko_target_coin_id,
    )
    return kaspa, coingecko


def resolve_logo_path(config: AppConfig) -> Path | None:
    """Return the logo file if it exists on disk."""
    path = Path(config.discord.logo_path)
    return path if path.is_file() else None


async def run(config: AppConfig) -> None:
    """Run the bot until interrupted.

    Args:
        config: Validated application configuration.
    """
    logger = get_logger("main")
    logger.info("kaspabot_starting", version=_package_version())

    if not config.discord.bot_token:
        logger.error("missing_bot_token", msg="Set DISCORD_BOT_TOKEN or KASPABOT_DISCORD__BOT_TOKEN. Exiting.")
        return

    metrics = MetricsCollector()
    kaspa, coingecko = build_providers(config, metrics)
    registry = build_registry(kaspa, coingecko, config.commands)
    cooldowns = CooldownTracker(window=config.commands.cooldown_seconds)
    dispatcher = CommandDispatcher(registry, cooldowns, metrics=metrics)
    metrics.set_system_info(version=_package_version(), commands=[s.name for s in registry.specs()])

    logo_path = resolve_logo_path(config)
    if logo_path is None:
        logger.warning("logo_missing", path=config.discord.logo_path)

    bot_context = BotContext(config=config, dispatcher=dispatcher, logo_path=logo_path)
    discord_bot = KaspaBotDiscord(bot_context=bot_context, guild_id=config.discord.guild_id)
    discord_task: asyncio.Task[None] | None = None

    # Setup shutdown event
    shutdown_event = asyncio.Event()

    def _signal_handler() -> None:
        logger.info("shutdown_signal_received")
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _signal_handler)

    # Provider sessions are closed on exit
    async with kaspa.http, coingecko.http:
        try:
            if config.health.enabled:
                metrics.start_server(port=config.health.port, host=config.health.host)
                logger.info("health_server_started", host=config.health.host, port=config.health.port)

            discord_task = asyncio.create_task(discord_bot.start_bot())
            discord_task.add_done_callback(lambda _task: shutdown_event.set())
            logger.info("discord_bot_started", commands=len(registry))

            # Wait for shutdown signal or the bot exiting on its own
            await shutdown_event.wait()
            if discord_task.done() and not discord_task.cancelled() and discord_task.exception():
                logger.error("discord_bot_crashed", error=str(discord_task.exception()))

        finally:
            logger.info("kaspabot_shutting_down")

            await discord_bot.close()
            if discord_task is not None and not discord_task.done():
                discord_task.cancel()
                try:
                    await discord_task
                except asyncio.CancelledError:
                    pass
            logger.info("discord_bot_stopped")

            cooldowns.close()

    logger.info("kaspabot_stopped")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description="KaspaBot - Discord bot for Kaspa network and market data",
    )
    parser.add_argument(
        "--config-dir",
        default="configs",
        help="Path to configuration directory (default: configs)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Log level override (default: from config)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    # Load configuration
    config = load_config(config_dir=args.config_dir)

    if args.log_level is not None:
        config.system.log_level = args.log_level

    # Setup logging
    setup_logging(log_level=config.system.log_level, json_format=config.system.json_logs)

    # Run the bot
    asyncio.run(run(config))


if __name__ == "__main__":
    main()
