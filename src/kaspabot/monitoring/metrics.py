"""Prometheus metrics for KaspaBot command handling."""

from __future__ import annotations

from collections.abc import Callable

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
)


class MetricsCollector:
    """Central Prometheus metrics registry for KaspaBot.

    Uses a custom CollectorRegistry to avoid global state conflicts,
    making it safe for use in tests and multiple instances.

    Attributes:
        registry: The Prometheus CollectorRegistry used for all metrics.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize all Prometheus metrics.

        Args:
            registry: Custom registry. Creates a new one if not provided.
        """
        self._registry = registry or CollectorRegistry()

        # --- Counters ---
        self.commands_invoked = Counter(
            "kaspabot_commands_invoked_total",
            "Total command invocations received",
            ["command"],
            registry=self._registry,
        )
        self.commands_succeeded = Counter(
            "kaspabot_commands_succeeded_total",
            "Total command invocations answered successfully",
            ["command"],
            registry=self._registry,
        )
        self.commands_failed = Counter(
            "kaspabot_commands_failed_total",
            "Total command invocations that failed",
            ["command", "error"],
            registry=self._registry,
        )
        self.cooldown_rejections = Counter(
            "kaspabot_cooldown_rejections_total",
            "Invocations rejected because the user is on cooldown",
            ["command"],
            registry=self._registry,
        )
        self.upstream_requests = Counter(
            "kaspabot_upstream_requests_total",
            "Upstream HTTP requests by provider and outcome",
            ["provider", "outcome"],
            registry=self._registry,
        )

        # --- Gauges ---
        self.active_cooldowns = Gauge(
            "kaspabot_active_cooldowns",
            "Cooldown entries currently held",
            registry=self._registry,
        )

        # --- Histograms ---
        self.command_latency = Histogram(
            "kaspabot_command_latency_seconds",
            "Time from dispatch to reply delivery",
            ["command"],
            buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
            registry=self._registry,
        )

        # --- Info ---
        self.system_info = Info(
            "kaspabot_system",
            "KaspaBot system information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        """Return the collector registry."""
        return self._registry

    def record_upstream(self, provider: str, ok: bool) -> None:
        """Count one upstream request.

        Args:
            provider: Provider name (e.g. "kaspa", "coingecko").
            ok: Whether the request produced a usable response.
        """
        self.upstream_requests.labels(
            provider=provider, outcome="ok" if ok else "error"
        ).inc()

    def set_system_info(self, version: str, commands: list[str]) -> None:
        """Set system information labels.

        Args:
            version: Application version string.
            commands: Names of the registered commands.
        """
        self.system_info.info(
            {
                "version": version,
                "commands": ",".join(commands),
            }
        )

    def watch_cooldowns(self, size: Callable[[], int]) -> None:
        """Report active cooldown entries by calling ``size`` at scrape time.

        Entries expire from timers, so the count is read on demand.

        Args:
            size: Returns the number of live cooldown entries.
        """
        self.active_cooldowns.set_function(size)

    def start_server(self, port: int = 3000, host: str = "0.0.0.0") -> None:
        """Start the HTTP listener for Prometheus scraping.

        Hosting platforms that expect the process to bind ``PORT`` also use
        it as the liveness check; any path answers 200.

        Args:
            port: Port number to listen on.
            host: Interface to bind.
        """
        start_http_server(port, addr=host, registry=self._registry)
