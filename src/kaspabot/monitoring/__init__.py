"""Prometheus metrics for KaspaBot."""

from __future__ import annotations

from kaspabot.monitoring.metrics import MetricsCollector

__all__ = ["MetricsCollector"]
