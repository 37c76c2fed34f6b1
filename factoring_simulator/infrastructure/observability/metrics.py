"""Prometheus metrics for monitoring simulation outcomes, volume mix and payouts"""

from decimal import Decimal
from prometheus_client import Counter, Histogram

# Simulation metrics
simulation_counter = Counter(
    "factoring_simulation_total",
    "Total factoring simulations run",
    ["outcome"],  # completed | rejected | failed
)

operation_volume_counter = Counter(
    "factoring_operation_volume_total",
    "Completed simulations by operation volume tier",
    ["volume"],  # small | medium | large
)

net_amount_histogram = Histogram(
    "factoring_net_amount_brl",
    "Net amount paid to the client per simulation",
    buckets=[1_000, 10_000, 50_000, 100_000, 500_000, 1_000_000, 5_000_000],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_simulation(operation_volume: str, net_amount: Decimal) -> None:
    """Record a completed simulation"""
    simulation_counter.labels(outcome="completed").inc()
    operation_volume_counter.labels(volume=operation_volume).inc()
    net_amount_histogram.observe(float(net_amount))


def record_simulation_failure(outcome: str) -> None:
    """Record a rejected (business rule) or failed (unexpected) simulation"""
    simulation_counter.labels(outcome=outcome).inc()
