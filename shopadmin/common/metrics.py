"""Prometheus metric definitions for admin commands.

The CLI is short-lived, so metrics live on a dedicated registry and are
flushed to a node-exporter textfile instead of being scraped.
"""

from prometheus_client import CollectorRegistry, Counter, write_to_textfile


registry = CollectorRegistry()

customers_deleted_total = Counter(
    "customers_deleted_total", "Customers deleted by the admin CLI", ["service"], registry=registry
)
payments_detached_total = Counter(
    "payments_detached_total",
    "Payments whose customer linkage was reset to unassigned",
    ["service"],
    registry=registry,
)
payments_deleted_total = Counter(
    "payments_deleted_total", "Payments deleted together with their customer", ["service"], registry=registry
)
payment_batch_failures_total = Counter(
    "payment_batch_failures_total",
    "Per-payment store calls that failed during post-delete handling",
    ["service", "action"],
    registry=registry,
)
workflow_errors_total = Counter(
    "workflow_errors_total", "Terminal workflow errors by kind", ["service", "error"], registry=registry
)


def flush_metrics(path: str) -> None:
    """Write all registered metrics to `path` when one is configured."""

    if not path:
        return
    write_to_textfile(path, registry)
