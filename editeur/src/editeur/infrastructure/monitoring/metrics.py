"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Gauge, Histogram

# ============================================================
# HTTP Metrics
# ============================================================

http_requests_total = Counter(
    "editeur_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "editeur_http_request_duration_seconds",
    "HTTP request duration",
    ["method", "endpoint"],
)

# ============================================================
# Ledger Metrics
# ============================================================

ledger_accounts = Gauge(
    "editeur_ledger_accounts",
    "Registered payer accounts",
)

ledger_operations_total = Counter(
    "editeur_ledger_operations_total",
    "Credit ledger mutations",
    ["operation", "result"],
)

# ============================================================
# Top-up Metrics
# ============================================================

topup_confirmations_total = Counter(
    "editeur_topup_confirmations_total",
    "Top-up confirmation attempts",
    ["result"],
)

# ============================================================
# Publish Metrics
# ============================================================

publish_total = Counter(
    "editeur_publish_total",
    "Publish attempts by outcome and failing step",
    ["result", "step"],
)

publish_duration_seconds = Histogram(
    "editeur_publish_duration_seconds",
    "Duration of publish calls after the fee commitment point",
    buckets=(1.0, 2.5, 5.0, 10.0, 20.0, 30.0, 60.0, 120.0, 300.0),
)

# ============================================================
# External Call Metrics
# ============================================================

external_calls_total = Counter(
    "editeur_external_calls_total",
    "Calls to chain A, chain B and the storage network",
    ["target", "operation", "status"],
)
