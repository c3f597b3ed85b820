"""
Prometheus metrics for payment service monitoring.

Tracks:
- Payment outcomes by gateway
- Payment amounts
- Fraud check decisions and scores
- Refund outcomes
- Audit events
- Notification delivery attempts and retry queue depth
"""
from prometheus_client import Counter, Gauge, Histogram

# Payment metrics
payment_requests_total = Counter(
    "payment_requests_total",
    "Total number of payment requests",
    ["gateway", "status"],  # status: success, failed, fraud_rejected
)

payment_amount = Histogram(
    "payment_amount",
    "Charged payment amounts",
    buckets=(10, 50, 100, 500, 1000, 2500, 5000, 10000, 25000),
)

refund_requests_total = Counter(
    "refund_requests_total",
    "Total number of refund requests",
    ["gateway", "status"],
)

# Fraud metrics
fraud_checks_total = Counter(
    "fraud_checks_total",
    "Total fraud checks",
    ["decision"],  # approve, review, reject
)

fraud_risk_score = Histogram(
    "fraud_risk_score",
    "Distribution of fraud risk scores",
    buckets=(0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0),
)

# Audit metrics
audit_events_total = Counter(
    "audit_events_total",
    "Total audit events stored",
    ["event_type", "outcome"],
)

# Notification metrics
notification_attempts_total = Counter(
    "notification_attempts_total",
    "Total notification delivery attempts",
    ["channel", "status"],  # success, failed, error
)

notification_queue_depth = Gauge(
    "notification_queue_depth",
    "Number of notifications waiting in the retry queue",
)
