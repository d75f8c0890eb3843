"""
Monitoring and observability integrations.

Provides:
- Sentry error tracking and tracing
- Prometheus job metrics
"""

from .metrics import (
    account_job_runs_total,
    account_job_duration_seconds,
    record_job_outcome,
    track_job_duration,
)
from .sentry_config import (
    add_breadcrumb,
    init_sentry,
    capture_exception,
    set_account_context,
    start_transaction,
)

__all__ = [
    "account_job_runs_total",
    "account_job_duration_seconds",
    "record_job_outcome",
    "track_job_duration",
    "add_breadcrumb",
    "init_sentry",
    "capture_exception",
    "set_account_context",
    "start_transaction",
]
