"""
Prometheus Metrics for account lifecycle jobs

Exposes metrics for:
- Job runs by outcome
- Job duration

Metrics are exported at the /metrics endpoint.
"""

import logging
import time
from contextlib import contextmanager

from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)


# Total job invocations
account_job_runs_total = Counter(
    'account_job_runs_total',
    'Total number of account job invocations',
    ['job', 'outcome']  # outcome: 'success', 'failure' or 'invalid'
)

# Wall-clock duration of one invocation
account_job_duration_seconds = Histogram(
    'account_job_duration_seconds',
    'Account job execution time in seconds',
    ['job'],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0, 300.0)
)


def record_job_outcome(job: str, outcome: str):
    """Increment the run counter for a finished job."""
    account_job_runs_total.labels(job=job, outcome=outcome).inc()


@contextmanager
def track_job_duration(job: str):
    """Observe the duration of the wrapped block, whatever its outcome."""
    start = time.perf_counter()
    try:
        yield
    finally:
        account_job_duration_seconds.labels(job=job).observe(time.perf_counter() - start)
