"""
Sentry Error Tracking Configuration

Features:
- Automatic error capture with full stack traces
- Performance tracing for each job invocation
- Account context tracking (account_id)
- Environment separation (dev/staging/prod)

Usage:
    from src.account_jobs.monitoring.sentry_config import init_sentry
    
    # At application startup
    init_sentry(settings)
"""

import logging

import sentry_sdk
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

logger = logging.getLogger(__name__)


def init_sentry(settings) -> bool:
    """
    Initialize Sentry error tracking.
    
    Should be called at application startup, before any job runs.
    Skipped when SENTRY_DSN is empty (local development and tests).
    
    Returns:
        True if Sentry was initialized
    """
    if not settings.SENTRY_DSN:
        logger.info("Sentry DSN not configured, skipping initialization")
        return False
    
    environment = settings.ENVIRONMENT
    
    if environment == "production":
        traces_sample_rate = settings.SENTRY_TRACES_SAMPLE_RATE
    elif environment == "staging":
        traces_sample_rate = max(settings.SENTRY_TRACES_SAMPLE_RATE, 0.5)
    else:
        traces_sample_rate = 1.0
    
    # Info and above as breadcrumbs, errors as events
    logging_integration = LoggingIntegration(
        level=logging.INFO,
        event_level=logging.ERROR
    )
    
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=environment,
        traces_sample_rate=traces_sample_rate,
        release=settings.APP_VERSION,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            StarletteIntegration(transaction_style="endpoint"),
            AsyncioIntegration(),
            logging_integration,
        ],
        before_send=before_send_filter,
        attach_stacktrace=True,
        send_default_pii=False,
        max_breadcrumbs=50,
        debug=environment == "development",
    )
    
    logger.info(
        f"Sentry initialized: environment={environment}, "
        f"traces_sample_rate={traces_sample_rate}"
    )
    return True


def before_send_filter(event, hint):
    """
    Filter events before sending to Sentry.
    
    Drops health check noise and expected validation errors, and tags
    every event with its source.
    """
    if event.get("request"):
        url = event["request"].get("url", "")
        if "/health" in url or "/metrics" in url:
            return None
    
    if "exception" in event:
        for exception in event["exception"].get("values", []):
            if exception.get("type", "") in ("InvalidJobInputError", "RequestValidationError"):
                return None
    
    event.setdefault("tags", {})
    event["tags"]["source"] = "account-jobs"
    
    return event


def set_account_context(account_id: str):
    """Tag subsequent Sentry events with the account being processed."""
    sentry_sdk.set_tag("account_id", account_id)
    sentry_sdk.set_context("account", {"id": account_id})


def add_breadcrumb(category: str, message: str, level: str = "info", **data):
    """
    Add breadcrumb for debugging context.
    
    Usage:
        add_breadcrumb("deletion", "Events deleted", account_id=user_id, events=3)
    """
    sentry_sdk.add_breadcrumb(
        category=category,
        message=message,
        level=level,
        data=data,
    )


def capture_exception(error: Exception, **context):
    """
    Manually capture an exception to Sentry.
    
    Args:
        error: Exception to capture
        **context: Additional context attached as extras
    """
    with sentry_sdk.new_scope() as scope:
        for key, value in context.items():
            scope.set_extra(key, value)
        
        sentry_sdk.capture_exception(error)


def start_transaction(name: str, op: str = "function"):
    """
    Start a performance transaction for tracing.
    
    Usage:
        with start_transaction("exportData", op="function.job.exportData"):
            ...
    """
    return sentry_sdk.start_transaction(name=name, op=op)
