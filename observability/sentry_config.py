"""
Sentry error tracking integration.
"""

import logging
import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from .logging import get_logger, get_correlation_id

logger = get_logger(__name__)


def init_sentry() -> bool:
    """
    Initialize Sentry error tracking.

    Environment variables:
    - SENTRY_DSN: Sentry Data Source Name (required)
    - SENTRY_ENVIRONMENT: Environment name (development, staging, production)
    - SENTRY_RELEASE: Release version (e.g., git commit SHA)
    - SENTRY_TRACES_SAMPLE_RATE: Percentage of transactions to trace (0.0-1.0)
    - SENTRY_ENABLE: Set to "false" to disable Sentry (useful for local dev)

    Returns True when Sentry was initialized.
    """
    sentry_dsn = os.getenv("SENTRY_DSN")
    sentry_enable = os.getenv("SENTRY_ENABLE", "true").lower() == "true"

    if not sentry_dsn or not sentry_enable:
        logger.info("Sentry is disabled (SENTRY_DSN not set or SENTRY_ENABLE=false)")
        return False

    environment = os.getenv("SENTRY_ENVIRONMENT") or os.getenv("ENVIRONMENT", "development")
    release = os.getenv("SENTRY_RELEASE") or "unknown"

    is_production = environment == "production"
    traces_sample_rate = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.2" if is_production else "0.0"))

    sentry_sdk.init(
        dsn=sentry_dsn,
        environment=environment,
        release=f"equipment-storefront-backend@{release}",
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        traces_sample_rate=traces_sample_rate,
        send_default_pii=False,
        attach_stacktrace=True,
        before_send=before_send_hook,
    )

    logger.info(
        "Sentry initialized",
        extra={"environment": environment, "release": release, "traces_sample_rate": traces_sample_rate},
    )
    return True


def before_send_hook(event, hint):
    """Drop client disconnects and tag events with the correlation ID."""
    if "exception" in event:
        for exc_value in event["exception"].get("values", []):
            if "client disconnected" in str(exc_value.get("value", "")).lower():
                return None

    correlation_id = get_correlation_id()
    if correlation_id:
        event.setdefault("tags", {})["correlation_id"] = correlation_id

    return event
