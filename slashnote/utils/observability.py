"""Observability configuration with Pydantic Logfire."""

import logging

from slashnote.config import settings

logger = logging.getLogger(__name__)


def setup_logfire() -> bool:
    """Configure Logfire for observability.

    Only activates if LOGFIRE_TOKEN environment variable is set.
    Call this at application startup before interpreting any notes.

    Returns:
        True if Logfire was configured, False otherwise.
    """
    if not settings.logfire_token:
        return False

    try:
        import logfire

        logfire.configure(
            token=settings.logfire_token,
            service_name="slashnote",
            send_to_logfire="if-token-present",
        )
        logfire.instrument_pydantic()
    except Exception as e:
        # Log but don't fail - observability is optional
        logger.warning("Failed to configure Logfire: %s", str(e))
        return False

    return True
