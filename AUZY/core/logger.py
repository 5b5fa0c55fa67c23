# AUZY/core/logger.py
import logging

from AUZY.core.config import CLOUD_LOGGING, LOG_LEVEL

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging():
    """
    Route application logs to Google Cloud Logging when CLOUD_LOGGING is set,
    otherwise to stderr.
    """
    if CLOUD_LOGGING:
        import google.cloud.logging

        client = google.cloud.logging.Client()
        client.setup_logging(log_level=getattr(logging, LOG_LEVEL, logging.INFO))
    else:
        logging.basicConfig(
            level=getattr(logging, LOG_LEVEL, logging.INFO),
            format=LOG_FORMAT,
        )


def log_to_cloud(category: str, severity: str, message: str, metadata: dict = None):
    logging.log(
        getattr(logging, severity.upper(), logging.INFO),
        f"[{category}] {message}",
        extra={"metadata": metadata or {}}
    )
