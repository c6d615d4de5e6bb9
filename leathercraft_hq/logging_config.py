"""Logging setup shared by the Dash app, the WSGI entry point and the scripts."""

import logging
import logging.config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging(level="INFO"):
    """Configure a single console handler. Safe to call more than once."""
    global _configured
    if _configured:
        logging.getLogger().setLevel(level)
        return
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            # supabase/httpx log every request at INFO
            "httpx": {"level": "WARNING"},
            "hpack": {"level": "WARNING"},
        },
    })
    _configured = True
