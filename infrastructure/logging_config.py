"""Structured logging for the CDK app.

Synth runs locally or in CI, so logs go to stderr and keep stdout free for
the CDK CLI. Events are rendered as JSON with ISO timestamps.
"""

import logging
import os
import sys
from typing import Any

import structlog


def configure_logging(level: str | None = None) -> None:
  """Configure structlog on top of the standard library logger.

  The level defaults to the LOG_LEVEL environment variable, then INFO.
  """
  log_level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()

  logging.basicConfig(
    format="%(message)s",
    stream=sys.stderr,
    level=getattr(logging, log_level, logging.INFO),
  )

  structlog.configure(
    processors=[
      structlog.stdlib.add_log_level,
      structlog.processors.TimeStamper(fmt="iso"),
      structlog.processors.format_exc_info,
      structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
  )


def get_logger(name: str | None = None) -> Any:
  """Get a structured logger, typically with __name__."""
  return structlog.get_logger(name)
