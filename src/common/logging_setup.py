"""Logging setup shared by the entrypoints."""
from __future__ import annotations

import logging

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


def configure_logging(level: str = 'INFO') -> None:
  logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
  # urllib3 logs every pooled connection at DEBUG
  logging.getLogger('urllib3').setLevel(logging.WARNING)
