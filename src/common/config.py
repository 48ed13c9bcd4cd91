"""Application-level configuration utilities."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from os import getenv
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_ORIGIN_SUFFIXES = '.worf.replit.dev,.repl.co'
LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')
LOG_LEVEL_ALIASES = {'WARN': 'WARNING', 'FATAL': 'CRITICAL'}


@dataclass(frozen=True)
class Settings:
  """Immutable application settings loaded from environment variables."""

  databricks_host: str = ''
  databricks_token: str = ''
  warehouse_id: str = ''
  allowed_origins: Tuple[str, ...] = ()
  allowed_origin_suffixes: Tuple[str, ...] = ()
  port: int = 3000
  poll_interval: float = 0.6
  poll_timeout: float = 30.0
  wait_timeout: str = '20s'
  http_timeout: float = 30.0
  log_level: str = 'INFO'

  def missing(self) -> List[str]:
    """Names of the required variables that are not set."""
    required = {
      'DATABRICKS_HOST': self.databricks_host,
      'DATABRICKS_TOKEN': self.databricks_token,
      'DATABRICKS_WAREHOUSE_ID': self.warehouse_id,
    }
    return [name for name, value in required.items() if not value]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  """Load settings from environment variables once per process."""
  env_path = Path(__file__).resolve().parents[2] / '.env'
  if env_path.exists():
    load_dotenv(env_path)
  else:
    load_dotenv()

  settings = Settings(
    databricks_host=normalize_host(getenv('DATABRICKS_HOST', '')),
    databricks_token=getenv('DATABRICKS_TOKEN', ''),
    warehouse_id=getenv('DATABRICKS_WAREHOUSE_ID', ''),
    allowed_origins=split_csv(getenv('ALLOWED_ORIGIN')),
    allowed_origin_suffixes=split_csv(getenv('ALLOWED_ORIGIN_SUFFIXES', DEFAULT_ORIGIN_SUFFIXES)),
    port=_number('PORT', 3000, int),
    poll_interval=_number('POLL_INTERVAL_SECONDS', 0.6, float),
    poll_timeout=_number('POLL_TIMEOUT_SECONDS', 30.0, float),
    wait_timeout=getenv('STATEMENT_WAIT_TIMEOUT') or '20s',
    http_timeout=_number('HTTP_TIMEOUT_SECONDS', 30.0, float),
    log_level=_log_level(getenv('LOG_LEVEL')),
  )

  missing = settings.missing()
  if missing:
    logger.warning('Missing one or more env vars: %s', ', '.join(missing))

  return settings


def normalize_host(host: str) -> str:
  """Strip trailing slashes and default to https when no scheme is given."""
  host = (host or '').strip().rstrip('/')
  if host and '://' not in host:
    host = f'https://{host}'
  return host


def split_csv(value: Optional[str]) -> Tuple[str, ...]:
  if not value:
    return ()
  return tuple(part.strip() for part in value.split(',') if part.strip())


def _number(name: str, default, cast):
  raw = getenv(name)
  if raw is None or raw.strip() == '':
    return default
  try:
    value = cast(raw)
  except ValueError:
    logger.warning('Invalid value %r for %s, using %s', raw, name, default)
    return default
  if value <= 0:
    logger.warning('%s must be positive, using %s', name, default)
    return default
  return value


def _log_level(raw: Optional[str]) -> str:
  """Level name understood by both logging and uvicorn."""
  if raw is None or raw.strip() == '':
    return 'INFO'
  level = raw.strip().upper()
  level = LOG_LEVEL_ALIASES.get(level, level)
  if level not in LOG_LEVELS:
    logger.warning('Invalid value %r for LOG_LEVEL, using INFO', raw)
    return 'INFO'
  return level
