"""API server entrypoint."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import uvicorn

from src.adapters.input.api.fastapi_adapter import FastAPIAdapter
from src.common.config import Settings, get_settings
from src.common.container import create_origin_policy, create_query_service, create_statement_repository
from src.common.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def get_app(settings: Optional[Settings] = None):
  settings = settings or get_settings()
  repository = create_statement_repository(settings)
  query_service = create_query_service(settings, repository=repository)
  adapter = FastAPIAdapter(query_service, create_origin_policy(settings), on_shutdown=repository.close)
  return adapter.app


def serve(host: str = '0.0.0.0', port: Optional[int] = None) -> None:
  settings = get_settings()
  port = port or settings.port
  app = get_app(settings)
  logger.info('Query relay listening on %s:%s', host, port)
  uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())


def main() -> None:
  configure_logging(get_settings().log_level)
  serve()


if __name__ == '__main__':
  main()
