"""CLI entrypoint for the query relay."""
from __future__ import annotations

import sys
from pathlib import Path

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from entrypoints.api_server import serve
from src.adapters.input.cli.cli_adapter import CLIAdapter
from src.adapters.presentation.json_presenter import JsonPresenter
from src.common.config import get_settings
from src.common.container import create_query_service
from src.common.logging_setup import configure_logging


def main() -> None:
  settings = get_settings()
  configure_logging(settings.log_level)
  query_service = create_query_service(settings)
  CLIAdapter(query_service, JsonPresenter(), serve=serve, default_port=settings.port).run()


if __name__ == '__main__':
  main()
