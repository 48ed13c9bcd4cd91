"""Implementation of the query service port."""
from __future__ import annotations

from typing import Any, Dict

from src.application.commands.submit_query_command import SubmitQueryCommand
from src.application.handlers.submit_query_handler import SubmitQueryHandler
from src.ports.input.query_service import QueryService


class QueryServiceImpl(QueryService):
  """Concrete implementation that delegates to the relay handler."""

  def __init__(self, submit_handler: SubmitQueryHandler) -> None:
    self._submit_handler = submit_handler

  async def submit_query(self, command: SubmitQueryCommand) -> Dict[str, Any]:
    return await self._submit_handler.handle(command)
