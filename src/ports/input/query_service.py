"""Input port defining the query relay contract."""
from __future__ import annotations

from typing import Any, Dict, Protocol

from src.application.commands.submit_query_command import SubmitQueryCommand


class QueryService(Protocol):
  async def submit_query(self, command: SubmitQueryCommand) -> Dict[str, Any]:
    ...
