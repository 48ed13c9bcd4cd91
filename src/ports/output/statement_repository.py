"""Output port for the remote statement-execution API."""
from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from src.domain.value_objects.statement_request import StatementRequest


class StatementRepository(Protocol):
  """Interface over the warehouse's statement-execution endpoints.

  Implementations return the decoded JSON payloads untouched and raise
  UpstreamError for any non-success response.
  """

  def submit_statement(self, request: StatementRequest) -> Dict[str, Any]:
    """Submit a statement for execution.

    Args:
      request: Statement text, warehouse and inline wait hint

    Returns:
      The submit response, possibly already carrying inline rows

    Raises:
      UpstreamError: If the remote API rejects the call
    """
    ...

  def get_statement(self, statement_id: str) -> Dict[str, Any]:
    """Fetch the current status (and inline result, if any) of a statement."""
    ...

  def get_result_chunk(self, statement_id: str, chunk_index: int) -> Dict[str, Any]:
    """Fetch one page of result rows for a succeeded statement."""
    ...


class UpstreamError(Exception):
  """Raised when the statement-execution API answers with a non-success status."""

  def __init__(self, status_code: Optional[int], body: str):
    if status_code is None:
      message = f'Databricks request failed: {body}'
    else:
      message = f'Databricks {status_code}: {body}'
    super().__init__(message)
    self.status_code = status_code
    self.body = body
