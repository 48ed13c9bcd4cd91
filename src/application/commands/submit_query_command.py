"""Command object representing a SQL statement to relay."""
from __future__ import annotations

from dataclasses import dataclass


class InvalidRequestError(ValueError):
  """Raised when an incoming query request is missing its SQL text."""


@dataclass(frozen=True)
class SubmitQueryCommand:
  sql: str

  def __post_init__(self) -> None:
    if not isinstance(self.sql, str) or not self.sql.strip():
      raise InvalidRequestError('Missing SQL')
