"""Input port for formatting relayed statement payloads."""
from __future__ import annotations

from typing import Any, Mapping, Protocol


class ResultPresenter(Protocol):
  def present(self, result: Mapping[str, Any]) -> Any:
    ...

  def present_error(self, error: Exception) -> Any:
    ...
