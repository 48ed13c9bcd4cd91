"""JSON presenter implementation."""
from __future__ import annotations

import json
from typing import Any, Mapping

from src.ports.input.result_presenter import ResultPresenter


class JsonPresenter(ResultPresenter):
  def __init__(self, indent: int = 2) -> None:
    self._indent = indent

  def present(self, result: Mapping[str, Any]) -> str:
    return json.dumps(result, ensure_ascii=False, indent=self._indent, default=str)

  def present_error(self, error: Exception) -> str:
    return json.dumps({'error': str(error)}, ensure_ascii=False, indent=self._indent)
