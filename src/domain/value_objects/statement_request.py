"""Value object for a statement submission sent to the warehouse."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class StatementRequest:
  """Body of a submit-statement call."""

  statement: str
  warehouse_id: str
  wait_timeout: str = '20s'

  def to_dict(self) -> Dict[str, str]:
    return {
      'statement': self.statement,
      'warehouse_id': self.warehouse_id,
      'wait_timeout': self.wait_timeout,
    }
