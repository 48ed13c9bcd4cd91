"""Lifecycle states reported by the statement-execution API."""
from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional


class StatementState(str, Enum):
  PENDING = 'PENDING'
  RUNNING = 'RUNNING'
  SUCCEEDED = 'SUCCEEDED'
  FAILED = 'FAILED'
  CANCELED = 'CANCELED'
  CLOSED = 'CLOSED'

  @property
  def is_terminal(self) -> bool:
    return self not in (StatementState.PENDING, StatementState.RUNNING)

  @staticmethod
  def from_payload(payload: Optional[Mapping[str, Any]]) -> Optional['StatementState']:
    """Read ``status.state`` from a statement payload, or None when absent or unknown."""
    if not isinstance(payload, Mapping):
      return None
    status = payload.get('status')
    if not isinstance(status, Mapping):
      return None
    state = status.get('state')
    if state in StatementState._value2member_map_:
      return StatementState(state)
    return None
