"""Application handler that relays a statement to the warehouse and waits for it."""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Dict, Optional

from src.application.commands.submit_query_command import SubmitQueryCommand
from src.domain.value_objects.statement_request import StatementRequest
from src.domain.value_objects.statement_state import StatementState
from src.ports.output.statement_repository import StatementRepository

logger = logging.getLogger(__name__)


class SubmitQueryHandler:
  """Submits a statement, polls it to a terminal state and backfills the first chunk.

  The flow per call:
  1. Submit with an inline wait hint so fast statements come back with rows.
  2. Return straight away when the submit response has rows or has succeeded.
  3. Otherwise poll the statement until it is terminal or the poll timeout passes.
     A timeout is not an error: the last observed payload is returned.
  4. If the statement succeeded without inline rows, fetch chunk 0 and merge it.

  Repository errors propagate to the caller untouched.
  """

  def __init__(
    self,
    repository: StatementRepository,
    warehouse_id: str,
    wait_timeout: str = '20s',
    poll_interval: float = 0.6,
    poll_timeout: float = 30.0,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
  ):
    self._repository = repository
    self._warehouse_id = warehouse_id
    self._wait_timeout = wait_timeout
    self._poll_interval = poll_interval
    self._poll_timeout = poll_timeout
    self._clock = clock
    self._sleep = sleep

  async def handle(self, command: SubmitQueryCommand) -> Dict[str, Any]:
    request = StatementRequest(
      statement=command.sql,
      warehouse_id=self._warehouse_id,
      wait_timeout=self._wait_timeout,
    )
    submitted = await asyncio.to_thread(self._repository.submit_statement, request)
    statement_id = submitted.get('statement_id')
    logger.info('Submitted statement %s (state=%s)', statement_id, self._state_name(submitted))

    if self._has_inline_rows(submitted) or StatementState.from_payload(submitted) == StatementState.SUCCEEDED:
      return submitted

    if not statement_id:
      logger.warning('Submit response carried no statement_id; returning it as-is')
      return submitted

    final = await self._wait_for_statement(statement_id)
    final.setdefault('statement_id', statement_id)

    if StatementState.from_payload(final) == StatementState.SUCCEEDED and not self._has_inline_rows(final):
      final = await self._backfill_first_chunk(statement_id, final)
    return final

  async def _wait_for_statement(self, statement_id: str) -> Dict[str, Any]:
    started = self._clock()
    while True:
      status = await asyncio.to_thread(self._repository.get_statement, statement_id)
      state = StatementState.from_payload(status)
      if state is not None and state.is_terminal:
        logger.info('Statement %s finished with state %s', statement_id, state.value)
        return status

      elapsed = self._clock() - started
      if elapsed > self._poll_timeout:
        logger.warning(
          'Statement %s still %s after %.1fs; returning last known status',
          statement_id, self._state_name(status), elapsed,
        )
        return status

      await self._sleep(self._poll_interval)

  async def _backfill_first_chunk(self, statement_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    logger.debug('Fetching chunk 0 for statement %s', statement_id)
    chunk = await asyncio.to_thread(self._repository.get_result_chunk, statement_id, 0)
    result = payload.get('result') if isinstance(payload.get('result'), dict) else {}
    payload['result'] = {
      **result,
      'data_array': (chunk or {}).get('data_array') or [],
      'chunk_index': 0,
    }
    return payload

  @staticmethod
  def _has_inline_rows(payload: Optional[Dict[str, Any]]) -> bool:
    result = (payload or {}).get('result')
    return isinstance(result, dict) and result.get('data_array') is not None

  @staticmethod
  def _state_name(payload: Optional[Dict[str, Any]]) -> Optional[str]:
    state = StatementState.from_payload(payload)
    return state.value if state else None
