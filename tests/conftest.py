import copy
from typing import Any, Dict, List, Optional, Sequence

import pytest

from src.application.handlers.submit_query_handler import SubmitQueryHandler
from src.application.services.query_service_impl import QueryServiceImpl
from src.ports.output.statement_repository import UpstreamError


class FakeStatementRepository:
  """In-memory stand-in for the statement-execution API that records every call."""

  def __init__(
    self,
    submit_response: Dict[str, Any],
    statuses: Sequence[Dict[str, Any]] = (),
    chunk: Optional[Dict[str, Any]] = None,
    submit_error: Optional[UpstreamError] = None,
  ):
    self._submit_response = submit_response
    self._statuses: List[Dict[str, Any]] = list(statuses)
    self._chunk = chunk if chunk is not None else {'data_array': []}
    self._submit_error = submit_error
    self.calls: List[tuple] = []

  def submit_statement(self, request):
    self.calls.append(('submit', request))
    if self._submit_error is not None:
      raise self._submit_error
    return copy.deepcopy(self._submit_response)

  def get_statement(self, statement_id):
    self.calls.append(('get', statement_id))
    # The last status repeats once the scripted ones are used up.
    status = self._statuses.pop(0) if len(self._statuses) > 1 else self._statuses[0]
    return copy.deepcopy(status)

  def get_result_chunk(self, statement_id, chunk_index):
    self.calls.append(('chunk', statement_id, chunk_index))
    return copy.deepcopy(self._chunk)

  def call_names(self) -> List[str]:
    return [call[0] for call in self.calls]


class FakeClock:
  """Monotonic clock whose sleep advances time instantly."""

  def __init__(self):
    self.now = 0.0
    self.sleeps: List[float] = []

  def __call__(self) -> float:
    return self.now

  async def sleep(self, seconds: float) -> None:
    self.sleeps.append(seconds)
    self.now += seconds


@pytest.fixture
def fake_clock():
  return FakeClock()


@pytest.fixture
def make_repository():
  return FakeStatementRepository


@pytest.fixture
def make_handler(fake_clock):
  def _make(repository, poll_interval=0.6, poll_timeout=30.0):
    return SubmitQueryHandler(
      repository=repository,
      warehouse_id='wh-123',
      poll_interval=poll_interval,
      poll_timeout=poll_timeout,
      clock=fake_clock,
      sleep=fake_clock.sleep,
    )
  return _make


@pytest.fixture
def make_service(make_handler):
  def _make(repository, **kwargs):
    return QueryServiceImpl(make_handler(repository, **kwargs))
  return _make
