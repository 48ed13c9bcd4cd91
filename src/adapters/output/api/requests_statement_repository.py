"""Requests-based statement repository implementation."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from src.domain.value_objects.statement_request import StatementRequest
from src.ports.output.statement_repository import StatementRepository, UpstreamError

logger = logging.getLogger(__name__)


class RequestsStatementRepository(StatementRepository):
  """Calls the Databricks SQL Statement Execution API with a shared requests session."""

  STATEMENT_PATH = '/api/2.0/sql/statements'
  STATEMENT_PATH_WITH_ID = STATEMENT_PATH + '/{}'
  CHUNK_PATH_WITH_ID_AND_INDEX = STATEMENT_PATH + '/{}/result/chunks/{}'

  def __init__(
    self,
    host: str,
    token: str,
    session: Optional[requests.Session] = None,
    timeout: float = 30,
  ):
    self._host = host.rstrip('/')
    self._token = token
    self._session = session or requests.Session()
    self._timeout = timeout

  def submit_statement(self, request: StatementRequest) -> Dict[str, Any]:
    return self._request('POST', self.STATEMENT_PATH, json_payload=request.to_dict())

  def get_statement(self, statement_id: str) -> Dict[str, Any]:
    return self._request('GET', self.STATEMENT_PATH_WITH_ID.format(statement_id))

  def get_result_chunk(self, statement_id: str, chunk_index: int) -> Dict[str, Any]:
    return self._request('GET', self.CHUNK_PATH_WITH_ID_AND_INDEX.format(statement_id, chunk_index))

  def close(self) -> None:
    self._session.close()

  def _headers(self) -> Dict[str, str]:
    return {
      'Authorization': f'Bearer {self._token}',
      'Content-Type': 'application/json',
    }

  def _request(
    self, method: str, path: str, json_payload: Optional[Dict[str, Any]] = None
  ) -> Dict[str, Any]:
    url = f'{self._host}{path}'
    logger.debug('%s %s', method, url)

    try:
      response = self._session.request(
        method, url, headers=self._headers(), json=json_payload, timeout=self._timeout
      )
    except requests.RequestException as e:
      raise UpstreamError(None, str(e)) from e

    if not response.ok:
      raise UpstreamError(response.status_code, response.text)

    try:
      return response.json()
    except ValueError as e:
      raise UpstreamError(response.status_code, f'Invalid JSON in response: {response.text[:200]}') from e
