from unittest.mock import Mock

import pytest
import requests

from src.adapters.output.api.requests_statement_repository import RequestsStatementRepository
from src.domain.value_objects.statement_request import StatementRequest
from src.ports.output.statement_repository import UpstreamError


def make_response(status_code=200, payload=None, text=''):
  response = Mock(spec=requests.Response)
  response.status_code = status_code
  response.ok = 200 <= status_code < 400
  response.text = text
  response.json.return_value = payload if payload is not None else {}
  return response


class TestRequestsStatementRepository:
  @pytest.fixture
  def session(self):
    session = Mock(spec=requests.Session)
    session.request.return_value = make_response(payload={'statement_id': 'abc'})
    return session

  @pytest.fixture
  def repository(self, session):
    return RequestsStatementRepository(
      host='https://adb-1.azuredatabricks.net/',
      token='dapi-secret',
      session=session,
      timeout=12,
    )

  def test_submit_posts_statement_with_bearer_token(self, repository, session):
    result = repository.submit_statement(StatementRequest('SELECT 1', 'wh-1'))

    assert result == {'statement_id': 'abc'}
    session.request.assert_called_once_with(
      'POST',
      'https://adb-1.azuredatabricks.net/api/2.0/sql/statements',
      headers={'Authorization': 'Bearer dapi-secret', 'Content-Type': 'application/json'},
      json={'statement': 'SELECT 1', 'warehouse_id': 'wh-1', 'wait_timeout': '20s'},
      timeout=12,
    )

  def test_get_statement_path(self, repository, session):
    repository.get_statement('abc')

    args, kwargs = session.request.call_args
    assert args == ('GET', 'https://adb-1.azuredatabricks.net/api/2.0/sql/statements/abc')
    assert kwargs['json'] is None
    assert kwargs['headers']['Authorization'] == 'Bearer dapi-secret'

  def test_get_result_chunk_path(self, repository, session):
    session.request.return_value = make_response(payload={'chunk_index': 0, 'data_array': [[1]]})

    chunk = repository.get_result_chunk('abc', 0)

    args, _ = session.request.call_args
    assert args == ('GET', 'https://adb-1.azuredatabricks.net/api/2.0/sql/statements/abc/result/chunks/0')
    assert chunk == {'chunk_index': 0, 'data_array': [[1]]}

  @pytest.mark.parametrize('status_code', [400, 401, 404, 500, 503])
  def test_non_success_status_raises_upstream_error(self, repository, session, status_code):
    session.request.return_value = make_response(status_code=status_code, text='{"message":"nope"}')

    with pytest.raises(UpstreamError) as excinfo:
      repository.get_statement('abc')

    assert excinfo.value.status_code == status_code
    assert excinfo.value.body == '{"message":"nope"}'
    assert str(excinfo.value) == f'Databricks {status_code}: {{"message":"nope"}}'

  def test_transport_failure_raises_upstream_error(self, repository, session):
    session.request.side_effect = requests.ConnectionError('connection refused')

    with pytest.raises(UpstreamError) as excinfo:
      repository.submit_statement(StatementRequest('SELECT 1', 'wh-1'))

    assert excinfo.value.status_code is None
    assert 'connection refused' in str(excinfo.value)

  def test_invalid_json_raises_upstream_error(self, repository, session):
    response = make_response(text='<html>gateway</html>')
    response.json.side_effect = ValueError('no json')
    session.request.return_value = response

    with pytest.raises(UpstreamError, match='Invalid JSON'):
      repository.get_statement('abc')

  def test_close_closes_session(self, repository, session):
    repository.close()
    session.close.assert_called_once_with()
