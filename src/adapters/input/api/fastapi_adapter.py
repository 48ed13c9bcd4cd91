"""FastAPI adapter exposing HTTP endpoints."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from src.adapters.input.api.origin_guard import OriginGuardMiddleware
from src.application.commands.submit_query_command import InvalidRequestError, SubmitQueryCommand
from src.domain.services.origin_policy import OriginPolicy
from src.ports.input.query_service import QueryService
from src.ports.output.statement_repository import UpstreamError

logger = logging.getLogger(__name__)


class QueryPayload(BaseModel):
  sql: Optional[str] = Field(default=None, description='SQL statement to run on the warehouse')

  model_config = {
    'json_schema_extra': {
      'examples': [
        {'sql': 'SELECT * FROM samples.nyctaxi.trips LIMIT 10'},
      ]
    }
  }


class FastAPIAdapter:
  def __init__(
    self,
    query_service: QueryService,
    origin_policy: OriginPolicy,
    on_shutdown: Optional[Callable[[], None]] = None,
  ):
    self._query_service = query_service
    self._origin_policy = origin_policy
    self._on_shutdown = on_shutdown
    self.app = FastAPI(
      title='Warehouse Query Relay',
      version='0.1.0',
      description='Relays SQL statements to a Databricks SQL warehouse, waits for them '
                  'to finish and returns the statement payload with the first result chunk.',
      lifespan=self._lifespan,
    )
    self._configure_middleware()
    self._configure_exception_handlers()
    self._configure_routes()

  @asynccontextmanager
  async def _lifespan(self, _app: FastAPI):
    yield
    if self._on_shutdown is not None:
      self._on_shutdown()

  def _configure_middleware(self) -> None:
    self.app.add_middleware(
      CORSMiddleware,
      allow_origins=list(self._origin_policy.allowed_origins),
      allow_origin_regex=self._origin_policy.origin_regex(),
      allow_methods=['GET', 'POST', 'OPTIONS'],
      allow_headers=['*'],
    )
    # Added last so it wraps CORSMiddleware and runs first.
    self.app.add_middleware(OriginGuardMiddleware, policy=self._origin_policy)

  def _configure_exception_handlers(self) -> None:
    @self.app.exception_handler(RequestValidationError)
    async def invalid_body(_request: Request, exc: RequestValidationError):
      # text/plain fetches and non-object JSON bodies land here
      logger.info('Rejected request body: %s', exc.errors())
      return JSONResponse(status_code=400, content={'error': 'Missing SQL'})

  def _configure_routes(self) -> None:
    @self.app.post('/query', tags=['Query'])
    async def query(payload: Optional[QueryPayload] = None):
      """
      Run a SQL statement on the configured warehouse.

      Returns the statement payload as reported by the warehouse. If the
      statement is still running when the poll timeout passes, the last known
      status is returned so the caller can keep polling with its `statement_id`.
      """
      try:
        command = SubmitQueryCommand(sql=payload.sql if payload else None)
      except InvalidRequestError as exc:
        return JSONResponse(status_code=400, content={'error': str(exc)})

      try:
        return await self._query_service.submit_query(command)
      except UpstreamError as exc:
        logger.error('Upstream call failed: %s', exc)
        return JSONResponse(status_code=500, content={'error': str(exc)})
      except Exception as exc:  # noqa: BLE001
        logger.exception('Unexpected error while relaying query')
        return JSONResponse(status_code=500, content={'error': str(exc)})

    @self.app.get('/health', tags=['Health'])
    async def health():
      """Health check endpoint."""
      return {'ok': True}

    @self.app.get('/health-origin', tags=['Health'])
    async def health_origin(request: Request):
      """Echo the caller's Origin header, for debugging CORS setups."""
      return {'ok': True, 'origin': request.headers.get('origin')}
