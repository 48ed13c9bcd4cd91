"""Simple dependency wiring helpers."""
from __future__ import annotations

from typing import Optional

import requests

from src.adapters.output.api.requests_statement_repository import RequestsStatementRepository
from src.application.handlers.submit_query_handler import SubmitQueryHandler
from src.application.services.query_service_impl import QueryServiceImpl
from src.common.config import Settings
from src.domain.services.origin_policy import OriginPolicy
from src.ports.output.statement_repository import StatementRepository


def create_statement_repository(
  settings: Settings, session: Optional[requests.Session] = None
) -> RequestsStatementRepository:
  return RequestsStatementRepository(
    host=settings.databricks_host,
    token=settings.databricks_token,
    session=session,
    timeout=settings.http_timeout,
  )


def create_query_service(
  settings: Settings, repository: Optional[StatementRepository] = None
) -> QueryServiceImpl:
  if repository is None:
    repository = create_statement_repository(settings)

  submit_handler = SubmitQueryHandler(
    repository=repository,
    warehouse_id=settings.warehouse_id,
    wait_timeout=settings.wait_timeout,
    poll_interval=settings.poll_interval,
    poll_timeout=settings.poll_timeout,
  )
  return QueryServiceImpl(submit_handler)


def create_origin_policy(settings: Settings) -> OriginPolicy:
  return OriginPolicy(
    allowed_origins=settings.allowed_origins,
    allowed_suffixes=settings.allowed_origin_suffixes,
  )
