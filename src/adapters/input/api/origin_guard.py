"""ASGI middleware rejecting requests from origins the relay does not trust."""
from __future__ import annotations

import logging

from starlette.datastructures import Headers
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from src.domain.services.origin_policy import OriginPolicy

logger = logging.getLogger(__name__)


class OriginGuardMiddleware:
  """Blocks disallowed origins before routing, so no handler ever runs for them.

  Must sit outside CORSMiddleware, which only decorates responses and would
  otherwise let simple cross-origin requests through to the route.
  """

  def __init__(self, app: ASGIApp, policy: OriginPolicy) -> None:
    self.app = app
    self._policy = policy

  async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
    if scope['type'] != 'http':
      await self.app(scope, receive, send)
      return

    origin = Headers(scope=scope).get('origin')
    if self._policy.is_allowed(origin):
      await self.app(scope, receive, send)
      return

    logger.warning('CORS blocked: %s %s from %s', scope.get('method'), scope.get('path'), origin)
    response = PlainTextResponse(f'CORS blocked: {origin}', status_code=403)
    await response(scope, receive, send)
