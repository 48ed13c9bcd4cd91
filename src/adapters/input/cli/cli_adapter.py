"""CLI adapter for interacting with the query relay."""
from __future__ import annotations

import asyncio
from typing import Callable, Optional

import click

from src.application.commands.submit_query_command import InvalidRequestError, SubmitQueryCommand
from src.ports.input.query_service import QueryService
from src.ports.input.result_presenter import ResultPresenter
from src.ports.output.statement_repository import UpstreamError


class CLIAdapter:
  def __init__(
    self,
    query_service: QueryService,
    presenter: ResultPresenter,
    serve: Optional[Callable[[str, int], None]] = None,
    default_port: int = 3000,
  ):
    self._query_service = query_service
    self._presenter = presenter
    self._serve = serve
    self._default_port = default_port

  def build(self) -> click.Group:
    cli = click.Group(help='Relay SQL statements to a Databricks SQL warehouse.')

    @cli.command('query')
    @click.option('--sql', required=True, help='SQL statement to run')
    def query(sql: str) -> None:
      """Run one statement and print the warehouse payload as JSON."""
      try:
        command = SubmitQueryCommand(sql=sql)
      except InvalidRequestError as exc:
        click.echo(self._presenter.present_error(exc), err=True)
        raise SystemExit(2)

      try:
        result = asyncio.run(self._query_service.submit_query(command))
      except UpstreamError as exc:
        click.echo(self._presenter.present_error(exc), err=True)
        raise SystemExit(1)
      click.echo(self._presenter.present(result))

    @cli.command('serve')
    @click.option('--host', default='0.0.0.0', show_default=True, help='Interface to bind')
    @click.option('--port', default=self._default_port, type=int, show_default=True, help='Port to listen on')
    def serve(host: str, port: int) -> None:
      """Run the HTTP relay server."""
      if self._serve is None:
        raise click.ClickException('No server runner configured')
      self._serve(host, port)

    return cli

  def run(self) -> None:
    self.build()()
