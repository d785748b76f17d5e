"""Command runner for coordinating CLI execution.

Configures logging, builds the service and session, runs one command and
turns any failure into ``click.Abort``.
"""

from __future__ import annotations

from typing import Mapping, Sequence

import click

from IndicatorFilter.cli.commands import AddCommand, FieldsCommand, RefineCommand, SearchCommand
from IndicatorFilter.config import AppConfig
from IndicatorFilter.core.query import FilterExpression
from IndicatorFilter.filters.builder import ExpressionValidationError
from IndicatorFilter.renderers import create_output_writer
from IndicatorFilter.services import FilterSession, create_search_service
from IndicatorFilter.utils.log import configure_logging, log


class CommandRunner:
    """Run CLI commands with logging, resource cleanup and error handling."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run_fields(self, action: str, within: Sequence[str]) -> None:
        self._configure_logging(action)
        service = create_search_service(self.config)
        try:
            FieldsCommand(service=service, within=within).execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Listing fields failed: %s", e)
            raise click.Abort from e
        finally:
            service.close()

    def run_search(self, action: str, expression: FilterExpression, *, local: bool = False) -> None:
        self._configure_logging(action)
        service = create_search_service(self.config)
        try:
            output_writer = create_output_writer(self.config)
            command = SearchCommand(
                session=FilterSession(service=service, local=local),
                expression=expression,
                output_writer=output_writer,
            )
            command.execute()
            output_writer.finalize(action)
        except ExpressionValidationError as e:
            _log_field_errors(e)
            raise click.Abort from e
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Search failed: %s", e)
            raise click.Abort from e
        finally:
            service.close()

    def run_refine(
        self,
        action: str,
        *,
        expression: FilterExpression,
        text: str,
        facets: Mapping[str, Sequence[str]],
        workflow_frequency: str | None,
    ) -> None:
        self._configure_logging(action)
        service = create_search_service(self.config)
        try:
            RefineCommand(
                session=FilterSession(service=service),
                expression=expression,
                text=text,
                facets=facets,
                workflow_frequency=workflow_frequency,
            ).execute()
        except ExpressionValidationError as e:
            _log_field_errors(e)
            raise click.Abort from e
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Refining indicators failed: %s", e)
            raise click.Abort from e
        finally:
            service.close()

    def run_add(
        self,
        action: str,
        *,
        expression: FilterExpression,
        table_id: str,
        frequency: str,
        picks: Sequence[int],
        select_all: bool,
    ) -> None:
        self._configure_logging(action)
        service = create_search_service(self.config)
        try:
            command = AddCommand(
                session=FilterSession(service=service),
                expression=expression,
                table_id=table_id,
                frequency=frequency,
                picks=picks,
                select_all=select_all,
            )
            path = command.execute()
            log.info("Table: %s%s", self.config.api.base_url.rstrip("/"), path)
        except ExpressionValidationError as e:
            _log_field_errors(e)
            raise click.Abort from e
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Adding indicators failed: %s", e)
            raise click.Abort from e
        finally:
            service.close()

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )


def _log_field_errors(error: ExpressionValidationError) -> None:
    for path, message in error.errors.items():
        log.error("%s: %s", path, message)
