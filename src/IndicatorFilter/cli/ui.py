"""Click CLI interface definitions."""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from IndicatorFilter.cli.runner import CommandRunner
from IndicatorFilter.config import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    parse_clause_text,
    parse_condition_text,
)
from IndicatorFilter.core.query import BooleanClause, FilterExpression

_expression_options = [
    click.option("--base", "base", metavar="FIELD=VALUE", help="Base condition, e.g. source=Eurostat."),
    click.option(
        "--clause",
        "clauses",
        multiple=True,
        metavar='"OP FIELD=VALUE"',
        help='Additional condition joined left to right, e.g. "AND frequency=MONTHLY".',
    ),
]


def expression_options(func):
    for option in reversed(_expression_options):
        func = option(func)
    return func


@click.group(help="IndicatorFilter: build boolean indicator filters and add results to tables.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads ``.env`` first so ``api.token_env`` can be resolved.
    """
    load_dotenv()
    ctx.obj = load_config(config_path)


@cli.command("fields")
@click.option("--within", multiple=True, help="Narrow to these metadata groups (repeatable).")
@click.pass_context
def fields_cmd(ctx: click.Context, within: tuple[str, ...]) -> None:
    """List filterable fields and their values."""
    CommandRunner(ctx.obj).run_fields(action=ctx.command.name, within=within)


@cli.command("search")
@expression_options
@click.option("--local", is_flag=True, help="Evaluate the expression over the fetched indicator list.")
@click.pass_context
def search_cmd(ctx: click.Context, base: str | None, clauses: tuple[str, ...], local: bool) -> None:
    """Run a filter expression and print results grouped by frequency."""
    expression = build_expression(ctx.obj, base, clauses)
    CommandRunner(ctx.obj).run_search(action=ctx.command.name, expression=expression, local=local)


@cli.command("refine")
@expression_options
@click.option("--text", default="", help="Keep indicators whose name, code or description contains TEXT.")
@click.option("--facet", "facets", multiple=True, metavar="FIELD=VALUE", help="Facet value to keep (repeatable).")
@click.option("--workflow-frequency", default=None, help="Keep indicators usable by a workflow of this frequency.")
@click.pass_context
def refine_cmd(
    ctx: click.Context,
    base: str | None,
    clauses: tuple[str, ...],
    text: str,
    facets: tuple[str, ...],
    workflow_frequency: str | None,
) -> None:
    """Narrow the indicator list to a filter result and refine it locally."""
    expression = build_expression(ctx.obj, base, clauses)
    CommandRunner(ctx.obj).run_refine(
        action=ctx.command.name,
        expression=expression,
        text=text,
        facets=parse_facets(facets),
        workflow_frequency=workflow_frequency,
    )


@cli.command("add")
@click.argument("table_id")
@click.option("--frequency", required=True, help="Frequency group to select from.")
@click.option("--pick", "picks", multiple=True, type=int, help="Item index within the frequency (repeatable).")
@click.option("--all", "select_all", is_flag=True, help="Select every item in the frequency.")
@expression_options
@click.pass_context
def add_cmd(
    ctx: click.Context,
    table_id: str,
    frequency: str,
    picks: tuple[int, ...],
    select_all: bool,
    base: str | None,
    clauses: tuple[str, ...],
) -> None:
    """Search, select from one frequency, and add the selection to TABLE_ID."""
    if select_all and picks:
        raise click.UsageError("Use either --all or --pick, not both")
    expression = build_expression(ctx.obj, base, clauses)
    CommandRunner(ctx.obj).run_add(
        action=ctx.command.name,
        expression=expression,
        table_id=table_id,
        frequency=frequency,
        picks=picks,
        select_all=select_all,
    )


def parse_facets(facets: tuple[str, ...]) -> dict[str, list[str]]:
    """Group ``FIELD=VALUE`` options by field.

    Raises:
        click.UsageError: If an option is malformed.
    """
    selections: dict[str, list[str]] = {}
    for text in facets:
        try:
            field_key, value = parse_condition_text(text, "--facet")
        except ValueError as e:
            raise click.UsageError(str(e)) from e
        selections.setdefault(field_key, []).append(value)
    return selections


def build_expression(config: AppConfig, base: str | None, clauses: tuple[str, ...]) -> FilterExpression:
    """Build the expression from CLI options, falling back to ``filter`` in config.

    Raises:
        click.UsageError: If options are malformed or no expression is available.
    """
    try:
        if base is None:
            if clauses:
                raise ValueError("--clause requires --base")
            if config.filter.expression is None:
                raise ValueError("Provide --base or configure a filter section")
            return config.filter.expression
        field_key, value = parse_condition_text(base, "--base")
        additional = tuple(parse_clause_text(text, "--clause") for text in clauses)
    except ValueError as e:
        raise click.UsageError(str(e)) from e
    return FilterExpression(base=BooleanClause(field=field_key, value=value), additional_fields=additional)
