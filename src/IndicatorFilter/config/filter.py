"""Default filter expression configuration and clause text parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from IndicatorFilter.config.common import check_non_empty, expect_list, expect_str, get_section, require
from IndicatorFilter.core.query import BOOLEAN_OPERATORS, BooleanClause, FilterExpression


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """Optional expression used when the CLI gets no clause options."""

    expression: FilterExpression | None


def load_filter(raw: Mapping[str, Any]) -> FilterConfig:
    """Load the optional ``filter`` section.

    Example::

        filter:
          base: {field: source, value: Eurostat}
          additional:
            - {boolean: AND, field: frequency, value: MONTHLY}

    Raises:
        TypeError: If a value has the wrong type.
        ValueError: If a required key is missing.
    """
    section = get_section(raw, "filter", required=False)
    if not section:
        return FilterConfig(expression=None)

    base = _parse_clause(get_section(section, "base", required=True), "filter.base", with_operator=False)
    additional = tuple(
        _parse_clause(_as_mapping(item, f"filter.additional[{idx}]"), f"filter.additional[{idx}]", with_operator=True)
        for idx, item in enumerate(expect_list(section.get("additional", []), "filter.additional"))
    )
    return FilterConfig(expression=FilterExpression(base=base, additional_fields=additional))


def check_filter(config: FilterConfig) -> None:
    """Validate the configured expression.

    Raises:
        ValueError: On blank fields or values, or an unknown operator.
    """
    if config.expression is None:
        return
    _check_clause(config.expression.base, "filter.base")
    for idx, clause in enumerate(config.expression.additional_fields):
        _check_clause(clause, f"filter.additional[{idx}]")


def parse_condition_text(text: str, config_key: str) -> tuple[str, str]:
    """Split ``FIELD=VALUE`` into its parts.

    Raises:
        ValueError: If the text has no ``=`` or a blank side.
    """
    field_key, sep, value = text.partition("=")
    field_key, value = field_key.strip(), value.strip()
    if not sep or not field_key or not value:
        raise ValueError(f"{config_key} must look like FIELD=VALUE, got {text!r}")
    return field_key, value


def parse_clause_text(text: str, config_key: str) -> BooleanClause:
    """Parse ``"<AND|OR|NOT> FIELD=VALUE"`` into an additional clause.

    Raises:
        ValueError: On an unknown operator or malformed condition.
    """
    operator, _, condition = text.strip().partition(" ")
    operator = operator.upper()
    if operator not in BOOLEAN_OPERATORS:
        raise ValueError(f"{config_key} must start with one of {list(BOOLEAN_OPERATORS)}, got {text!r}")
    field_key, value = parse_condition_text(condition, config_key)
    return BooleanClause(field=field_key, value=value, boolean=operator)


def _parse_clause(section: Mapping[str, Any], config_key: str, *, with_operator: bool) -> BooleanClause:
    boolean = None
    if with_operator:
        boolean = expect_str(section.get("boolean", "AND"), f"{config_key}.boolean").strip().upper()
    return BooleanClause(
        field=expect_str(require(section, "field", f"{config_key}.field"), f"{config_key}.field").strip(),
        value=_as_value(require(section, "value", f"{config_key}.value"), f"{config_key}.value"),
        boolean=boolean,
    )


def _as_value(value: Any, config_key: str) -> str:
    """Accept strings, plus YAML booleans/numbers which become their wire text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return expect_str(value, config_key).strip()


def _as_mapping(value: Any, config_key: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object")
    return value


def _check_clause(clause: BooleanClause, config_key: str) -> None:
    check_non_empty(clause.field, f"{config_key}.field")
    check_non_empty(clause.value, f"{config_key}.value")
    if clause.boolean is not None and clause.boolean not in BOOLEAN_OPERATORS:
        raise ValueError(f"{config_key}.boolean must be one of {list(BOOLEAN_OPERATORS)}")
