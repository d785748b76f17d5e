"""Editable boolean filter expression and its validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import AbstractSet, Hashable, Iterable, Mapping, TypeVar

from IndicatorFilter.core.query import BOOLEAN_OPERATORS, BooleanClause, FilterExpression
from IndicatorFilter.filters.catalog import FieldCatalog

T = TypeVar("T", bound=Hashable)


class ExpressionValidationError(ValueError):
    """Raised when an expression fails validation.

    Attributes:
        errors: Mapping of form path (e.g. ``additionalFields.0.value``) to
            message, one entry per invalid input.
    """

    def __init__(self, errors: Mapping[str, str]) -> None:
        self.errors = dict(errors)
        detail = "; ".join(f"{path}: {message}" for path, message in self.errors.items())
        super().__init__(f"Invalid filter expression: {detail}")


@dataclass(slots=True)
class _DraftClause:
    field: str
    value: str = ""
    boolean: str | None = None


@dataclass(slots=True)
class ExpressionBuilder:
    """Mutable filter expression bound to a field catalog.

    The base clause starts on the first catalog field with an empty value.
    Changing the field of any clause clears its value so a value chosen for
    one field is never submitted against another.
    """

    catalog: FieldCatalog
    _base: _DraftClause = field(init=False)
    _clauses: list[_DraftClause] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self._base = _DraftClause(field=self.catalog.first_key)

    @property
    def base(self) -> BooleanClause:
        return BooleanClause(field=self._base.field, value=self._base.value)

    @property
    def additional_fields(self) -> tuple[BooleanClause, ...]:
        return tuple(
            BooleanClause(field=draft.field, value=draft.value, boolean=draft.boolean) for draft in self._clauses
        )

    def set_base_field(self, field_key: str) -> None:
        self._base.field = field_key
        self._base.value = ""

    def set_base_value(self, value: str) -> None:
        self._base.value = value

    def add_clause(self) -> int:
        """Append ``AND <first field> = ""`` and return its index."""
        self._clauses.append(_DraftClause(field=self.catalog.first_key, boolean="AND"))
        return len(self._clauses) - 1

    def remove_clause(self, index: int) -> None:
        """Delete the additional clause at ``index``.

        Raises:
            IndexError: If no clause exists at ``index``.
        """
        self._check_index(index)
        del self._clauses[index]

    def set_clause_operator(self, index: int, boolean: str) -> None:
        self._check_index(index)
        self._clauses[index].boolean = boolean

    def set_clause_field(self, index: int, field_key: str) -> None:
        self._check_index(index)
        self._clauses[index].field = field_key
        self._clauses[index].value = ""

    def set_clause_value(self, index: int, value: str) -> None:
        self._check_index(index)
        self._clauses[index].value = value

    def validate(self) -> dict[str, str]:
        """Check every clause against the catalog.

        Returns:
            Per-input error messages; empty when the expression is valid.
        """
        errors: dict[str, str] = {}
        self._validate_clause(self._base, "base", errors)
        for idx, draft in enumerate(self._clauses):
            path = f"additionalFields.{idx}"
            if draft.boolean not in BOOLEAN_OPERATORS:
                errors[f"{path}.boolean"] = f"operator must be one of {list(BOOLEAN_OPERATORS)}"
            self._validate_clause(draft, path, errors)
        return errors

    def build(self) -> FilterExpression:
        """Return the validated expression.

        Raises:
            ExpressionValidationError: If any clause is invalid.
        """
        errors = self.validate()
        if errors:
            raise ExpressionValidationError(errors)
        return FilterExpression(base=self.base, additional_fields=self.additional_fields)

    def load(self, expression: FilterExpression) -> None:
        """Replace the draft with an existing expression, without validating it."""
        self._base = _DraftClause(field=expression.base.field, value=expression.base.value)
        self._clauses = [
            _DraftClause(field=clause.field, value=clause.value, boolean=clause.boolean)
            for clause in expression.additional_fields
        ]

    def _validate_clause(self, draft: _DraftClause, path: str, errors: dict[str, str]) -> None:
        if draft.field not in self.catalog:
            errors[f"{path}.field"] = f"unknown field: {draft.field}"
        if not draft.value:
            errors[f"{path}.value"] = "value is required"

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._clauses):
            raise IndexError(f"No additional clause at index {index}")


def evaluate_left_to_right(
    base_matches: Iterable[T],
    clauses: Iterable[tuple[str, Iterable[T]]],
) -> set[T]:
    """Fold clause match sets into one result, strictly in clause order.

    AND intersects, OR unions and NOT subtracts the clause matches from the
    running result. There is no operator precedence.

    Args:
        base_matches: Matches of the base clause.
        clauses: ``(operator, matches)`` pairs in expression order.

    Returns:
        The combined match set.

    Raises:
        ValueError: On an unknown operator.
    """
    result: set[T] = set(base_matches)
    for operator, matches in clauses:
        current: AbstractSet[T] = set(matches)
        if operator == "AND":
            result &= current
        elif operator == "OR":
            result |= current
        elif operator == "NOT":
            result -= current
        else:
            raise ValueError(f"Unknown boolean operator: {operator}")
    return result
