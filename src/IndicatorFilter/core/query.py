from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, Sequence

BOOLEAN_OPERATORS: Final[tuple[str, ...]] = ("AND", "OR", "NOT")


@dataclass(frozen=True, slots=True)
class BooleanClause:
    """One ``field = value`` condition of a filter expression.

    The base clause has no operator. Additional clauses carry the operator
    that joins them to everything before them.

    Attributes:
        field: Filter group key the clause applies to.
        value: Raw value, always a string (booleans are "true"/"false").
        boolean: "AND", "OR" or "NOT"; None for the base clause.
    """

    field: str
    value: str
    boolean: str | None = None

    def to_payload(self) -> dict[str, str]:
        if self.boolean is None:
            return {"field": self.field, "value": self.value}
        return {"boolean": self.boolean, "field": self.field, "value": self.value}


@dataclass(frozen=True, slots=True)
class FilterExpression:
    """Base clause plus ordered additional clauses.

    Clauses combine strictly left to right with the running result:
    ``base AND a OR b`` means ``(base AND a) OR b``.

    Attributes:
        base: First clause, without operator.
        additional_fields: Further clauses in evaluation order.
    """

    base: BooleanClause
    additional_fields: Sequence[BooleanClause] = ()

    def to_payload(self) -> dict[str, Any]:
        """Return the body sent to the boolean filter endpoint."""
        return {
            "base": self.base.to_payload(),
            "additionalFields": [clause.to_payload() for clause in self.additional_fields],
        }
