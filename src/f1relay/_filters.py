"""Query parameter building, including OpenF1 comparison operators."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


def _render(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


@dataclass(frozen=True)
class Filter:
    """Comparison filter for an OpenF1 query parameter.

    Usage:
        Filter(gte="2025-01-01")      # date_start>=2025-01-01
        Filter(gt=5, lt=10)           # lap_number>5&lap_number<10
    """

    gt: int | float | str | datetime | None = None
    gte: int | float | str | datetime | None = None
    lt: int | float | str | datetime | None = None
    lte: int | float | str | datetime | None = None

    def to_params(self, key: str) -> list[tuple[str, str]]:
        """Convert this filter to (key_with_operator, value) pairs."""
        operators = (("gt", ">"), ("gte", ">="), ("lt", "<"), ("lte", "<="))
        return [
            (f"{key}{symbol}", _render(getattr(self, name)))
            for name, symbol in operators
            if getattr(self, name) is not None
        ]


def build_query_params(**kwargs: Any) -> list[tuple[str, str]]:
    """Build query parameter tuples from keyword arguments.

    ``None`` values are dropped, ``Filter`` instances expand into comparison
    operators and everything else becomes an equality parameter.
    """
    params: list[tuple[str, str]] = []
    for key, value in kwargs.items():
        if value is None:
            continue
        if isinstance(value, Filter):
            params.extend(value.to_params(key))
        else:
            params.append((key, _render(value)))
    return params
