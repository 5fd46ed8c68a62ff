"""Search Criteria — normalized, validated catalog filters.

Invariants:
    - Every filter optional; present filters combine with AND
    - Blank strings treated as absent
    - Price bounds non-negative and min_price <= max_price when both given

Design Decisions:
    - Frozen dataclass: the repository translates it to SQL, core never sees SQLAlchemy
"""

from dataclasses import dataclass
from decimal import Decimal

from sweetshop.core.errors import InvalidInputError


@dataclass(frozen=True)
class SearchCriteria:
    name: str | None = None
    category: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    query: str | None = None  # name OR category

    @property
    def is_empty(self) -> bool:
        return all(
            v is None for v in (
                self.name, self.category, self.min_price,
                self.max_price, self.query,
            )
        )


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def build_search_criteria(
    name: str | None = None,
    category: str | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    query: str | None = None,
) -> SearchCriteria:
    """Normalize raw filter values and enforce price-range rules."""
    if min_price is not None and min_price < 0:
        raise InvalidInputError("min_price cannot be negative", "min_price")
    if max_price is not None and max_price < 0:
        raise InvalidInputError("max_price cannot be negative", "max_price")
    if (
        min_price is not None and max_price is not None
        and min_price > max_price
    ):
        raise InvalidInputError(
            "min_price cannot be greater than max_price", "min_price",
        )
    return SearchCriteria(
        name=_clean(name),
        category=_clean(category),
        min_price=min_price,
        max_price=max_price,
        query=_clean(query),
    )
