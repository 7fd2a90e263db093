"""
Filter Specification and Predicate Builder

Translates an immutable FilterSpec into an ordered list of single-record
predicates. A record matches a query only if every predicate holds.

Rules:
- Categorical fields: exact, case-sensitive set membership (OR within field)
- Tags: non-empty intersection with the record's tag set
- Age and date: inclusive ranges, open bounds defaulted
- Search: case-insensitive customer name OR raw phone number substring
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional

from src.engine.records import SalesRecord


AGE_MIN_DEFAULT = 0
AGE_MAX_DEFAULT = 999
DATE_START_DEFAULT = datetime(1900, 1, 1)
DATE_END_DEFAULT = datetime(2100, 1, 1)


class FilterField(str, Enum):
    """Filterable categorical fields"""
    CUSTOMER_REGION = "customer_region"
    GENDER = "gender"
    PRODUCT_CATEGORY = "product_category"
    TAGS = "tags"
    PAYMENT_METHOD = "payment_method"
    CUSTOMER_TYPE = "customer_type"
    ORDER_STATUS = "order_status"
    BRAND = "brand"


class SortKey(str, Enum):
    """Supported orderings"""
    DATE_DESC = "date_desc"
    QUANTITY = "quantity"
    CUSTOMER_NAME = "customer_name"
    AMOUNT_DESC = "amount_desc"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["SortKey"]:
        """Return the matching key, or None for empty/unknown values"""
        if not value:
            return None
        try:
            return cls(value.strip())
        except ValueError:
            return None


# Single-valued fields; TAGS is handled separately
_FIELD_ACCESSORS: Dict[FilterField, Callable[[SalesRecord], str]] = {
    FilterField.CUSTOMER_REGION: lambda r: r.customer_region,
    FilterField.GENDER: lambda r: r.gender,
    FilterField.PRODUCT_CATEGORY: lambda r: r.product_category,
    FilterField.PAYMENT_METHOD: lambda r: r.payment_method,
    FilterField.CUSTOMER_TYPE: lambda r: r.customer_type,
    FilterField.ORDER_STATUS: lambda r: r.order_status,
    FilterField.BRAND: lambda r: r.brand,
}


def field_value(record: SalesRecord, filter_field: FilterField) -> str:
    """Value of a single-valued filter field on a record"""
    return _FIELD_ACCESSORS[filter_field](record)


def _as_values(values: Iterable[str]) -> FrozenSet[str]:
    # A bare string is one value, not a set of characters
    if isinstance(values, str):
        return frozenset([values])
    return frozenset(values)


@dataclass(frozen=True)
class FilterSpec:
    """
    Immutable description of a query.

    Absent values (None, empty selections) place no constraint.
    """
    search: Optional[str] = None
    selections: Mapping[FilterField, FrozenSet[str]] = field(default_factory=dict)
    age_min: Optional[int] = None
    age_max: Optional[int] = None
    date_start: Optional[datetime] = None
    date_end: Optional[datetime] = None
    sort_key: Optional[SortKey] = None

    def __post_init__(self) -> None:
        frozen = {
            FilterField(key): _as_values(values)
            for key, values in self.selections.items()
            if values
        }
        object.__setattr__(self, "selections", MappingProxyType(frozen))

    @classmethod
    def build(
        cls,
        search: Optional[str] = None,
        age_min: Optional[int] = None,
        age_max: Optional[int] = None,
        date_start: Optional[datetime] = None,
        date_end: Optional[datetime] = None,
        sort_key: Optional[SortKey] = None,
        **selections: Optional[Iterable[str]],
    ) -> "FilterSpec":
        """
        Convenience constructor taking selections as keyword arguments.
        A single string counts as a one-value selection.

        Example:
            FilterSpec.build(customer_region=["North"], tags=["organic"])
        """
        return cls(
            search=search,
            selections=selections,
            age_min=age_min,
            age_max=age_max,
            date_start=date_start,
            date_end=date_end,
            sort_key=sort_key,
        )

    def selected(self, filter_field: FilterField) -> FrozenSet[str]:
        """Selected values for a field (empty when unconstrained)"""
        return self.selections.get(filter_field, frozenset())


@dataclass(frozen=True)
class Predicate:
    """Named boolean test over a single record"""
    name: str
    test: Callable[[SalesRecord], bool]

    def __call__(self, record: SalesRecord) -> bool:
        return self.test(record)


class PredicateBuilder:
    """
    Compiles a FilterSpec into conjunctive predicates.

    Cheap predicates are emitted first: set membership, then ranges, then
    tags, then the substring search.

    Example:
        predicates = PredicateBuilder().build(spec)
        matches = [r for r in records if all(p(r) for p in predicates)]
    """

    def build(self, spec: FilterSpec) -> List[Predicate]:
        predicates: List[Predicate] = []

        for filter_field in _FIELD_ACCESSORS:
            values = spec.selected(filter_field)
            if values:
                predicates.append(self._membership(filter_field, values))

        age = self._age_range(spec.age_min, spec.age_max)
        if age:
            predicates.append(age)

        dates = self._date_range(spec.date_start, spec.date_end)
        if dates:
            predicates.append(dates)

        tags = spec.selected(FilterField.TAGS)
        if tags:
            predicates.append(self._tags(tags))

        search = self._search(spec.search)
        if search:
            predicates.append(search)

        return predicates

    @staticmethod
    def _membership(filter_field: FilterField, values: FrozenSet[str]) -> Predicate:
        accessor = _FIELD_ACCESSORS[filter_field]
        return Predicate(filter_field.value, lambda r: accessor(r) in values)

    @staticmethod
    def _tags(values: FrozenSet[str]) -> Predicate:
        return Predicate(FilterField.TAGS.value, lambda r: not values.isdisjoint(r.tags))

    @staticmethod
    def _age_range(age_min: Optional[int], age_max: Optional[int]) -> Optional[Predicate]:
        if age_min is None and age_max is None:
            return None
        low = AGE_MIN_DEFAULT if age_min is None else age_min
        high = AGE_MAX_DEFAULT if age_max is None else age_max
        return Predicate("age", lambda r: low <= r.age <= high)

    @staticmethod
    def _date_range(start: Optional[datetime], end: Optional[datetime]) -> Optional[Predicate]:
        if start is None and end is None:
            return None
        low = DATE_START_DEFAULT if start is None else start
        high = DATE_END_DEFAULT if end is None else end
        return Predicate("date", lambda r: low <= r.date <= high)

    @staticmethod
    def _search(search: Optional[str]) -> Optional[Predicate]:
        if not search or not search.strip():
            return None
        needle = search.strip()
        folded = needle.casefold()
        return Predicate(
            "search",
            lambda r: folded in r.customer_name.casefold() or needle in r.phone_number,
        )


def build_predicates(spec: FilterSpec) -> List[Predicate]:
    """Shortcut for PredicateBuilder().build(spec)"""
    return PredicateBuilder().build(spec)
