"""
Facet Deriver

Builds the filter-option vocabulary (distinct values per filterable field
plus the observed age range) in one pass over the store, behind a TTL cache.
An empty store yields a fixed representative vocabulary so filter panels
stay populated before data arrives.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Set, Tuple

from src.engine.filters import FilterField, field_value
from src.engine.records import SalesRecord
from src.engine.store import RecordStore
from src.serving.cache import CacheManager


DEFAULT_AGE_RANGE = (18, 65)
FACET_CACHE_TTL_SECONDS = 300

_VOCABULARY_KEY = "vocabulary"


@dataclass(frozen=True)
class AgeRange:
    min: int
    max: int


@dataclass(frozen=True)
class FacetVocabulary:
    """Sorted distinct values per filterable field"""
    customer_region: Tuple[str, ...] = ()
    gender: Tuple[str, ...] = ()
    product_category: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    payment_method: Tuple[str, ...] = ()
    customer_type: Tuple[str, ...] = ()
    order_status: Tuple[str, ...] = ()
    brand: Tuple[str, ...] = ()
    age_range: AgeRange = field(default_factory=lambda: AgeRange(*DEFAULT_AGE_RANGE))

    def values_for(self, filter_field: FilterField) -> Tuple[str, ...]:
        return getattr(self, filter_field.value)


FALLBACK_VOCABULARY = FacetVocabulary(
    customer_region=("Central", "East", "North", "South", "West"),
    gender=("Female", "Male"),
    product_category=("Beauty", "Clothing", "Electronics"),
    tags=(
        "accessories", "beauty", "casual", "cotton", "fashion", "formal",
        "fragrance-free", "gadgets", "makeup", "organic", "portable",
        "skincare", "smart", "unisex", "wireless",
    ),
    payment_method=("Cash", "Credit Card", "Debit Card", "Net Banking", "UPI", "Wallet"),
    customer_type=("Loyal", "New", "Returning"),
    order_status=("Cancelled", "Completed", "Pending", "Returned"),
    brand=(
        "ComfortLine", "CyberCore", "EliteWear", "GlowEssence", "NovaGear",
        "PureBloom", "SilkSkin", "StreetLayer", "TechPulse", "UrbanWeave",
        "VelvetTouch", "VoltEdge",
    ),
    age_range=AgeRange(*DEFAULT_AGE_RANGE),
)


def compute_facets(records: Iterable[SalesRecord]) -> FacetVocabulary:
    """Single-pass vocabulary derivation; fallback when there are no records."""
    single_fields = [f for f in FilterField if f is not FilterField.TAGS]
    seen: Dict[FilterField, Set[str]] = {f: set() for f in FilterField}
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    count = 0

    for record in records:
        count += 1
        for filter_field in single_fields:
            value = field_value(record, filter_field)
            if value:
                seen[filter_field].add(value)
        seen[FilterField.TAGS].update(record.tags)

        # age <= 0 means unknown
        if record.age > 0:
            min_age = record.age if min_age is None else min(min_age, record.age)
            max_age = record.age if max_age is None else max(max_age, record.age)

    if count == 0:
        return FALLBACK_VOCABULARY

    age_range = (
        AgeRange(min_age, max_age)
        if min_age is not None and max_age is not None
        else AgeRange(*DEFAULT_AGE_RANGE)
    )
    return FacetVocabulary(
        **{f.value: tuple(sorted(seen[f])) for f in FilterField},
        age_range=age_range,
    )


class FacetDeriver:
    """
    Cached facet derivation for one store.

    Example:
        deriver = FacetDeriver(CacheManager("facets", default_ttl=300))
        vocabulary = deriver.derive(store)
        deriver.invalidate()
    """

    def __init__(self, cache: Optional[CacheManager] = None):
        self.cache = cache or CacheManager("facets", default_ttl=FACET_CACHE_TTL_SECONDS)

    def derive(self, store: RecordStore) -> FacetVocabulary:
        # Not loaded yet: serve the fallback without pinning it in the cache
        if not store.is_ready:
            return FALLBACK_VOCABULARY
        return self.cache.get_or_set(_VOCABULARY_KEY, lambda: compute_facets(store.records))

    def invalidate(self) -> None:
        self.cache.invalidate_all()
