"""
Unit Tests - Filter Specification and Predicates
"""
from datetime import datetime

import pytest

from src.engine.filters import FilterField, FilterSpec, PredicateBuilder, SortKey, build_predicates


class TestFilterSpec:
    """Tests for FilterSpec"""

    def test_empty_selections_are_dropped(self):
        """Test empty selections place no constraint"""
        spec = FilterSpec.build(customer_region=[], gender=None, brand=["TechPulse"])

        assert set(spec.selections) == {FilterField.BRAND}
        assert spec.selected(FilterField.GENDER) == frozenset()

    def test_selections_are_immutable(self):
        """Test the selection mapping cannot be mutated"""
        spec = FilterSpec.build(tags=["organic"])

        with pytest.raises(TypeError):
            spec.selections[FilterField.BRAND] = frozenset({"x"})

    def test_string_keys_are_coerced(self):
        """Test plain string keys become FilterField members"""
        spec = FilterSpec(selections={"gender": ["Male"]})
        assert spec.selected(FilterField.GENDER) == frozenset({"Male"})

    def test_single_string_selection(self, make_record):
        """Test a bare string is one value, not its characters"""
        spec = FilterSpec.build(gender="Female")

        assert spec.selected(FilterField.GENDER) == frozenset({"Female"})
        assert FilterSpec(selections={"brand": "TechPulse"}).selected(FilterField.BRAND) == frozenset({"TechPulse"})
        (predicate,) = build_predicates(spec)
        assert predicate(make_record(gender="Female"))
        assert not predicate(make_record(gender="Male"))

    def test_unknown_field_rejected(self):
        """Test unknown field names raise"""
        with pytest.raises(ValueError):
            FilterSpec.build(favourite_colour=["blue"])


class TestSortKey:
    """Tests for SortKey parsing"""

    @pytest.mark.parametrize("raw,expected", [
        ("date_desc", SortKey.DATE_DESC),
        ("quantity", SortKey.QUANTITY),
        ("customer_name", SortKey.CUSTOMER_NAME),
        ("amount_desc", SortKey.AMOUNT_DESC),
        ("price_asc", None),
        ("", None),
        (None, None),
    ])
    def test_parse(self, raw, expected):
        """Test unknown keys mean no ordering"""
        assert SortKey.parse(raw) is expected


class TestPredicateBuilder:
    """Tests for PredicateBuilder"""

    def test_no_constraints_no_predicates(self):
        """Test an empty spec yields nothing to check"""
        assert PredicateBuilder().build(FilterSpec()) == []

    def test_predicate_order(self):
        """Test membership first, then ranges, tags, and search"""
        spec = FilterSpec.build(
            search="ali",
            age_min=18,
            date_end=datetime(2023, 1, 1),
            tags=["organic"],
            brand=["TechPulse"],
            customer_region=["North"],
        )

        names = [p.name for p in build_predicates(spec)]

        assert names == ["customer_region", "brand", "age", "date", "tags", "search"]

    def test_membership_is_case_sensitive(self, make_record):
        """Test categorical matching is exact"""
        (predicate,) = build_predicates(FilterSpec.build(customer_region=["north"]))

        assert not predicate(make_record(customer_region="North"))
        assert predicate(make_record(customer_region="north"))

    def test_membership_or_within_field(self, make_record):
        """Test any selected value matches"""
        (predicate,) = build_predicates(FilterSpec.build(gender=["Male", "Female"]))
        assert predicate(make_record(gender="Male"))
        assert predicate(make_record(gender="Female"))
        assert not predicate(make_record(gender="Other"))

    def test_age_range_inclusive_with_open_bounds(self, make_record):
        """Test age bounds are inclusive and default when absent"""
        (at_least,) = build_predicates(FilterSpec.build(age_min=30))
        (between,) = build_predicates(FilterSpec.build(age_min=30, age_max=40))

        assert at_least(make_record(age=30))
        assert at_least(make_record(age=120))
        assert not at_least(make_record(age=29))
        assert between(make_record(age=40))
        assert not between(make_record(age=41))

    def test_date_range_inclusive(self, make_record):
        """Test date bounds are inclusive"""
        (predicate,) = build_predicates(FilterSpec.build(
            date_start=datetime(2023, 1, 1),
            date_end=datetime(2023, 1, 31),
        ))

        assert predicate(make_record(date=datetime(2023, 1, 1)))
        assert predicate(make_record(date=datetime(2023, 1, 31)))
        assert not predicate(make_record(date=datetime(2023, 2, 1)))

    def test_tags_intersection(self, make_record):
        """Test a record matches if it carries any selected tag"""
        (predicate,) = build_predicates(FilterSpec.build(tags=["organic", "wireless"]))

        assert predicate(make_record(tags={"beauty", "organic"}))
        assert not predicate(make_record(tags={"beauty"}))
        assert not predicate(make_record(tags=set()))

    def test_search_name_case_insensitive(self, make_record):
        """Test search matches customer names ignoring case"""
        (predicate,) = build_predicates(FilterSpec.build(search="  SMITH "))

        assert predicate(make_record(customer_name="Alice Smith"))
        assert not predicate(make_record(customer_name="Alice Jones", phone_number="000"))

    def test_search_phone_substring(self, make_record):
        """Test search matches phone number substrings"""
        (predicate,) = build_predicates(FilterSpec.build(search="4321"))

        assert predicate(make_record(customer_name="Nobody", phone_number="9998765432100"))
        assert not predicate(make_record(customer_name="Nobody", phone_number="1234"))

    def test_blank_search_ignored(self):
        """Test whitespace-only search adds no predicate"""
        assert build_predicates(FilterSpec.build(search="   ")) == []
