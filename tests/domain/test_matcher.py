"""Tests for fuzzy entity-name resolution.

The cases below pin the similarity measure and the default threshold
against the shipped catalog; changing either must update them.
"""

from __future__ import annotations

import pytest

from d365mcp.domain.catalog import DEFAULT_ENTITIES
from d365mcp.domain.matcher import DEFAULT_THRESHOLD, EntityMatcher, similarity
from d365mcp.domain.registry import EntityRegistry


@pytest.fixture
def matcher() -> EntityMatcher:
    return EntityMatcher(EntityRegistry.default())


class TestSimilarity:
    def test_equal_ignoring_case(self) -> None:
        assert similarity("CustomersV3", "customersv3") == 1.0

    def test_empty_is_zero(self) -> None:
        assert similarity("", "CustomersV3") == 0.0
        assert similarity("   ", "CustomersV3") == 0.0

    def test_near_miss_scores_high(self) -> None:
        assert similarity("CustomerV3", "CustomersV3") == pytest.approx(20 / 21)

    def test_lookalike_without_shared_word_scores_low(self) -> None:
        # "orders" and "workers" share most letters but no word
        assert similarity("orders", "Workers") < DEFAULT_THRESHOLD

    def test_plural_and_singular_words_cover_each_other(self) -> None:
        assert similarity("vendor", "VendorsV2") == pytest.approx(0.8)
        assert similarity("SalesOrderHeaders", "SalesOrderHeadersV2") == similarity(
            "SalesOrderHeaders", "SalesOrderHeadersV4"
        )

    def test_unmentioned_words_lower_the_score(self) -> None:
        assert similarity("Invoices", "SalesInvoiceLines") < DEFAULT_THRESHOLD

    def test_separators_are_ignored(self) -> None:
        assert similarity("sales order headers", "SalesOrderHeadersV2") == similarity(
            "SalesOrderHeaders", "SalesOrderHeadersV2"
        )


class TestResolve:
    @pytest.mark.parametrize("name", sorted(DEFAULT_ENTITIES))
    def test_every_catalog_entry_resolves_to_itself(
        self, matcher: EntityMatcher, name: str
    ) -> None:
        assert matcher.resolve(name) == name

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("customersv3", "CustomersV3"),
            ("CUSTOMERSV3", "CustomersV3"),
            ("CustomerV3", "CustomersV3"),
            ("ReleasedProduct", "ReleasedProductsV2"),
            ("vendor", "VendorsV2"),
            ("SalesOrderHeaders", "SalesOrderHeadersV2"),
            ("  SystemUsers  ", "SystemUsers"),
        ],
    )
    def test_regression_cases(self, matcher: EntityMatcher, raw: str, expected: str) -> None:
        assert matcher.resolve(raw) == expected

    @pytest.mark.parametrize("raw", ["xyzzy", "qqqqqqqq", "", "   "])
    def test_unrelated_input_not_found(self, matcher: EntityMatcher, raw: str) -> None:
        assert matcher.resolve(raw) is None

    @pytest.mark.parametrize("raw", ["orders", "Invoices"])
    def test_short_partial_name_does_not_pick_unrelated_entity(
        self, matcher: EntityMatcher, raw: str
    ) -> None:
        assert matcher.resolve(raw) is None

    def test_partial_name_with_shared_words_resolves(self, matcher: EntityMatcher) -> None:
        assert matcher.resolve("Customer") == "CustomersV3"
        assert matcher.resolve("Currency") == "Currencies"

    def test_mistyped_name_against_small_registry(self) -> None:
        matcher = EntityMatcher(EntityRegistry.from_names(["CustomersV3", "VendorsV2"]))
        assert matcher.resolve("CustomerV3") == "CustomersV3"

    def test_threshold_is_configurable(self) -> None:
        strict = EntityMatcher(EntityRegistry.default(), threshold=0.99)
        assert strict.resolve("CustomerV3") is None
        assert strict.resolve("customersv3") == "CustomersV3"

    def test_resolution_is_deterministic(self, matcher: EntityMatcher) -> None:
        results = {matcher.resolve("SalesOrderHeaders") for _ in range(20)}
        assert results == {"SalesOrderHeadersV2"}


class TestCandidates:
    def test_ties_break_on_length_then_name(self, matcher: EntityMatcher) -> None:
        ranked = matcher.candidates("SalesOrderHeaders", limit=2)
        assert [name for name, _ in ranked] == ["SalesOrderHeadersV2", "SalesOrderHeadersV4"]
        assert ranked[0][1] == ranked[1][1]

    def test_all_above_threshold(self, matcher: EntityMatcher) -> None:
        ranked = matcher.candidates("customer", limit=10)
        assert ranked
        assert all(score >= DEFAULT_THRESHOLD for _, score in ranked)
        scores = [score for _, score in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_blank_input_has_no_candidates(self, matcher: EntityMatcher) -> None:
        assert matcher.candidates("  ") == []

    def test_non_positive_limit_has_no_candidates(self, matcher: EntityMatcher) -> None:
        assert matcher.candidates("customer", limit=0) == []
        assert matcher.candidates("customer", limit=-1) == []
