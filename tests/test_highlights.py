"""Tests for crystallized key suggestions."""

from aimkit.migration.highlights import suggest_crystallized_keys
from aimkit.schema.legacy import LegacyDocument


class TestSuggestCrystallizedKeys:
    """Tests for suggest_crystallized_keys."""

    def test_typical_document(self, legacy_document: LegacyDocument) -> None:
        assert suggest_crystallized_keys(legacy_document) == ["primary_traits", "alignment"]

    def test_all_keys_in_fixed_order(self, rich_legacy_document: LegacyDocument) -> None:
        assert suggest_crystallized_keys(rich_legacy_document) == [
            "primary_traits",
            "special_powers",
            "alignment",
        ]

    def test_nothing_populated(self, empty_legacy_document: LegacyDocument) -> None:
        assert suggest_crystallized_keys(empty_legacy_document) == []

    def test_special_powers_without_alignment(
        self, empty_legacy_document: LegacyDocument
    ) -> None:
        empty_legacy_document.abilities.special_powers = ["flight"]
        assert suggest_crystallized_keys(empty_legacy_document) == ["special_powers"]
