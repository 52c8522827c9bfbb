"""Tests for add-on selection parsing and catalog resolution."""

from decimal import Decimal

from tiketloka.schemas.destination import AddOn
from tiketloka.utils.addons import (
    normalize_id,
    parse_addon_selection,
    resolve_selected_addons,
    same_selection,
)

CATALOG = [AddOn(id=1, name="Lunch"), AddOn(id=2, name="Jeep"), AddOn(id=3, name="Horse")]


def _ids(addons):
    return [addon.id for addon in addons]


class TestParseSelection:
    def test_native_list(self):
        assert parse_addon_selection([1, 2]) == ["1", "2"]

    def test_json_string(self):
        assert parse_addon_selection("[1, 2]") == ["1", "2"]

    def test_double_encoded_string(self):
        assert parse_addon_selection('"[3]"') == ["3"]

    def test_empty_and_missing(self):
        assert parse_addon_selection(None) == []
        assert parse_addon_selection("") == []
        assert parse_addon_selection("   ") == []
        assert parse_addon_selection([]) == []

    def test_malformed_json_is_empty(self):
        assert parse_addon_selection("[1, 2") == []
        assert parse_addon_selection("lunch") == []

    def test_non_list_json_is_empty(self):
        assert parse_addon_selection('{"id": 1}') == []
        assert parse_addon_selection("7") == []

    def test_unsupported_type_is_empty(self):
        assert parse_addon_selection(42) == []
        assert parse_addon_selection({"id": 1}) == []

    def test_drops_junk_and_duplicates(self):
        assert parse_addon_selection([1, "1", None, True, [2], 1.0, " 3 "]) == ["1", "3"]


class TestNormalizeId:
    def test_numbers_and_strings_agree(self):
        assert normalize_id(1) == normalize_id("1") == normalize_id(1.0) == normalize_id(Decimal("1"))

    def test_non_integral_float(self):
        assert normalize_id(1.5) == "1.5"

    def test_rejects_unusable(self):
        assert normalize_id(None) is None
        assert normalize_id(False) is None
        assert normalize_id(float("nan")) is None
        assert normalize_id("") is None


class TestResolve:
    def test_string_number_tolerance(self):
        assert _ids(resolve_selected_addons(CATALOG, [1, "2"])) == [1, 2]

    def test_catalog_order_not_selection_order(self):
        assert _ids(resolve_selected_addons(CATALOG, "[3, 1]")) == [1, 3]

    def test_unknown_ids_dropped(self):
        assert _ids(resolve_selected_addons(CATALOG, [2, 99, "x"])) == [2]

    def test_string_ids_in_catalog(self):
        catalog = [AddOn(id="1", name="Lunch"), AddOn(id="2", name="Jeep")]
        assert _ids(resolve_selected_addons(catalog, [2])) == ["2"]

    def test_dict_catalog_entries(self):
        catalog = [{"id": 1, "name": "Lunch"}, {"id": 2, "name": "Jeep"}]
        assert resolve_selected_addons(catalog, "[2]") == [{"id": 2, "name": "Jeep"}]

    def test_missing_catalog(self):
        assert resolve_selected_addons(None, [1]) == []
        assert resolve_selected_addons([], [1]) == []

    def test_resolution_is_idempotent(self):
        first = resolve_selected_addons(CATALOG, '[2, 3, 8]')
        second = resolve_selected_addons(CATALOG, _ids(first))
        assert second == first


def test_same_selection_ignores_order_and_encoding():
    assert same_selection("[2, 1]", [1, "2"])
    assert not same_selection([1], [1, 2])
    assert same_selection(None, "[]")
