"""Tests for catalog types and parsing helpers."""

import pytest
from mixradio.models.response import Response
from mixradio.models.types import Category, Page, Product, parse_catalog_item, parse_product_page
from mixradio.parsing import parse_enum_or_default, parse_json_object


class TestParseEnumOrDefault:
    """Tests for parse_enum_or_default."""

    def test_matches_name_ignoring_case(self):
        assert parse_enum_or_default(Category, "Album", Category.UNKNOWN) is Category.ALBUM

    def test_matches_value(self):
        assert parse_enum_or_default(Category, "SINGLE", Category.UNKNOWN) is Category.SINGLE

    def test_default_for_unknown_or_none(self):
        assert parse_enum_or_default(Category, "podcast", Category.UNKNOWN) is Category.UNKNOWN
        assert parse_enum_or_default(Category, None, Category.TRACK) is Category.TRACK


class TestParseJsonObject:
    def test_rejects_non_objects(self):
        with pytest.raises(ValueError):
            parse_json_object("[1, 2]")

    def test_dates_stay_strings(self):
        data = parse_json_object('{"releasedate": "2013-05-01T00:00:00+01:00"}')
        assert data["releasedate"] == "2013-05-01T00:00:00+01:00"


class TestPage:
    """Tests for Page parsing."""

    def test_paging_read(self):
        page = parse_product_page(
            '{"paging": {"startindex": 10, "itemsperpage": 2, "total": 40},'
            ' "items": [{"id": "1", "name": "A"}, {"id": "2", "name": "B"}]}'
        )

        assert [p.id for p in page.items] == ["1", "2"]
        assert page.start_index == 10
        assert page.items_per_page == 2
        assert page.total_results == 40

    def test_paging_defaults(self):
        page = Page.from_json('{"items": [{"id": "1", "name": "A"}, "junk"]}', Product.from_json)

        assert len(page.items) == 1
        assert page.total_results == 1
        assert page.start_index == 0

    def test_category_as_string(self):
        item = parse_catalog_item({"id": "5", "name": "Song", "category": "track"})
        assert isinstance(item, Product)
        assert item.category is Category.TRACK


class TestResponse:
    """Tests for Response states."""

    def test_success(self):
        response = Response(status_code=200, result=[1])
        assert response.succeeded is True
        assert response.is_transient is False

    def test_failure(self):
        response = Response(status_code=500, error=RuntimeError("x"))
        assert response.succeeded is False
        assert response.is_transient is False

    def test_transient(self):
        assert Response(status_code=404).is_transient is True
