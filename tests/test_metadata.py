"""Tests for sitepipe.content.metadata — total coercion into PageMetadata."""

from datetime import datetime, timedelta, timezone

import pytest

from sitepipe.content.metadata import (
    coerce_bool,
    coerce_date,
    coerce_str,
    coerce_str_list,
    extract_metadata,
)


class TestCoercion:
    def test_str(self):
        assert coerce_str("x") == "x"
        assert coerce_str(42) == ""
        assert coerce_str(None) == ""

    def test_bool(self):
        assert coerce_bool(True) is True
        assert coerce_bool("true") is False
        assert coerce_bool(1) is False

    def test_str_list_coerces_elements_independently(self):
        assert coerce_str_list(["a", 1, None, "b"]) == ["a", "", "", "b"]

    def test_str_list_defaults(self):
        assert coerce_str_list("a,b") == []
        assert coerce_str_list(None) == []


class TestCoerceDate:
    def test_full_timestamp_with_zulu(self):
        assert coerce_date("2024-01-02T03:04:05Z") == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_full_timestamp_with_offset(self):
        parsed = coerce_date("2024-01-02T03:04:05+02:00")
        assert parsed.utcoffset() == timedelta(hours=2)
        assert parsed.hour == 3

    def test_naive_timestamp_is_utc(self):
        assert coerce_date("2024-01-02T03:04:05").tzinfo == timezone.utc

    def test_calendar_date(self):
        assert coerce_date("2024-01-02") == datetime(2024, 1, 2, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", ["yesterday", "2024-13-45", 20240101, None, ["2024-01-01"]])
    def test_falls_back_to_now(self, value, fixed_now):
        assert coerce_date(value, fixed_now) == fixed_now()


class TestExtractMetadata:
    def test_full_document(self, fixed_now):
        meta = extract_metadata(
            {
                "title": "Hello",
                "slug": "hello",
                "summary": "Hi",
                "categories": ["news"],
                "tags": ["a", "b"],
                "date": "2024-01-01",
                "draft": True,
            },
            fixed_now,
        )
        assert meta.title == "Hello"
        assert meta.slug == "hello"
        assert meta.summary == "Hi"
        assert meta.categories == ["news"]
        assert meta.tags == ["a", "b"]
        assert meta.date == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert meta.draft is True

    def test_empty_document_uses_defaults(self, fixed_now):
        meta = extract_metadata({}, fixed_now)
        assert meta.title == ""
        assert meta.categories == []
        assert meta.draft is False
        assert meta.date == fixed_now()

    def test_mistyped_fields_never_raise(self, fixed_now):
        meta = extract_metadata(
            {"title": 12, "tags": "x", "draft": "yes", "date": {"y": 2024}},
            fixed_now,
        )
        assert meta.title == ""
        assert meta.tags == []
        assert meta.draft is False
        assert meta.date == fixed_now()

    def test_path_fields_left_for_pipeline(self):
        meta = extract_metadata({"title": "x"})
        assert meta.file_path == ""
        assert meta.subdir == ""
        assert meta.permalink == ""
