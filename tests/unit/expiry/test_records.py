"""Tests for building records and contexts from raw annotation values."""
from __future__ import annotations

from datetime import date, datetime

import pytest

from flagfit.core.exceptions import (
    FlagfitError,
    InvalidTimeZoneError,
    MalformedDateError,
    UnknownCategoryError,
)
from flagfit.core.expiry import (
    ExpiryMarker,
    FlagCategory,
    SourceLocation,
    build_context,
    build_record,
    parse_expiry_marker,
    parse_local_date,
)
from flagfit.core.expiry.records import category_from_qualified_name, find_flag_key

from helpers.records import flag_entry


class TestParseLocalDate:
    def test_parses_iso_date(self) -> None:
        assert parse_local_date("2023-01-10") == date(2023, 1, 10)
        assert parse_local_date(" 2024-02-29 ") == date(2024, 2, 29)

    @pytest.mark.parametrize("raw", ["2023/01/10", "2023-1-10", "2023-02-30", "tomorrow", "", "20230110"])
    def test_rejects_malformed_dates(self, raw: str) -> None:
        with pytest.raises(MalformedDateError) as exc_info:
            parse_local_date(raw)

        assert exc_info.value.context["raw"] == raw
        assert isinstance(exc_info.value, ValueError)


class TestParseExpiryMarker:
    @pytest.mark.parametrize("raw", [None, "", "  ", "EXPIRY_DATE_NOT_DEFINED"])
    def test_undefined_forms(self, raw) -> None:
        assert parse_expiry_marker(raw) == ExpiryMarker.undefined()

    def test_infinite_marker(self) -> None:
        assert parse_expiry_marker("EXPIRY_DATE_INFINITE").is_infinite

    def test_date_values(self) -> None:
        assert parse_expiry_marker("2023-01-10") == ExpiryMarker.on(date(2023, 1, 10))
        assert parse_expiry_marker(date(2023, 1, 10)) == ExpiryMarker.on(date(2023, 1, 10))

    def test_datetime_keeps_only_its_date(self) -> None:
        marker = parse_expiry_marker(datetime(2023, 1, 10, 9, 30))

        assert marker == ExpiryMarker.on(date(2023, 1, 10))
        assert type(marker.value) is date

    def test_malformed_date_raises(self) -> None:
        with pytest.raises(MalformedDateError):
            parse_expiry_marker("next week")


class TestCategoryMapping:
    @pytest.mark.parametrize(
        "name",
        [
            "tv.abema.flagfit.FlagType.Experiment",
            "FlagType.Experiment",
            "@FlagType.Experiment",
            "Experiment",
        ],
    )
    def test_accepted_name_forms(self, name: str) -> None:
        assert category_from_qualified_name(name) is FlagCategory.EXPERIMENT

    def test_every_category_round_trips_its_qualified_name(self) -> None:
        for category in FlagCategory:
            assert category_from_qualified_name(category.qualified_name) is category

    @pytest.mark.parametrize("name", ["tv.abema.flagfit.FlagType.Beta", "Deprecated", ""])
    def test_unknown_annotation_raises(self, name: str) -> None:
        with pytest.raises(UnknownCategoryError):
            category_from_qualified_name(name)


class TestFindFlagKey:
    def test_key_from_boolean_flag_sibling(self) -> None:
        siblings = [
            {"annotation": "kotlin.Deprecated", "key": "ignored"},
            {"annotation": "tv.abema.flagfit.annotation.BooleanFlag", "key": "new-home"},
        ]
        assert find_flag_key(siblings) == "new-home"

    def test_key_from_variation_flag_attributes(self) -> None:
        siblings = [
            {
                "annotation": "@tv.abema.flagfit.annotation.VariationFlag",
                "attributes": {"key": "layout-variation", "defaultValue": "A"},
            }
        ]
        assert find_flag_key(siblings) == "layout-variation"

    def test_no_declaration_sibling(self) -> None:
        assert find_flag_key([]) is None
        assert find_flag_key(None) is None
        assert find_flag_key([{"annotation": "kotlin.Deprecated", "key": "x"}]) is None


class TestBuildRecord:
    def test_full_entry(self) -> None:
        entry = flag_entry(location={"path": "app/Flags.kt", "line": 12})

        record = build_record(entry)

        assert record.category is FlagCategory.EXPERIMENT
        assert record.owner == "bob"
        assert record.expiry == ExpiryMarker.on(date(2023, 1, 10))
        assert record.enclosing_method_name == "newSearchUi"
        assert record.flag_key == "new-search-ui"
        assert record.source_location == SourceLocation("app/Flags.kt", 12)

    def test_explicit_key_wins_over_siblings(self) -> None:
        record = build_record(flag_entry(key="from-sibling") | {"key": "explicit"})

        assert record.flag_key == "explicit"

    def test_missing_owner_and_expiry_are_undefined(self) -> None:
        record = build_record({"annotation": "FlagType.Ops"})

        assert not record.has_owner
        assert record.expiry.is_undefined
        assert record.flag_key is None

    def test_opaque_location_is_passed_through(self) -> None:
        record = build_record(flag_entry(location="Flags.kt:12"))

        assert record.source_location == "Flags.kt:12"

    def test_malformed_date_reports_method(self) -> None:
        with pytest.raises(MalformedDateError) as exc_info:
            build_record(flag_entry(expiry_date="2023-13-01", method="oldCheckout"))

        assert exc_info.value.context == {"raw": "2023-13-01", "method": "oldCheckout"}

    def test_unknown_annotation_is_a_flagfit_error(self) -> None:
        with pytest.raises(FlagfitError):
            build_record(flag_entry(annotation="tv.abema.flagfit.FlagType.Nope"))


class TestBuildContext:
    def test_defaults(self) -> None:
        ctx = build_context()

        assert ctx.current_date is None
        assert ctx.time_zone is None
        assert ctx.warning_window_days == 7

    def test_options_are_parsed(self) -> None:
        ctx = build_context(time_zone="Asia/Tokyo", current_time="2023-01-28", warning_window_days=3)

        assert ctx.time_zone == "Asia/Tokyo"
        assert ctx.current_date == date(2023, 1, 28)
        assert ctx.warning_window_days == 3

    def test_blank_time_zone_means_system_zone(self) -> None:
        assert build_context(time_zone="  ").time_zone is None

    def test_unknown_time_zone_raises(self) -> None:
        with pytest.raises(InvalidTimeZoneError) as exc_info:
            build_context(time_zone="Mars/Olympus_Mons")

        assert exc_info.value.context == {"timeZone": "Mars/Olympus_Mons"}

    def test_malformed_current_time_raises(self) -> None:
        with pytest.raises(MalformedDateError):
            build_context(current_time="28/01/2023")
