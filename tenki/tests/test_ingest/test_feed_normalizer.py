"""Tests for feed normalization: attribute discovery, alignment, failures."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from tenki.tests.feed_builders import make_feed, make_series
from tenki.ingest.feed_normalizer import (
    AttributeLocator,
    MalformedFeedError,
    normalize,
    parse_timestamp,
)

T0 = "2024-05-01T11:00:00+09:00"
T1 = "2024-05-02T00:00:00+09:00"
T2 = "2024-05-03T00:00:00+09:00"
JST = timezone(timedelta(hours=9))


class TestNormalizeFixture:
    def test_record_count_and_order(self, osaka_feed_text: str):
        records = normalize(osaka_feed_text)
        assert len(records) == 3
        assert [r.timestamp.day for r in records] == [1, 2, 3]

    def test_primary_series_attributes(self, osaka_feed_text: str):
        first = normalize(osaka_feed_text)[0]
        assert first.timestamp == datetime(2024, 5, 1, 11, 0, tzinfo=JST)
        assert first.weather_text == "晴れ　時々　くもり"
        assert first.wind == "北の風　やや強く"
        assert first.wave == "０．５メートル"

    def test_pops_from_later_series(self, osaka_feed_text: str):
        records = normalize(osaka_feed_text)
        assert [r.precipitation_probability for r in records] == [None, "10%", "60%"]

    def test_reliability_absent_from_primary_group(self, osaka_feed_text: str):
        # reliabilities only appear in the second (weekly) group
        records = normalize(osaka_feed_text)
        assert all(r.reliability is None for r in records)

    def test_weekly_feed_reliabilities(self, weekly_feed_text: str):
        records = normalize(weekly_feed_text)
        assert len(records) == 8
        assert records[2].reliability == "A"
        assert records[0].reliability is None
        assert records[1].precipitation_probability == "80%"
        assert all(r.wind is None and r.wave is None for r in records)

    def test_idempotent(self, osaka_feed_text: str):
        assert normalize(osaka_feed_text) == normalize(osaka_feed_text)


class TestSlotCap:
    def test_cap_limits_records(self, weekly_feed_text: str):
        records = normalize(weekly_feed_text, max_slots=7)
        assert len(records) == 7
        assert records[-1].weather_text == "雪"

    def test_short_cap(self, weekly_feed_text: str):
        assert len(normalize(weekly_feed_text, max_slots=3)) == 3

    def test_cap_larger_than_series(self, osaka_feed_text: str):
        assert len(normalize(osaka_feed_text, max_slots=7)) == 3

    def test_zero_cap(self, osaka_feed_text: str):
        assert normalize(osaka_feed_text, max_slots=0) == []

    def test_negative_cap_rejected(self, osaka_feed_text: str):
        with pytest.raises(ValueError):
            normalize(osaka_feed_text, max_slots=-1)


class TestPositionalAlignment:
    def test_scenario_short_winds_and_later_pops(self):
        raw = make_feed(
            make_series(
                [T0, T1, T2],
                weathers=["Sunny", "Cloudy", "Rainy"],
                winds=["Calm", "Calm"],
            ),
            make_series([T0, T1, T2], pops=["10", "40", "80"]),
        )
        records = normalize(raw)
        summary = [
            (r.weather_text, r.wind, r.wave, r.precipitation_probability)
            for r in records
        ]
        assert summary == [
            ("Sunny", "Calm", None, "10%"),
            ("Cloudy", "Calm", None, "40%"),
            ("Rainy", None, None, "80%"),
        ]

    def test_no_winds_anywhere(self):
        raw = make_feed(
            make_series([T0, T1], weathers=["晴れ", "雨"]),
            make_series([T0, T1], pops=["0", "90"]),
        )
        assert all(r.wind is None for r in normalize(raw))

    def test_pops_sourced_from_series_two_only(self):
        raw = make_feed(
            make_series([T0, T1, T2], weathers=["a", "b", "c"]),
            make_series([T0], temps=["20"]),
            make_series([T0, T1, T2], pops=["5", "15", "25"]),
        )
        records = normalize(raw)
        assert [r.precipitation_probability for r in records] == ["5%", "15%", "25%"]

    def test_first_series_wins_for_duplicate_attribute(self):
        raw = make_feed(
            make_series([T0, T1], weathers=["a", "b"]),
            make_series([T0, T1], pops=["10", "20"]),
            make_series([T0, T1], pops=["90", "90"]),
        )
        records = normalize(raw)
        assert [r.precipitation_probability for r in records] == ["10%", "20%"]

    def test_extra_secondary_slots_ignored(self):
        raw = make_feed(
            make_series([T0], weathers=["a"], winds=["w0", "w1", "w2"]),
        )
        records = normalize(raw)
        assert len(records) == 1
        assert records[0].wind == "w0"

    def test_null_and_empty_values_become_absent(self):
        raw = make_feed(
            make_series([T0, T1], weathers=["a", "b"], waves=[None, ""]),
            make_series([T0, T1], pops=["", "30"], reliabilities=["", "B"]),
        )
        first, second = normalize(raw)
        assert first.wave is None and second.wave is None
        assert first.precipitation_probability is None
        assert second.precipitation_probability == "30%"
        assert first.reliability is None
        assert second.reliability == "B"

    def test_series_without_areas_skipped(self):
        raw = make_feed(
            make_series([T0], weathers=["a"]),
            {"timeDefines": [T0]},
            make_series([T0], winds=["北の風"]),
        )
        assert normalize(raw)[0].wind == "北の風"


class TestMalformedFeed:
    def test_invalid_json(self):
        with pytest.raises(MalformedFeedError) as exc_info:
            normalize("{not json")
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    def test_top_level_object(self):
        with pytest.raises(MalformedFeedError):
            normalize('{"timeSeries": []}')

    def test_empty_array(self):
        with pytest.raises(MalformedFeedError):
            normalize("[]")

    def test_missing_time_series(self):
        with pytest.raises(MalformedFeedError):
            normalize('[{"publishingOffice": "気象庁"}]')

    def test_missing_time_defines(self):
        raw = make_feed(make_series(None, weathers=["a"]))
        with pytest.raises(MalformedFeedError):
            normalize(raw)

    def test_missing_weathers(self):
        raw = make_feed(make_series([T0], winds=["w"]))
        with pytest.raises(MalformedFeedError):
            normalize(raw)

    def test_weathers_shorter_than_time_defines(self):
        raw = make_feed(make_series([T0, T1, T2], weathers=["a", "b"]))
        with pytest.raises(MalformedFeedError):
            normalize(raw)

    def test_weathers_in_later_series_not_used(self):
        raw = make_feed(
            make_series([T0], winds=["w"]),
            make_series([T0], weathers=["a"]),
        )
        with pytest.raises(MalformedFeedError):
            normalize(raw)

    def test_bad_timestamp_fails_whole_call(self):
        raw = make_feed(
            make_series([T0, "tomorrow", T2], weathers=["a", "b", "c"])
        )
        with pytest.raises(MalformedFeedError):
            normalize(raw)

    def test_bad_timestamp_outside_cap_ignored(self):
        raw = make_feed(
            make_series([T0, T1, "tomorrow"], weathers=["a", "b", "c"])
        )
        assert len(normalize(raw, max_slots=2)) == 2


class TestAttributeLocator:
    def test_records_source_series(self):
        series = [
            make_series([T0], weathers=["a"], winds=["w"], waves=["v"]),
            make_series([T0], pops=["10"]),
            make_series([T0], pops=["20"], reliabilities=["A"]),
        ]
        locator = AttributeLocator.build(series)
        assert locator.describe() == {
            "winds": 0,
            "waves": 0,
            "pops": 1,
            "reliabilities": 2,
        }

    def test_absent_attribute(self):
        locator = AttributeLocator.build([make_series([T0], weathers=["a"])])
        assert locator.source_for("winds") is None
        assert locator.value("winds", 0) is None

    def test_out_of_range_value(self):
        locator = AttributeLocator.build([make_series([T0], winds=["w"])])
        assert locator.value("winds", 0) == "w"
        assert locator.value("winds", 1) is None

    def test_non_list_attribute_ignored(self):
        locator = AttributeLocator.build([
            make_series([T0], winds="north"),
            make_series([T0], winds=["south"]),
        ])
        assert locator.source_for("winds").series_index == 1


class TestParseTimestamp:
    def test_offset(self):
        ts = parse_timestamp("2024-05-01T11:00:00+09:00")
        assert ts.utcoffset() == timedelta(hours=9)

    def test_zulu(self):
        ts = parse_timestamp("2024-05-01T02:00:00Z")
        assert ts == datetime(2024, 5, 1, 2, 0, tzinfo=timezone.utc)

    def test_non_string(self):
        with pytest.raises(MalformedFeedError):
            parse_timestamp(20240501)

    def test_date_only_rejected(self):
        with pytest.raises(MalformedFeedError):
            parse_timestamp("2024-05-01")

    def test_date_only_time_define_fails_normalize(self):
        raw = make_feed(make_series(["2024-05-01"], weathers=["a"]))
        with pytest.raises(MalformedFeedError):
            normalize(raw)
